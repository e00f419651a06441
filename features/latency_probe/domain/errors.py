from __future__ import annotations


class LatencyProbeError(Exception):
    """Base class for errors raised by the latency probe feature."""


class ConfigLoadError(LatencyProbeError):
    pass


class ConfigParseError(LatencyProbeError):
    pass


class TagPatternError(LatencyProbeError):
    pass


class NoCandidatesError(LatencyProbeError):
    pass


class SessionSetupError(LatencyProbeError):
    """The proxy client for a candidate could not be built."""

from __future__ import annotations

from typing import Iterable, List, Protocol, Sequence

from features.latency_probe.domain.models import (
    AttemptOutcome,
    Candidate,
    ProbeSession,
    ReportRow,
)
from features.latency_probe.domain.probing import InboundEntry, RouterConfigDocument


class ConfigSource(Protocol):
    def load(self) -> RouterConfigDocument:
        """Read the raw router configuration document."""


class ConfigParserStrategy(Protocol):
    name: str

    def supports(self, document: RouterConfigDocument) -> bool:
        """Return True if parser can handle the document."""

    def parse(self, document: RouterConfigDocument) -> List[InboundEntry]:
        """Extract the inbounds declared by the document."""


class CandidateFilter(Protocol):
    def select(self, inbounds: Iterable[InboundEntry]) -> List[Candidate]:
        """Return probe targets in configuration order."""


class ProbeRunner(Protocol):
    def run_session(self, port: int, attempt_count: int, *, index: int = 0) -> ProbeSession:
        """Warm up, then issue up to attempt_count timed requests through the proxy.

        Raises SessionSetupError when the proxy client cannot be built.
        """


class ProgressReporter(Protocol):
    def node_started(self, index: int, total: int, candidate: Candidate) -> None:
        """Announce the candidate about to be probed."""

    def warmup(self, index: int) -> None:
        """Announce the discarded warmup request."""

    def attempt(self, index: int, outcome: AttemptOutcome) -> None:
        """Report a single timed attempt."""

    def node_finished(self, index: int, row: ReportRow) -> None:
        """Report the classification for the candidate."""


class ReportWriter(Protocol):
    def write(self, rows: Sequence[ReportRow]) -> None:
        """Present the ranked report."""

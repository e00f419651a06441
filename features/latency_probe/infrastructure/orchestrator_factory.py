from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from features.latency_probe.application.orchestrator import LatencyProbeOrchestrator
from features.latency_probe.application.ports import ProgressReporter
from features.latency_probe.application.services import load_candidates
from features.latency_probe.domain.models import Candidate
from features.latency_probe.domain.probing import ProbeSettings

from .candidate_filter import LoopbackSocksFilter
from .config_parsers import default_parsers
from .config_source import FileConfigSource
from .progress import SilentProgressReporter
from .settings import probe_settings
from .socks_probe import RequestsSocksProbeRunner


def load_config_candidates(config_path: Path, patterns: Sequence[str] = ()) -> List[Candidate]:
    # patterns compile first so a bad one fails before the file is touched
    candidate_filter = LoopbackSocksFilter(patterns)
    return load_candidates(FileConfigSource(config_path), default_parsers(), candidate_filter)


def build_latency_orchestrator(
    *,
    settings: ProbeSettings | None = None,
    reporter: ProgressReporter | None = None,
) -> LatencyProbeOrchestrator:
    effective = settings or probe_settings()
    progress = reporter or SilentProgressReporter()
    runner = RequestsSocksProbeRunner(settings=effective, reporter=progress)
    return LatencyProbeOrchestrator(runner, progress, attempt_count=effective.attempt_count)

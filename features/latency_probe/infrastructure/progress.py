from __future__ import annotations

import sys
from typing import TextIO

from features.latency_probe.application.ports import ProgressReporter
from features.latency_probe.domain.models import AttemptOutcome, Candidate, ReportRow, Timed


class ConsoleProgressReporter(ProgressReporter):
    """Prints one line per node and per attempt while the run is in progress."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def node_started(self, index: int, total: int, candidate: Candidate) -> None:
        self._print(f"[{index}/{total}] testing node: {candidate.tag}  (port: {candidate.port})")

    def warmup(self, index: int) -> None:
        self._print("  warming up connection...")

    def attempt(self, index: int, outcome: AttemptOutcome) -> None:
        if isinstance(outcome, Timed):
            self._print(f"  ↳ attempt {outcome.index:2}: {outcome.duration_ms:6.2f} ms")
        else:
            self._print(f"  ↳ attempt {outcome.index:2}: {outcome.reason}")

    def node_finished(self, index: int, row: ReportRow) -> None:
        self._print(f"  → final latency: {row.result.describe()}\n")

    def _print(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout, flush=True)


class SilentProgressReporter(ProgressReporter):
    def node_started(self, index: int, total: int, candidate: Candidate) -> None:
        pass

    def warmup(self, index: int) -> None:
        pass

    def attempt(self, index: int, outcome: AttemptOutcome) -> None:
        pass

    def node_finished(self, index: int, row: ReportRow) -> None:
        pass

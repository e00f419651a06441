from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from features.latency_probe.domain.errors import SessionSetupError
from features.latency_probe.domain.models import Candidate, ClassifiedResult, ReportRow, SessionError

from .classifier import classify
from .ports import ProbeRunner, ProgressReporter
from .ranker import rank


@dataclass(frozen=True)
class LatencyRunResult:
    probed: int
    reachable: int
    rows: List[ReportRow]


class LatencyProbeOrchestrator:
    """Probes candidates one at a time, then ranks the collected report rows once."""

    def __init__(
        self,
        runner: ProbeRunner,
        reporter: ProgressReporter,
        *,
        attempt_count: int,
    ) -> None:
        self._runner = runner
        self._reporter = reporter
        self._attempt_count = attempt_count

    def run(self, candidates: Sequence[Candidate]) -> LatencyRunResult:
        rows: List[ReportRow] = []
        total = len(candidates)
        for index, candidate in enumerate(candidates, start=1):
            self._reporter.node_started(index, total, candidate)
            row = ReportRow(tag=candidate.tag, port=candidate.port, result=self._probe(index, candidate))
            rows.append(row)
            self._reporter.node_finished(index, row)

        ranked = rank(rows)
        reachable = sum(1 for row in ranked if row.result.kind == "success")
        return LatencyRunResult(probed=total, reachable=reachable, rows=ranked)

    def _probe(self, index: int, candidate: Candidate) -> ClassifiedResult:
        try:
            session = self._runner.run_session(candidate.port, self._attempt_count, index=index)
        except SessionSetupError as exc:
            return classify(exc, self._attempt_count)
        except Exception as exc:  # pylint: disable=broad-except
            # one broken candidate must not stop the rest of the run
            return SessionError(f"{type(exc).__name__}: {exc}")
        return classify(session, self._attempt_count)

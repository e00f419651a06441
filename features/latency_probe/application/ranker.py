from __future__ import annotations

from typing import Iterable, List

from features.latency_probe.domain.models import ReportRow, Success


def _rank_key(row: ReportRow):
    if isinstance(row.result, Success):
        return (0, row.result.median)
    return (1, 0.0)


def rank(rows: Iterable[ReportRow]) -> List[ReportRow]:
    """Successful rows by ascending median, everything else after them in probe order."""
    return sorted(rows, key=_rank_key)

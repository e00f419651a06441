from __future__ import annotations

import sys
from typing import List, Sequence, TextIO

from features.latency_probe.application.ports import ReportWriter
from features.latency_probe.domain.models import ReportRow, Success


REPORT_WIDTH = 110


def render_report(rows: Sequence[ReportRow]) -> List[str]:
    lines = [
        "=" * REPORT_WIDTH,
        f"{'rank':<4} {'port':<8} {'med':<8} {'avg':<8} {'min':<8} {'max':<8} {'tag':<45}",
        "-" * REPORT_WIDTH,
    ]
    for rank, row in enumerate(rows, start=1):
        result = row.result
        if isinstance(result, Success):
            lines.append(
                f"{rank:<4} {row.port:<8} {result.median:<8.2f} {result.average:<8.2f} "
                f"{result.minimum:<8.2f} {result.maximum:<8.2f} {row.tag:<45}"
            )
        else:
            lines.append(f"{rank:<4} {row.port:<8} {result.describe():<35} {row.tag:<45}")
    lines.append("=" * REPORT_WIDTH)
    return [line.rstrip() for line in lines]


class ConsoleReportWriter(ReportWriter):
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, rows: Sequence[ReportRow]) -> None:
        out = self._stream or sys.stdout
        for line in render_report(rows):
            print(line, file=out)

from __future__ import annotations

import argparse
import signal
import sys
from pathlib import Path
from typing import List, Optional

from features.latency_probe.domain.errors import (
    ConfigLoadError,
    ConfigParseError,
    NoCandidatesError,
    TagPatternError,
)
from features.latency_probe.infrastructure.orchestrator_factory import (
    build_latency_orchestrator,
    load_config_candidates,
)
from features.latency_probe.infrastructure.progress import ConsoleProgressReporter
from features.latency_probe.infrastructure.report_writer import ConsoleReportWriter
from features.latency_probe.infrastructure.settings import probe_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="singbox-latency",
        description="Test SingBox proxy nodes latency",
    )
    parser.add_argument("config_path", type=Path, help="Path to the SingBox config JSON file")
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Regex pattern to filter node tags; pass several to require ALL of them",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Timed requests per node (default: LATENCY_ATTEMPTS or 10)",
    )
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.attempts is not None and args.attempts < 1:
        parser.error("--attempts must be at least 1")

    try:
        candidates = load_config_candidates(args.config_path, args.patterns)
    except TagPatternError as exc:
        parser.error(str(exc))
    except (ConfigLoadError, ConfigParseError, NoCandidatesError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 0

    settings = probe_settings(args.attempts)
    print(
        f"found {len(candidates)} socks nodes, testing sequentially "
        f"({settings.attempt_count} attempts each)\n"
    )
    orchestrator = build_latency_orchestrator(settings=settings, reporter=ConsoleProgressReporter())
    result = orchestrator.run(candidates)
    ConsoleReportWriter().write(result.rows)
    return 0


def main():
    def _terminate(signum, frame):  # noqa: ARG001
        print("\ninterrupted; no results kept", file=sys.stderr)
        sys.exit(128 + signum)

    signal.signal(signal.SIGTERM, _terminate)
    signal.signal(signal.SIGINT, _terminate)

    sys.exit(run())


if __name__ == "__main__":
    main()

from features.latency_probe.application.orchestrator import LatencyProbeOrchestrator
from features.latency_probe.domain.errors import SessionSetupError
from features.latency_probe.domain.models import (
    AllFailed,
    Candidate,
    SessionError,
    Success,
    Unstable,
)

from fakes import RecordingReporter, ScriptedRunner, timed, timed_then_failed


CANDIDATES = [
    Candidate("slow", 20001),
    Candidate("broken", 20002),
    Candidate("fast", 20003),
    Candidate("shaky", 20004),
    Candidate("dead", 20005),
]


def _runner():
    return ScriptedRunner(
        {
            20001: timed(80.0, 90.0, 100.0),
            20002: SessionSetupError("Failed to create proxy: bad"),
            20003: timed(10.0, 12.0, 11.0, 13.0),
            20004: timed_then_failed(40.0),
            20005: [],
        }
    )


def test_every_candidate_gets_exactly_one_row():
    runner = _runner()
    result = LatencyProbeOrchestrator(runner, RecordingReporter(), attempt_count=10).run(CANDIDATES)

    assert result.probed == 5
    assert result.reachable == 2
    assert sorted(row.tag for row in result.rows) == sorted(c.tag for c in CANDIDATES)


def test_rows_are_ranked_after_probing():
    result = LatencyProbeOrchestrator(_runner(), RecordingReporter(), attempt_count=10).run(CANDIDATES)

    assert [row.tag for row in result.rows[:2]] == ["fast", "slow"]
    assert result.rows[0].result == Success(median=12.0, average=11.5, minimum=10.0, maximum=13.0)
    by_tag = {row.tag: row.result for row in result.rows}
    assert by_tag["broken"] == SessionError("Failed to create proxy: bad")
    assert by_tag["shaky"] == Unstable(valid_count=1, total_count=10)
    assert by_tag["dead"] == AllFailed()


def test_candidates_are_probed_in_order_one_at_a_time():
    runner = _runner()
    reporter = RecordingReporter()
    LatencyProbeOrchestrator(runner, reporter, attempt_count=7).run(CANDIDATES)

    assert runner.calls == [(i, c.port, 7) for i, c in enumerate(CANDIDATES, start=1)]
    lifecycle = [e for e in reporter.events if e[0] in ("start", "finish")]
    expected = []
    for i, c in enumerate(CANDIDATES, start=1):
        expected.append(("start", i, 5, c.tag))
        expected.append(("finish", i, c.tag))
    assert [e[:4] if e[0] == "start" else e[:3] for e in lifecycle] == expected


def test_unexpected_runner_error_is_localised():
    runner = ScriptedRunner(
        {
            1: RuntimeError("worker exploded"),
            2: timed(5.0, 6.0, 7.0),
        }
    )
    result = LatencyProbeOrchestrator(runner, RecordingReporter(), attempt_count=3).run(
        [Candidate("bad", 1), Candidate("good", 2)]
    )

    assert [row.tag for row in result.rows] == ["good", "bad"]
    assert result.rows[1].result == SessionError("RuntimeError: worker exploded")


def test_duplicate_tags_are_kept():
    runner = ScriptedRunner({1: [], 2: []})
    result = LatencyProbeOrchestrator(runner, RecordingReporter(), attempt_count=10).run(
        [Candidate("same", 1), Candidate("same", 2)]
    )
    assert [(row.tag, row.port) for row in result.rows] == [("same", 1), ("same", 2)]

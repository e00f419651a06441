import itertools

import pytest

from features.latency_probe.application.ranker import rank
from features.latency_probe.domain.models import (
    AllFailed,
    ReportRow,
    SessionError,
    Success,
    Unstable,
)


FAST = ReportRow("fast", 1, Success(median=5.0, average=6.0, minimum=4.0, maximum=9.0))
SLOW = ReportRow("slow", 2, Success(median=20.0, average=21.0, minimum=18.0, maximum=30.0))
DEAD = ReportRow("dead", 3, AllFailed())


@pytest.mark.parametrize("order", list(itertools.permutations([FAST, SLOW, DEAD])))
def test_successes_by_median_then_failures(order):
    assert rank(order) == [FAST, SLOW, DEAD]


def test_no_failure_ranks_ahead_of_a_success():
    rows = [
        ReportRow("err", 10, SessionError("bad")),
        ReportRow("shaky", 11, Unstable(2, 10)),
        ReportRow("ok", 12, Success(median=900.0, average=900.0, minimum=900.0, maximum=900.0)),
        ReportRow("dead", 13, AllFailed()),
    ]
    ranked = rank(rows)
    assert ranked[0].tag == "ok"
    assert {row.tag for row in ranked[1:]} == {"err", "shaky", "dead"}


def test_failures_keep_probe_order():
    rows = [
        ReportRow("a", 1, AllFailed()),
        ReportRow("b", 2, SessionError("x")),
        ReportRow("c", 3, Unstable(1, 10)),
    ]
    assert [row.tag for row in rank(rows)] == ["a", "b", "c"]


def test_rank_does_not_mutate_input():
    rows = [DEAD, SLOW, FAST]
    rank(rows)
    assert rows == [DEAD, SLOW, FAST]

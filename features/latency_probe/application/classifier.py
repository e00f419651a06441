from __future__ import annotations

from typing import Union

from features.latency_probe.domain.errors import SessionSetupError
from features.latency_probe.domain.models import (
    AllFailed,
    ClassifiedResult,
    ProbeSession,
    SessionError,
    Success,
    Unstable,
)


MIN_VALID_SAMPLES = 3


def classify(
    session_result: Union[ProbeSession, SessionSetupError],
    total_attempts_configured: int,
) -> ClassifiedResult:
    """Reduce a probe session, or the error that prevented it, to a single verdict."""
    if isinstance(session_result, SessionSetupError):
        return SessionError(str(session_result))

    durations = session_result.valid_durations()
    if not durations:
        return AllFailed()
    if len(durations) < MIN_VALID_SAMPLES:
        return Unstable(valid_count=len(durations), total_count=total_attempts_configured)

    ordered = sorted(durations)
    # upper-middle element for even counts, no interpolation
    median = ordered[len(ordered) // 2]
    average = sum(ordered) / len(ordered)
    return Success(
        median=median,
        average=average,
        minimum=ordered[0],
        maximum=ordered[-1],
    )

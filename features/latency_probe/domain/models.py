from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(frozen=True)
class Candidate:
    tag: str
    port: int


@dataclass(frozen=True)
class Timed:
    index: int
    duration_ms: float


@dataclass(frozen=True)
class Failed:
    index: int
    reason: str
    kind: str = "error"  # http-status|connect|timeout|deadline|error


AttemptOutcome = Union[Timed, Failed]


@dataclass
class ProbeSession:
    port: int
    attempts: List[AttemptOutcome] = field(default_factory=list)

    def record(self, outcome: AttemptOutcome) -> None:
        self.attempts.append(outcome)

    def valid_durations(self) -> List[float]:
        return [a.duration_ms for a in self.attempts if isinstance(a, Timed)]


@dataclass(frozen=True)
class Success:
    median: float
    average: float
    minimum: float
    maximum: float

    kind = "success"

    def describe(self) -> str:
        return f"{self.median:.2f}/{self.average:.2f}/{self.minimum:.2f}/{self.maximum:.2f}"


@dataclass(frozen=True)
class Unstable:
    valid_count: int
    total_count: int

    kind = "unstable"

    def describe(self) -> str:
        return f"Unstable ({self.valid_count}/{self.total_count})"


@dataclass(frozen=True)
class AllFailed:
    kind = "all-failed"

    def describe(self) -> str:
        return "All Failed"


@dataclass(frozen=True)
class SessionError:
    message: str

    kind = "session-error"

    def describe(self) -> str:
        return f"Session Error: {self.message}"


ClassifiedResult = Union[Success, Unstable, AllFailed, SessionError]


@dataclass(frozen=True)
class ReportRow:
    tag: str
    port: int
    result: ClassifiedResult

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from features.latency_probe.application.ports import CandidateFilter
from features.latency_probe.domain.errors import TagPatternError
from features.latency_probe.domain.models import Candidate
from features.latency_probe.domain.probing import InboundEntry


SOCKS_TYPE = "socks"
DEFAULT_LISTEN = "127.0.0.1"
LOOPBACK_ADDRESSES = frozenset({"127.0.0.1", "::1", "localhost"})


class LoopbackSocksFilter(CandidateFilter):
    """Keeps local socks inbounds whose tag matches every pattern."""

    def __init__(self, patterns: Sequence[str] = ()):
        self._patterns = [self._compile(p) for p in patterns]

    def select(self, inbounds: Iterable[InboundEntry]) -> List[Candidate]:
        selected: List[Candidate] = []
        for inbound in inbounds:
            if inbound.type != SOCKS_TYPE:
                continue
            if (inbound.listen or DEFAULT_LISTEN) not in LOOPBACK_ADDRESSES:
                continue
            if not self.matches(inbound.tag):
                continue
            selected.append(Candidate(tag=inbound.tag, port=inbound.port))
        return selected

    def matches(self, tag: str) -> bool:
        return all(pattern.search(tag) for pattern in self._patterns)

    @staticmethod
    def _compile(pattern: str) -> re.Pattern:
        try:
            return re.compile(pattern)
        except re.error as exc:
            raise TagPatternError(f"invalid tag pattern {pattern!r}: {exc}") from exc

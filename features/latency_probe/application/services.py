from __future__ import annotations

from typing import Iterable, List

from features.latency_probe.domain.errors import ConfigParseError, NoCandidatesError
from features.latency_probe.domain.models import Candidate
from features.latency_probe.domain.probing import InboundEntry, RouterConfigDocument

from .ports import CandidateFilter, ConfigParserStrategy, ConfigSource


def parse_inbounds(
    document: RouterConfigDocument,
    parsers: Iterable[ConfigParserStrategy],
) -> List[InboundEntry]:
    for parser in parsers:
        if parser.supports(document):
            return parser.parse(document)
    raise ConfigParseError(f"no parser available for {document.path}")


def load_candidates(
    source: ConfigSource,
    parsers: Iterable[ConfigParserStrategy],
    candidate_filter: CandidateFilter,
) -> List[Candidate]:
    document = source.load()
    inbounds = parse_inbounds(document, parsers)
    candidates = candidate_filter.select(inbounds)
    if not candidates:
        raise NoCandidatesError(f"no socks inbound found in {document.path}")
    return candidates

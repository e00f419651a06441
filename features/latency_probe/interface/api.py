from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..domain.errors import ConfigLoadError, ConfigParseError, NoCandidatesError, TagPatternError
from ..domain.models import Candidate, ReportRow, SessionError, Success, Unstable
from ..infrastructure.orchestrator_factory import build_latency_orchestrator, load_config_candidates
from ..infrastructure.settings import probe_settings, router_config_path


router = APIRouter()


class LatencyRunIn(BaseModel):
    config_path: Optional[str] = None
    patterns: List[str] = Field(default_factory=list)
    attempts: Optional[int] = Field(default=None, ge=1, le=100)


class CandidateOut(BaseModel):
    tag: str
    port: int


class ReportRowOut(BaseModel):
    rank: int
    tag: str
    port: int
    kind: str
    display: str
    median: Optional[float] = None
    average: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    valid_count: Optional[int] = None
    total_count: Optional[int] = None
    message: Optional[str] = None


class LatencyRunOut(BaseModel):
    probed: int
    reachable: int
    rows: List[ReportRowOut]


def _row_out(rank: int, row: ReportRow) -> ReportRowOut:
    result = row.result
    out = ReportRowOut(rank=rank, tag=row.tag, port=row.port, kind=result.kind, display=result.describe())
    if isinstance(result, Success):
        out.median = result.median
        out.average = result.average
        out.minimum = result.minimum
        out.maximum = result.maximum
    elif isinstance(result, Unstable):
        out.valid_count = result.valid_count
        out.total_count = result.total_count
    elif isinstance(result, SessionError):
        out.message = result.message
    return out


def _resolve_config_path(config_path: Optional[str]) -> Path:
    default = router_config_path().resolve()
    if not config_path:
        return default
    path = (default.parent / config_path).resolve()
    if not path.is_relative_to(default.parent):
        raise HTTPException(status_code=403, detail="config_path must stay inside the config directory")
    return path


def _candidates(config_path: Optional[str], patterns: List[str]) -> List[Candidate]:
    path = _resolve_config_path(config_path)
    try:
        return load_config_candidates(path, patterns)
    except TagPatternError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConfigLoadError:
        raise HTTPException(status_code=400, detail="config file could not be read")
    except ConfigParseError:
        raise HTTPException(status_code=400, detail="config file could not be parsed")
    except NoCandidatesError:
        raise HTTPException(status_code=404, detail="no socks inbound matched")


@router.get("/latency/candidates", response_model=List[CandidateOut])
def list_candidates(config_path: Optional[str] = None):
    return [CandidateOut(tag=c.tag, port=c.port) for c in _candidates(config_path, [])]


@router.post("/latency/run", response_model=LatencyRunOut)
def run_latency(body: LatencyRunIn):
    candidates = _candidates(body.config_path, body.patterns)
    orchestrator = build_latency_orchestrator(settings=probe_settings(body.attempts))
    result = orchestrator.run(candidates)
    return LatencyRunOut(
        probed=result.probed,
        reachable=result.reachable,
        rows=[_row_out(rank, row) for rank, row in enumerate(result.rows, start=1)],
    )

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from matchplay.metrics import RECOMPUTATIONS
from matchplay.recap import (
    CourseInfo,
    PlayerFactForSim,
    RoundRecap,
    VsAllRecord,
    build_round_recap,
    compute_vs_all_for_round,
)
from matchplay.scoring import CourseHole, Format
from matchplay.security import require_api_key
from matchplay.stats import PlayerMatchFact

router = APIRouter(
    prefix="/api/rounds", tags=["rounds"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class VsAllRequest(BaseModel):
    format: Format = Format.BEST_BALL
    facts: list[PlayerFactForSim] = Field(default_factory=list)
    course_holes: list[CourseHole] = Field(
        default_factory=list,
        validation_alias=AliasChoices("course_holes", "courseHoles"),
    )
    slope_rating: Any = Field(
        default=None, validation_alias=AliasChoices("slope_rating", "slopeRating")
    )
    course_rating: Any = Field(
        default=None, validation_alias=AliasChoices("course_rating", "courseRating")
    )
    course_par: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("course_par", "coursePar")
    )

    model_config = ConfigDict(populate_by_name=True)


class RecapRequest(BaseModel):
    round_id: str = Field(validation_alias=AliasChoices("round_id", "roundId"))
    tournament_id: str = Field(
        default="", validation_alias=AliasChoices("tournament_id", "tournamentId")
    )
    format: Format = Format.BEST_BALL
    day: Optional[int] = None
    course: CourseInfo = Field(default_factory=CourseInfo)
    facts: list[PlayerMatchFact] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


@router.post("/vs-all", response_model=list[VsAllRecord])
def round_vs_all(payload: VsAllRequest) -> list[VsAllRecord]:
    return compute_vs_all_for_round(
        payload.facts,
        payload.course_holes,
        payload.format,
        payload.slope_rating,
        payload.course_rating,
        payload.course_par,
    )


@router.post("/recap", response_model=RoundRecap)
def round_recap(payload: RecapRequest) -> RoundRecap:
    RECOMPUTATIONS.labels(kind="recap").inc()
    return build_round_recap(
        payload.round_id,
        payload.tournament_id,
        payload.format,
        payload.course,
        payload.facts,
        day=payload.day,
    )

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from matchplay.constants import STANDARD_SLOPE
from matchplay.scoring import CourseHole, course_handicap, spin_down, strokes_received
from matchplay.security import require_api_key

router = APIRouter(
    prefix="/api/handicaps", tags=["handicaps"], dependencies=[Depends(require_api_key)]
)


class CourseHandicapRequest(BaseModel):
    handicap_index: Any = Field(
        default=None,
        validation_alias=AliasChoices("handicap_index", "handicapIndex"),
    )
    slope_rating: Any = Field(
        default=STANDARD_SLOPE,
        validation_alias=AliasChoices("slope_rating", "slopeRating"),
    )
    course_rating: Any = Field(
        default=None,
        validation_alias=AliasChoices("course_rating", "courseRating"),
    )
    par: Any = None

    model_config = ConfigDict(populate_by_name=True)


class CourseHandicapResponse(BaseModel):
    course_handicap: int = Field(alias="courseHandicap")

    model_config = ConfigDict(populate_by_name=True)


class StrokesRequest(BaseModel):
    course_handicap: Any = Field(
        default=None,
        validation_alias=AliasChoices("course_handicap", "courseHandicap"),
    )
    opponent_course_handicap: Any = Field(
        default=None,
        validation_alias=AliasChoices(
            "opponent_course_handicap", "opponentCourseHandicap"
        ),
    )
    course_holes: list[CourseHole] = Field(
        default_factory=list,
        validation_alias=AliasChoices("course_holes", "courseHoles"),
    )

    model_config = ConfigDict(populate_by_name=True)


class StrokesResponse(BaseModel):
    course_handicap: Any = Field(alias="courseHandicap")
    strokes_received: list[int] = Field(alias="strokesReceived")

    model_config = ConfigDict(populate_by_name=True)


@router.post("/course", response_model=CourseHandicapResponse)
def compute_course_handicap(payload: CourseHandicapRequest) -> CourseHandicapResponse:
    value = course_handicap(
        payload.handicap_index,
        payload.slope_rating,
        payload.course_rating,
        payload.par,
    )
    return CourseHandicapResponse(course_handicap=value)


@router.post("/strokes", response_model=StrokesResponse)
def compute_strokes(payload: StrokesRequest) -> StrokesResponse:
    """Allocate strokes, spinning down against an opponent when one is given."""

    playing = payload.course_handicap
    if isinstance(playing, int) and isinstance(payload.opponent_course_handicap, int):
        playing, _ = spin_down(playing, payload.opponent_course_handicap)
    return StrokesResponse(
        course_handicap=playing,
        strokes_received=strokes_received(playing, payload.course_holes),
    )

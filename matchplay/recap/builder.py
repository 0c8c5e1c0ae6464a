"""Assemble the full recap document for one round."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from matchplay.scoring.schemas import Format
from matchplay.stats.schemas import PlayerMatchFact

from .holes import birdie_eagle_leaders, hole_averages
from .schemas import CourseInfo, RoundRecap
from .vs_all import compute_vs_all_for_round

logger = logging.getLogger(__name__)


def build_round_recap(
    round_id: str,
    tournament_id: str,
    format: Format | str,
    course: CourseInfo | Mapping[str, Any],
    facts: Iterable[PlayerMatchFact],
    *,
    day: Optional[int] = None,
) -> RoundRecap:
    fmt = Format.coerce(format)
    if not isinstance(course, CourseInfo):
        course = CourseInfo.model_validate(course)
    facts = [fact for fact in facts if fact.round_id in ("", round_id)]
    course_par = course.resolved_par

    vs_all = compute_vs_all_for_round(
        facts,
        course.holes,
        fmt,
        course.slope_rating,
        course.course_rating,
        course_par,
    )
    averages = hole_averages(facts, course.holes, fmt)
    leaders = birdie_eagle_leaders(facts, fmt, averages)
    logger.info(
        "built recap for round %s: %d facts, %d vs-all records",
        round_id,
        len(facts),
        len(vs_all),
    )
    return RoundRecap(
        round_id=round_id,
        tournament_id=tournament_id,
        format=fmt.value,
        day=day,
        course_id=course.id,
        course_name=course.name,
        course_par=course_par,
        vs_all_records=vs_all,
        hole_averages=averages,
        leaders=leaders,
    )


__all__ = ["build_round_recap"]

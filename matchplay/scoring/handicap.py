"""Course handicap and per-hole stroke allocation."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from matchplay.config import get_settings
from matchplay.constants import HOLE_COUNT, STANDARD_SLOPE

from .schemas import CourseHole


def _float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return None
        return parsed if math.isfinite(parsed) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        if math.isfinite(parsed):
            return parsed
    return None


def round_half_up(value: float) -> int:
    """Round .5 towards +inf; ``round`` would use banker's rounding."""

    return int(math.floor(value + 0.5))


def course_handicap(
    handicap_index: Any,
    slope_rating: Any = STANDARD_SLOPE,
    course_rating: Any = None,
    par: Any = None,
) -> int:
    """Course handicap: ``index * slope / 113 + (rating - par)``, rounded.

    Never raises. Unusable inputs fall back to: index 0, slope 113, the
    configured default par, and rating equal to par. Anything non-finite
    resolves to 0.
    """

    index = _float(handicap_index) or 0.0
    slope = _float(slope_rating) or float(STANDARD_SLOPE)
    par_value = _float(par) or float(get_settings().default_course_par)
    rating = _float(course_rating)
    if rating is None:
        rating = par_value

    unrounded = index * (slope / STANDARD_SLOPE) + (rating - par_value)
    if not math.isfinite(unrounded):
        return 0
    return round_half_up(unrounded)


def _course_hole(hole: CourseHole | Mapping[str, Any]) -> CourseHole:
    if isinstance(hole, CourseHole):
        return hole
    return CourseHole.model_validate(hole)


def strokes_received(
    course_handicap_value: Any, course_holes: Iterable[CourseHole | Mapping[str, Any]]
) -> list[int]:
    """One stroke on each of the N hardest holes, N = clamp(handicap, 0, 18)."""

    strokes = [0] * HOLE_COUNT
    value = _float(course_handicap_value)
    if value is None:
        return strokes

    count = min(max(0, round_half_up(value)), HOLE_COUNT)
    ordered = sorted((_course_hole(h) for h in course_holes), key=lambda h: h.hcp_index)
    for hole in ordered[:count]:
        if 1 <= hole.number <= HOLE_COUNT:
            strokes[hole.number - 1] = 1
    return strokes


def spin_down(handicap_a: int, handicap_b: int) -> tuple[int, int]:
    """Play both sides off the lower handicap; the lower one ends at scratch."""

    lowest = min(handicap_a, handicap_b)
    return handicap_a - lowest, handicap_b - lowest


__all__ = ["course_handicap", "round_half_up", "spin_down", "strokes_received"]

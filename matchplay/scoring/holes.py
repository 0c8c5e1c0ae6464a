"""Per-hole decisions for each match format."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from matchplay.constants import HOLE_COUNT

from .schemas import Format, HoleResult, MatchData, Side

Decider = Callable[[int, MatchData], HoleResult]


def compare_scores(score_a: float, score_b: float) -> HoleResult:
    """Strictly lower score wins; equal scores halve the hole."""

    if score_a < score_b:
        return HoleResult.TEAM_A
    if score_b < score_a:
        return HoleResult.TEAM_B
    return HoleResult.ALL_SQUARE


def ball_scores(
    fmt: Format, side: Side, hole_number: int, match: MatchData
) -> Optional[Tuple[float, float]]:
    """Comparison scores of both partners: net for best ball, gross for shamble.

    ``None`` when either partner's gross is missing or the format does not
    record individual balls.
    """

    if fmt not in (Format.BEST_BALL, Format.SHAMBLE):
        return None
    hole = match.hole(hole_number)
    if hole is None:
        return None
    first, second = hole.players_gross(side)
    if first is None or second is None:
        return None
    if fmt is Format.SHAMBLE:
        return first, second
    return (
        first - match.stroke(side, 0, hole_number),
        second - match.stroke(side, 1, hole_number),
    )


def _decide_scramble(hole_number: int, match: MatchData) -> HoleResult:
    hole = match.hole(hole_number)
    if hole is None or hole.team_a_gross is None or hole.team_b_gross is None:
        return HoleResult.INCOMPLETE
    return compare_scores(hole.team_a_gross, hole.team_b_gross)


def _decide_singles(hole_number: int, match: MatchData) -> HoleResult:
    hole = match.hole(hole_number)
    if hole is None:
        return HoleResult.INCOMPLETE
    gross_a = hole.team_a_player_gross
    gross_b = hole.team_b_player_gross
    if gross_a is None or gross_b is None:
        return HoleResult.INCOMPLETE
    net_a = gross_a - match.stroke(Side.TEAM_A, 0, hole_number)
    net_b = gross_b - match.stroke(Side.TEAM_B, 0, hole_number)
    return compare_scores(net_a, net_b)


def _best_of_pairs(fmt: Format, hole_number: int, match: MatchData) -> HoleResult:
    balls_a = ball_scores(fmt, Side.TEAM_A, hole_number, match)
    balls_b = ball_scores(fmt, Side.TEAM_B, hole_number, match)
    if balls_a is None or balls_b is None:
        return HoleResult.INCOMPLETE
    return compare_scores(min(balls_a), min(balls_b))


def _decide_shamble(hole_number: int, match: MatchData) -> HoleResult:
    return _best_of_pairs(Format.SHAMBLE, hole_number, match)


def _decide_best_ball(hole_number: int, match: MatchData) -> HoleResult:
    return _best_of_pairs(Format.BEST_BALL, hole_number, match)


DECIDERS: dict[Format, Decider] = {
    Format.SINGLES: _decide_singles,
    Format.BEST_BALL: _decide_best_ball,
    Format.SHAMBLE: _decide_shamble,
    Format.SCRAMBLE: _decide_scramble,
}


def decide_hole(fmt: Format | str, hole_number: int, match: MatchData) -> HoleResult:
    """Decide one hole. Missing or malformed scores yield ``INCOMPLETE``."""

    if isinstance(hole_number, bool) or not isinstance(hole_number, int):
        return HoleResult.INCOMPLETE
    if not 1 <= hole_number <= HOLE_COUNT:
        return HoleResult.INCOMPLETE
    return DECIDERS[Format.coerce(fmt)](hole_number, match)


__all__ = ["DECIDERS", "ball_scores", "compare_scores", "decide_hole"]

"""Match state folded from hole decisions.

The summary is always rebuilt from the full hole record. Editing any hole,
including one earlier than the furthest hole played, therefore reopens or
re-closes a match without any patching logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from matchplay.constants import (
    BACK_NINE_MOMENTUM_FROM_HOLE,
    COMEBACK_THRESHOLD,
    HOLE_COUNT,
)

from .holes import decide_hole
from .schemas import (
    Format,
    HoleResult,
    MatchData,
    MatchResult,
    MatchStatus,
    MatchSummary,
    Side,
)


@dataclass(frozen=True, slots=True)
class CompletedHole:
    number: int
    result: HoleResult
    running_margin: int


def iter_completed_holes(
    fmt: Format | str, match: MatchData
) -> Iterator[CompletedHole]:
    """Yield decided holes in hole-number order with the margin after each.

    The margin is signed: positive means team A leads.
    """

    fmt = Format.coerce(fmt)
    running_margin = 0
    for hole_number in match.played_hole_numbers():
        result = decide_hole(fmt, hole_number, match)
        if result is HoleResult.INCOMPLETE:
            continue
        if result is HoleResult.TEAM_A:
            running_margin += 1
        elif result is HoleResult.TEAM_B:
            running_margin -= 1
        yield CompletedHole(hole_number, result, running_margin)


def summarize(fmt: Format | str, match: MatchData) -> MatchSummary:
    holes_won_a = holes_won_b = thru = 0
    team_a_down = team_a_up = False
    margin_history: list[int] = []

    for hole in iter_completed_holes(fmt, match):
        thru = max(thru, hole.number)
        if hole.result is HoleResult.TEAM_A:
            holes_won_a += 1
        elif hole.result is HoleResult.TEAM_B:
            holes_won_b += 1
        margin_history.append(hole.running_margin)

        if hole.number >= BACK_NINE_MOMENTUM_FROM_HOLE:
            if hole.running_margin <= -COMEBACK_THRESHOLD:
                team_a_down = True
            if hole.running_margin >= COMEBACK_THRESHOLD:
                team_a_up = True

    if holes_won_a > holes_won_b:
        leader = Side.TEAM_A
    elif holes_won_b > holes_won_a:
        leader = Side.TEAM_B
    else:
        leader = None
    margin = abs(holes_won_a - holes_won_b)
    holes_left = HOLE_COUNT - thru
    closed = (leader is not None and margin > holes_left) or thru == HOLE_COUNT
    dormie = leader is not None and margin == holes_left and thru < HOLE_COUNT
    if thru == HOLE_COUNT and holes_won_a == holes_won_b:
        winner = "AS"
    else:
        # An unfinished match without a leader reads "AS"; ``closed`` says
        # whether it is actually decided.
        winner = leader.value if leader is not None else "AS"

    return MatchSummary(
        holes_won_a=holes_won_a,
        holes_won_b=holes_won_b,
        thru=thru,
        leader=leader,
        margin=margin,
        dormie=dormie,
        closed=closed,
        winner=winner,
        was_team_a_down3_plus_back9=team_a_down,
        was_team_a_up3_plus_back9=team_a_up,
        margin_history=margin_history,
    )


def build_status_and_result(summary: MatchSummary) -> tuple[MatchStatus, MatchResult]:
    status = MatchStatus(
        leader=summary.leader,
        margin=summary.margin,
        thru=summary.thru,
        dormie=summary.dormie,
        closed=summary.closed,
        was_team_a_down3_plus_back9=summary.was_team_a_down3_plus_back9,
        was_team_a_up3_plus_back9=summary.was_team_a_up3_plus_back9,
        margin_history=list(summary.margin_history),
    )
    result = MatchResult(
        winner=summary.winner,
        holes_won_a=summary.holes_won_a,
        holes_won_b=summary.holes_won_b,
    )
    return status, result


__all__ = [
    "CompletedHole",
    "build_status_and_result",
    "iter_completed_holes",
    "summarize",
]

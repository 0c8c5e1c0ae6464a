"""Derive one ``PlayerMatchFact`` per rostered player of a match."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from matchplay.constants import HOLE_COUNT, JEKYLL_AND_HYDE_THRESHOLD
from matchplay.errors import InvalidRosterError
from matchplay.scoring.handicap import course_handicap, round_half_up
from matchplay.scoring.holes import ball_scores, decide_hole
from matchplay.scoring.schemas import (
    Format,
    HoleResult,
    MatchData,
    MatchSummary,
    PlayerInMatch,
    Side,
    players_per_side,
    tracks_drives,
    uses_handicap,
    uses_player_scores,
)
from matchplay.scoring.summary import iter_completed_holes, summarize

from .schemas import HolePerformance, MatchContext, PlayerMatchFact

logger = logging.getLogger(__name__)


def count_lead_changes(margin_history: Sequence[int]) -> int:
    """Count flips of the leader, ignoring all-square entries in between."""

    changes = 0
    previous = 0
    for margin in margin_history:
        if margin == 0:
            continue
        sign = 1 if margin > 0 else -1
        if previous and sign != previous:
            changes += 1
        previous = sign
    return changes


def was_never_behind(margin_history: Sequence[int], side: Side) -> Optional[bool]:
    if not margin_history:
        return None
    if side is Side.TEAM_A:
        return all(margin >= 0 for margin in margin_history)
    return all(margin <= 0 for margin in margin_history)


@dataclass
class _MatchWalk:
    """Per-hole outcomes plus the clutch inputs gathered in one pass."""

    results: dict[int, HoleResult] = field(default_factory=dict)
    winning_hole: Optional[int] = None
    margin_into_18: int = 0


def _walk(fmt: Format, match: MatchData, closed: bool) -> _MatchWalk:
    walk = _MatchWalk()
    for number in match.played_hole_numbers():
        walk.results[number] = decide_hole(fmt, number, match)
    for hole in iter_completed_holes(fmt, match):
        if hole.number < HOLE_COUNT:
            walk.margin_into_18 = hole.running_margin
        if (
            closed
            and walk.winning_hole is None
            and abs(hole.running_margin) > HOLE_COUNT - hole.number
        ):
            walk.winning_hole = hole.number
    return walk


def _outcome(summary: MatchSummary, side: Side, points: float) -> tuple[str, float]:
    if summary.winner == "AS":
        return "halve", points / 2
    if summary.winner == side.value:
        return "win", points
    return "loss", 0.0


def _clutch(
    side: Side, summary: MatchSummary, walk: _MatchWalk
) -> tuple[bool, Optional[bool]]:
    if summary.thru != HOLE_COUNT or walk.winning_hole not in (None, HOLE_COUNT):
        return False, None
    last = walk.results.get(HOLE_COUNT)
    if last is None or last is HoleResult.INCOMPLETE:
        return False, None

    if walk.margin_into_18 == 0:
        if last is HoleResult.ALL_SQUARE:
            return False, None
        return True, last is HoleResult.for_side(side)

    if abs(walk.margin_into_18) == 1:
        trailing = Side.TEAM_B if walk.margin_into_18 > 0 else Side.TEAM_A
        # Only the trailing side squaring the match on 18 counts; a leader
        # winning or halving 18 had already secured the result.
        if last is HoleResult.for_side(trailing):
            return True, side is trailing
    return False, None


def _roster_slot(fmt: Format, side: Side, slot: int) -> int:
    if fmt is Format.SINGLES:
        return 0 if side is Side.TEAM_A else 1
    return (0 if side is Side.TEAM_A else 2) + slot


def _player_course_handicap(
    fmt: Format,
    side: Side,
    slot: int,
    player_id: str,
    match: MatchData,
    context: MatchContext,
) -> Optional[int]:
    index = _roster_slot(fmt, side, slot)
    if index < len(match.course_handicaps):
        stored = match.course_handicaps[index]
        if stored is not None:
            return round_half_up(stored)
    handicap_index = context.player_handicaps.get(player_id)
    if handicap_index is None:
        return None
    return course_handicap(
        handicap_index,
        context.slope_rating,
        context.course_rating,
        context.resolved_course_par,
    )


def _hole_performance(
    fmt: Format,
    side: Side,
    slot: int,
    match: MatchData,
    context: MatchContext,
    walk: _MatchWalk,
) -> list[HolePerformance]:
    mine = HoleResult.for_side(side)
    rows: list[HolePerformance] = []
    for number in match.played_hole_numbers():
        hole = match.hole(number)
        result = walk.results.get(number, HoleResult.INCOMPLETE)
        if result is HoleResult.INCOMPLETE:
            outcome = None
        elif result is HoleResult.ALL_SQUARE:
            outcome = "halve"
        else:
            outcome = "win" if result is mine else "loss"

        if fmt is Format.SCRAMBLE:
            gross = hole.team_gross(side)
        elif fmt is Format.SINGLES:
            gross = hole.player_gross(side)
        else:
            gross = hole.players_gross(side)[slot]

        row = HolePerformance(
            hole=number, par=context.hole_par(number), result=outcome, gross=gross
        )
        if uses_handicap(fmt) and gross is not None:
            row.strokes = match.stroke(side, slot, number)
            row.net = gross - row.strokes
        if tracks_drives(fmt):
            drive = hole.drive(side)
            row.drive_used = None if drive is None else drive == slot
        rows.append(row)
    return rows


@dataclass
class _BallUsage:
    used: int = 0
    solo: int = 0
    shared: int = 0
    solo_won_hole: int = 0
    solo_push: int = 0
    used_on_18: Optional[bool] = None


def _ball_usage(
    fmt: Format, side: Side, slot: int, match: MatchData, walk: _MatchWalk
) -> _BallUsage:
    usage = _BallUsage()
    for number in match.played_hole_numbers():
        balls = ball_scores(fmt, side, number, match)
        if balls is None:
            continue
        own, partner = balls[slot], balls[1 - slot]
        if own <= partner:
            usage.used += 1
        if own == partner:
            usage.shared += 1
        elif own < partner:
            usage.solo += 1
            result = walk.results.get(number)
            if result is HoleResult.for_side(side):
                usage.solo_won_hole += 1
            elif result is HoleResult.ALL_SQUARE:
                usage.solo_push += 1
        if number == HOLE_COUNT:
            usage.used_on_18 = own <= partner
    return usage


def _jekyll_and_hyde(side: Side, match: MatchData) -> Optional[bool]:
    best = worst = 0.0
    counted = 0
    for number in match.played_hole_numbers():
        first, second = match.hole(number).players_gross(side)
        if first is None or second is None:
            continue
        best += min(first, second)
        worst += max(first, second)
        counted += 1
    if not counted:
        return None
    return worst - best >= JEKYLL_AND_HYDE_THRESHOLD


def _team_total_gross(fmt: Format, side: Side, match: MatchData) -> float:
    total = 0.0
    for number in match.played_hole_numbers():
        hole = match.hole(number)
        if fmt is Format.SCRAMBLE:
            gross = hole.team_gross(side)
            if gross is not None:
                total += gross
            continue
        scores = [score for score in hole.players_gross(side) if score is not None]
        if scores:
            total += min(scores)
    return total


def _others(
    players: Sequence[PlayerInMatch], context: MatchContext, exclude: str = ""
) -> tuple[list[str], list[str], list[Optional[float]]]:
    ids = [p.player_id for p in players if p.player_id and p.player_id != exclude]
    tiers = [context.tier(pid) for pid in ids]
    handicaps = [context.player_handicaps.get(pid) for pid in ids]
    return ids, tiers, handicaps


def derive_player_facts(
    match: MatchData,
    context: MatchContext,
    *,
    match_id: Optional[str] = None,
    summary: Optional[MatchSummary] = None,
) -> list[PlayerMatchFact]:
    """Build the per-player fact records for a match.

    ``summary`` defaults to a fresh summary of ``match``; pass one in when the
    caller already has it. Raises :class:`InvalidRosterError` when a side
    carries more players than the round format allows.
    """

    fmt = context.format
    limit = players_per_side(fmt)
    for side in Side:
        if len(match.players(side)) > limit:
            raise InvalidRosterError(
                f"{side.value} has {len(match.players(side))} players; "
                f"{fmt.value} allows {limit}"
            )

    if summary is None:
        summary = summarize(fmt, match)
    walk = _walk(fmt, match, summary.closed)
    lead_changes = count_lead_changes(summary.margin_history)
    course_par = context.resolved_course_par

    facts: list[PlayerMatchFact] = []
    for side in Side:
        roster = match.players(side)
        opponent_ids, opponent_tiers, opponent_handicaps = _others(
            match.players(side.opponent), context
        )
        outcome, points = _outcome(summary, side, context.points_value)
        holes_won = summary.holes_won(side)
        holes_lost = summary.holes_won(side.opponent)
        decided_on_18, won_18th = _clutch(side, summary, walk)

        for slot, player in enumerate(roster):
            if not player.player_id:
                logger.debug(
                    "skipping %s slot %d without a player id", side.value, slot
                )
                continue
            partner_ids, partner_tiers, partner_handicaps = _others(
                roster, context, exclude=player.player_id
            )
            holes = _hole_performance(fmt, side, slot, match, context, walk)
            player_ch = _player_course_handicap(
                fmt, side, slot, player.player_id, match, context
            )

            fact = PlayerMatchFact(
                player_id=player.player_id,
                player_name=context.player_names.get(player.player_id, ""),
                match_id=match_id or match.id or "",
                tournament_id=match.tournament_id or "",
                round_id=match.round_id or "",
                format=fmt,
                team=side,
                outcome=outcome,
                points_earned=points,
                player_tier=context.tier(player.player_id),
                player_team_id=context.team_id(side),
                opponent_team_id=context.team_id(side.opponent),
                player_handicap=context.player_handicaps.get(player.player_id),
                player_course_handicap=player_ch,
                opponent_ids=opponent_ids,
                opponent_tiers=opponent_tiers,
                opponent_handicaps=opponent_handicaps,
                partner_ids=partner_ids,
                partner_tiers=partner_tiers,
                partner_handicaps=partner_handicaps,
                holes_won=holes_won,
                holes_lost=holes_lost,
                holes_halved=summary.thru - holes_won - holes_lost,
                final_margin=summary.margin,
                final_thru=summary.thru,
                comeback_win=outcome == "win" and summary.was_down3_plus_back9(side),
                blown_lead=outcome == "loss"
                and summary.was_down3_plus_back9(side.opponent),
                strokes_given=player.strokes_given,
                lead_changes=lead_changes,
                was_never_behind=was_never_behind(summary.margin_history, side),
                winning_hole=walk.winning_hole,
                decided_on18=decided_on_18,
                won18th_hole=won_18th,
                course_id=context.course_id,
                course_par=course_par,
                day=context.day,
                tournament_year=context.tournament_year,
                tournament_name=context.tournament_name,
                tournament_series=context.tournament_series,
                hole_performance=holes,
            )

            if uses_player_scores(fmt):
                usage = _ball_usage(fmt, side, slot, match, walk)
                fact.balls_used = usage.used
                fact.balls_used_solo = usage.solo
                fact.balls_used_shared = usage.shared
                fact.balls_used_solo_won_hole = usage.solo_won_hole
                fact.balls_used_solo_push = usage.solo_push
                fact.ball_used_on18 = usage.used_on_18
                fact.jekyll_and_hyde = _jekyll_and_hyde(side, match)

            if tracks_drives(fmt):
                fact.drives_used = sum(1 for row in holes if row.drive_used)

            if uses_handicap(fmt):
                played = [row for row in holes if row.gross is not None]
                fact.total_gross = sum(row.gross for row in played)
                fact.total_net = sum(row.net for row in played)
                fact.strokes_vs_par_gross = fact.total_gross - course_par
                if player_ch is not None:
                    fact.strokes_vs_par_net = fact.total_gross - player_ch - course_par
            else:
                fact.team_total_gross = _team_total_gross(fmt, side, match)
                fact.team_strokes_vs_par_gross = fact.team_total_gross - course_par

            diffs = [row.gross - row.par for row in holes if row.gross is not None]
            fact.birdies = diffs.count(-1)
            fact.eagles = sum(1 for diff in diffs if diff <= -2)
            facts.append(fact)

    return facts


__all__ = [
    "count_lead_changes",
    "derive_player_facts",
    "was_never_behind",
]

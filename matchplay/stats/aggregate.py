"""Reduce a player's match facts into lifetime and split records.

Every function here is a pure fold over the facts it is given, so rebuilding a
record from the same facts always yields the same result.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from matchplay.scoring.schemas import uses_handicap

from .schemas import PlayerMatchFact, PlayerStats, RecordLine


def _own(player_id: str, facts: Iterable[PlayerMatchFact]) -> list[PlayerMatchFact]:
    return [fact for fact in facts if fact.player_id == player_id]


def aggregate_player_stats(
    player_id: str,
    facts: Iterable[PlayerMatchFact],
    *,
    series: Optional[str] = None,
) -> PlayerStats:
    """Fold ``facts`` for ``player_id`` into a :class:`PlayerStats` record.

    When ``series`` is given only facts from that tournament series count.
    """

    stats = PlayerStats(player_id=player_id, series=series)
    breakdown: dict[str, RecordLine] = {}

    for fact in _own(player_id, facts):
        if series is not None and fact.tournament_series != series:
            continue

        stats.matches_played += 1
        stats.points += fact.points_earned
        if fact.outcome == "win":
            stats.wins += 1
        elif fact.outcome == "loss":
            stats.losses += 1
        else:
            stats.halves += 1
        breakdown.setdefault(fact.format.value, RecordLine()).add(fact)

        stats.holes_won += fact.holes_won
        stats.holes_lost += fact.holes_lost
        stats.holes_halved += fact.holes_halved
        stats.birdies += fact.birdies
        stats.eagles += fact.eagles

        if uses_handicap(fact.format) and fact.total_gross is not None:
            stats.total_gross += fact.total_gross
            stats.total_net += fact.total_net or 0
            stats.holes_played += fact.holes_played
            stats.strokes_vs_par_gross += fact.strokes_vs_par_gross or 0
            stats.strokes_vs_par_net += fact.strokes_vs_par_net or 0

        if fact.comeback_win:
            stats.comeback_wins += 1
        if fact.blown_lead:
            stats.blown_leads += 1
        if fact.outcome == "win" and fact.was_never_behind:
            stats.never_behind_wins += 1
        if fact.jekyll_and_hyde:
            stats.jekyll_and_hydes += 1
        if fact.decided_on18 and fact.outcome == "win":
            stats.clutch_wins += 1

        stats.drives_used += fact.drives_used or 0
        stats.balls_used += fact.balls_used or 0
        stats.balls_used_solo += fact.balls_used_solo or 0

    stats.format_breakdown = breakdown
    return stats


def aggregate_by_series(
    player_id: str, facts: Iterable[PlayerMatchFact]
) -> dict[str, PlayerStats]:
    own = _own(player_id, facts)
    series_names = sorted({fact.tournament_series for fact in own})
    return {
        name: aggregate_player_stats(player_id, own, series=name)
        for name in series_names
    }


def aggregate_by_opponent_tier(
    player_id: str, facts: Iterable[PlayerMatchFact]
) -> dict[str, RecordLine]:
    """Record against each opponent tier; a match counts once per tier faced."""

    lines: dict[str, RecordLine] = defaultdict(RecordLine)
    for fact in _own(player_id, facts):
        for tier in sorted(set(fact.opponent_tiers)):
            lines[tier].add(fact)
    return dict(lines)


def aggregate_by_opponent(
    player_id: str, facts: Iterable[PlayerMatchFact]
) -> dict[str, RecordLine]:
    lines: dict[str, RecordLine] = defaultdict(RecordLine)
    for fact in _own(player_id, facts):
        for opponent_id in fact.opponent_ids:
            lines[opponent_id].add(fact)
    return dict(lines)


__all__ = [
    "aggregate_by_opponent",
    "aggregate_by_opponent_tier",
    "aggregate_player_stats",
    "aggregate_by_series",
]

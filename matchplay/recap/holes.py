"""Per-hole scoring averages and birdie / eagle leader boards for a round."""

from __future__ import annotations

from statistics import fmean
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from matchplay.constants import DEFAULT_HOLE_PAR, HOLE_COUNT
from matchplay.scoring.schemas import CourseHole, Format, uses_handicap
from matchplay.stats.schemas import HolePerformance, PlayerMatchFact

from .schemas import BestHole, HoleAverage, LeaderEntry, Leaders, WorstHole

ScoreOf = Callable[[HolePerformance], Optional[float]]


def _distinct_entries(
    facts: Iterable[PlayerMatchFact], fmt: Format
) -> list[PlayerMatchFact]:
    """Scramble members share one team score, so keep a single fact per team."""

    facts = list(facts)
    if fmt is not Format.SCRAMBLE:
        return facts
    seen: set[str] = set()
    distinct: list[PlayerMatchFact] = []
    for fact in facts:
        key = "_".join(sorted([fact.player_id, *fact.partner_ids]))
        if key not in seen:
            seen.add(key)
            distinct.append(fact)
    return distinct


def _pars(course_holes: Iterable[CourseHole | Mapping[str, Any]]) -> dict[int, int]:
    pars: dict[int, int] = {}
    for hole in course_holes:
        hole = hole if isinstance(hole, CourseHole) else CourseHole.model_validate(hole)
        pars[hole.number] = hole.par
    return pars


def hole_averages(
    facts: Iterable[PlayerMatchFact],
    course_holes: Iterable[CourseHole | Mapping[str, Any]],
    format: Format | str,
) -> list[HoleAverage]:
    fmt = Format.coerce(format)
    entries = _distinct_entries(facts, fmt)
    pars = _pars(course_holes)
    with_net = uses_handicap(fmt)

    averages: list[HoleAverage] = []
    for number in range(1, HOLE_COUNT + 1):
        rows = [
            row
            for fact in entries
            for row in fact.hole_performance
            if row.hole == number and row.gross is not None
        ]
        gross = [row.gross for row in rows]
        net = [row.net for row in rows if row.net is not None] if with_net else []
        averages.append(
            HoleAverage(
                hole_number=number,
                par=pars.get(number, DEFAULT_HOLE_PAR),
                avg_gross=fmean(gross) if gross else None,
                avg_net=fmean(net) if net else None,
                lowest_gross=min(gross, default=None),
                lowest_net=min(net, default=None),
                highest_gross=max(gross, default=None),
                highest_net=max(net, default=None),
                scoring_count=len(gross),
            )
        )
    return averages


def _leader_board(
    facts: Sequence[PlayerMatchFact],
    score_of: ScoreOf,
    matches: Callable[[float], bool],
) -> list[LeaderEntry]:
    entries: list[LeaderEntry] = []
    for fact in facts:
        holes = [
            row.hole
            for row in fact.hole_performance
            if score_of(row) is not None and matches(score_of(row) - row.par)
        ]
        if holes:
            entries.append(
                LeaderEntry(
                    player_id=fact.player_id,
                    player_name=fact.player_name,
                    count=len(holes),
                    holes=holes,
                )
            )
    entries.sort(key=lambda entry: (-entry.count, entry.player_name, entry.player_id))
    return entries


def _is_birdie(diff: float) -> bool:
    return diff == -1


def _is_eagle(diff: float) -> bool:
    return diff <= -2


def birdie_eagle_leaders(
    facts: Iterable[PlayerMatchFact],
    format: Format | str,
    averages: Optional[Sequence[HoleAverage]] = None,
) -> Leaders:
    """Leader boards for the round, plus its easiest and hardest hole.

    ``averages`` are used for the best and worst hole when given; scramble
    team members are each credited with the team's score.
    """

    fmt = Format.coerce(format)
    facts = list(facts)
    leaders = Leaders(
        birdies_gross=_leader_board(facts, lambda row: row.gross, _is_birdie),
        eagles_gross=_leader_board(facts, lambda row: row.gross, _is_eagle),
    )
    if uses_handicap(fmt):
        leaders.birdies_net = _leader_board(facts, lambda row: row.net, _is_birdie)
        leaders.eagles_net = _leader_board(facts, lambda row: row.net, _is_eagle)

    scored = [avg for avg in averages or () if avg.avg_gross is not None]
    if scored:
        best = min(scored, key=lambda avg: (avg.avg_gross - avg.par, avg.hole_number))
        worst = max(scored, key=lambda avg: (avg.avg_gross - avg.par, -avg.hole_number))
        leaders.best_hole = BestHole(
            hole_number=best.hole_number,
            avg_strokes_under_par=best.avg_gross - best.par,
        )
        leaders.worst_hole = WorstHole(
            hole_number=worst.hole_number,
            avg_strokes_over_par=worst.avg_gross - worst.par,
        )
    return leaders


__all__ = ["birdie_eagle_leaders", "hole_averages"]

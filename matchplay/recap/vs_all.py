"""Head-to-head simulation of every entrant in a round against every other."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from matchplay.constants import HOLE_COUNT
from matchplay.scoring.handicap import course_handicap, spin_down, strokes_received
from matchplay.scoring.schemas import CourseHole, Format, uses_handicap
from matchplay.stats.schemas import HolePerformance, PlayerMatchFact

from .schemas import HeadToHeadResult, PlayerFactForSim, VsAllRecord

logger = logging.getLogger(__name__)

CourseHoles = Iterable[CourseHole | Mapping[str, Any]]


def _sim_entry(entry: PlayerFactForSim | PlayerMatchFact) -> PlayerFactForSim:
    if isinstance(entry, PlayerMatchFact):
        return PlayerFactForSim.from_fact(entry)
    return entry


def simulate_head_to_head(
    player_a: PlayerFactForSim,
    player_b: PlayerFactForSim,
    course_holes: CourseHoles,
    format: Format | str,
    slope_rating: Any = None,
    course_rating: Any = None,
    course_par: Any = None,
) -> HeadToHeadResult:
    """Replay two recorded rounds against each other as a fresh match.

    Singles and best ball re-allocate strokes from both course handicaps spun
    down to the lower one; shamble and scramble compare gross. Holes missing a
    score on either side are skipped, and play stops once the match is
    mathematically decided.
    """

    fmt = Format.coerce(format)
    holes = list(course_holes)
    strokes_a = strokes_b = [0] * HOLE_COUNT
    if uses_handicap(fmt):
        rating = (slope_rating, course_rating, course_par)
        handicap_a, handicap_b = spin_down(
            course_handicap(player_a.player_handicap, *rating),
            course_handicap(player_b.player_handicap, *rating),
        )
        strokes_a = strokes_received(handicap_a, holes)
        strokes_b = strokes_received(handicap_b, holes)

    holes_won_a = holes_won_b = 0
    for number in range(1, HOLE_COUNT + 1):
        gross_a = player_a.gross_on(number)
        gross_b = player_b.gross_on(number)
        if gross_a is None or gross_b is None:
            continue
        score_a = gross_a - strokes_a[number - 1]
        score_b = gross_b - strokes_b[number - 1]
        if score_a < score_b:
            holes_won_a += 1
        elif score_b < score_a:
            holes_won_b += 1
        if abs(holes_won_a - holes_won_b) > HOLE_COUNT - number:
            break

    if holes_won_a > holes_won_b:
        winner = "A"
    elif holes_won_b > holes_won_a:
        winner = "B"
    else:
        winner = "tie"
    return HeadToHeadResult(
        winner=winner, holes_won_a=holes_won_a, holes_won_b=holes_won_b
    )


def _merged_team(members: Sequence[PlayerFactForSim]) -> PlayerFactForSim:
    """One entrant carrying the team's best gross on each hole."""

    best: dict[int, HolePerformance] = {}
    for member in members:
        for row in member.hole_performance:
            if row.gross is None:
                continue
            current = best.get(row.hole)
            if current is None or row.gross < current.gross:
                best[row.hole] = row
    rows = [best[number] for number in sorted(best)]
    return members[0].model_copy(update={"hole_performance": rows})


def _tally(record: VsAllRecord, result: HeadToHeadResult) -> None:
    if result.winner == "A":
        record.wins += 1
    elif result.winner == "B":
        record.losses += 1
    else:
        record.ties += 1


def compute_vs_all_for_round(
    player_facts: Iterable[PlayerFactForSim | PlayerMatchFact],
    course_holes: CourseHoles,
    format: Format | str,
    slope_rating: Any = None,
    course_rating: Any = None,
    course_par: Optional[int] = None,
) -> list[VsAllRecord]:
    fmt = Format.coerce(format)
    entrants = [_sim_entry(entry) for entry in player_facts]
    holes = list(course_holes)
    settings = (holes, fmt, slope_rating, course_rating, course_par)

    if fmt is Format.SINGLES:
        records: list[VsAllRecord] = []
        for idx, player in enumerate(entrants):
            record = VsAllRecord(
                player_id=player.player_id, player_name=player.player_name
            )
            for other_idx, other in enumerate(entrants):
                if other_idx != idx:
                    _tally(record, simulate_head_to_head(player, other, *settings))
            records.append(record)
        return records

    teams: dict[str, list[PlayerFactForSim]] = {}
    for entrant in entrants:
        teams.setdefault(entrant.team_key, []).append(entrant)
    logger.debug("simulating %d teams for %s", len(teams), fmt.value)

    # Gross formats compare the team's best ball; best ball keeps the first
    # member so the simulation can re-allocate that player's strokes.
    if uses_handicap(fmt):
        representatives = {key: members[0] for key, members in teams.items()}
    else:
        representatives = {key: _merged_team(members) for key, members in teams.items()}

    records = []
    for key, members in teams.items():
        team_record = VsAllRecord(player_id="", team_key=key)
        for other_key, other in representatives.items():
            if other_key != key:
                _tally(
                    team_record,
                    simulate_head_to_head(representatives[key], other, *settings),
                )
        for member in members:
            update = {"player_id": member.player_id, "player_name": member.player_name}
            records.append(team_record.model_copy(update=update))
    return records


__all__ = ["compute_vs_all_for_round", "simulate_head_to_head"]

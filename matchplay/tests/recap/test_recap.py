from __future__ import annotations

import math

from matchplay.recap import birdie_eagle_leaders, build_round_recap, hole_averages
from matchplay.scoring import Format
from matchplay.stats import MatchContext, derive_player_facts
from matchplay.tests.helpers import (
    course_holes,
    scramble_match,
    singles_match,
    strokes_on,
)


def _singles_facts(**names):
    match = singles_match(
        {1: (3, 5), 2: (3, 3)}, strokes=(strokes_on(1), [0] * 18)
    )
    context = MatchContext.model_validate(
        {"format": "singles", "courseHoles": course_holes(), "playerNames": names}
    )
    return derive_player_facts(match, context)


def _scramble_facts():
    match = scramble_match({1: (3, 5), 2: (4, 4)})
    context = MatchContext.model_validate(
        {"format": "twoManScramble", "courseHoles": course_holes()}
    )
    return derive_player_facts(match, context)


def test_hole_averages_singles() -> None:
    averages = hole_averages(_singles_facts(), course_holes(), Format.SINGLES)
    assert len(averages) == 18
    first = averages[0]
    assert first.hole_number == 1
    assert math.isclose(first.avg_gross, 4)
    assert math.isclose(first.avg_net, 3.5)
    assert (first.lowest_gross, first.highest_gross) == (3, 5)
    assert (first.lowest_net, first.highest_net) == (2, 5)
    assert first.scoring_count == 2

    empty = averages[2]
    assert empty.avg_gross is None
    assert empty.scoring_count == 0
    assert empty.par == 4


def test_hole_averages_count_scramble_teams_once() -> None:
    first = hole_averages(_scramble_facts(), course_holes(), "twoManScramble")[0]
    assert first.scoring_count == 2
    assert math.isclose(first.avg_gross, 4)
    assert first.avg_net is None


def test_leader_boards_for_singles() -> None:
    leaders = birdie_eagle_leaders(_singles_facts(), Format.SINGLES)
    assert [(e.player_id, e.count, e.holes) for e in leaders.birdies_gross] == [
        ("pA", 2, [1, 2]),
        ("pB", 1, [2]),
    ]
    assert leaders.eagles_gross == []
    assert [(e.player_id, e.count) for e in leaders.birdies_net] == [
        ("pA", 1),
        ("pB", 1),
    ]
    assert [(e.player_id, e.holes) for e in leaders.eagles_net] == [("pA", [1])]
    assert leaders.best_hole is None


def test_leader_ties_sort_by_name() -> None:
    facts = _singles_facts(pA="Zed", pB="Amy")
    leaders = birdie_eagle_leaders(facts, Format.SINGLES)
    assert [e.player_name for e in leaders.birdies_net] == ["Amy", "Zed"]


def test_best_and_worst_hole() -> None:
    facts = _singles_facts()
    averages = hole_averages(facts, course_holes(), Format.SINGLES)
    leaders = birdie_eagle_leaders(facts, Format.SINGLES, averages)
    assert leaders.best_hole.hole_number == 2
    assert math.isclose(leaders.best_hole.avg_strokes_under_par, -1)
    assert leaders.worst_hole.hole_number == 1
    assert math.isclose(leaders.worst_hole.avg_strokes_over_par, 0)


def test_scramble_has_no_net_boards() -> None:
    leaders = birdie_eagle_leaders(_scramble_facts(), "twoManScramble")
    assert [e.player_id for e in leaders.birdies_gross] == ["a1", "a2"]
    assert leaders.birdies_net == []
    assert leaders.eagles_net == []


def test_build_round_recap() -> None:
    facts = _singles_facts()
    stray = facts[0].model_copy(update={"round_id": "other", "player_id": "pX"})
    recap = build_round_recap(
        "r1",
        "t1",
        "singles",
        {"id": "c1", "name": "Links", "holes": course_holes(), "slope": 125},
        [*facts, stray],
        day=2,
    )
    assert recap.round_id == "r1"
    assert recap.course_par == 72
    assert recap.course_name == "Links"
    assert recap.format == "singles"
    assert recap.day == 2
    assert [r.player_id for r in recap.vs_all_records] == ["pA", "pB"]
    assert len(recap.hole_averages) == 18
    assert recap.leaders.best_hole.hole_number == 2

    dumped = recap.model_dump(mode="json", by_alias=True)
    assert dumped["vsAllRecords"][0]["playerId"] == "pA"
    assert dumped["holeAverages"][0]["avgGross"] == 4
    assert "birdiesGross" in dumped["leaders"]

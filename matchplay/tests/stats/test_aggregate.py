from __future__ import annotations

import math

from matchplay.scoring import Format, Side
from matchplay.stats import (
    PlayerMatchFact,
    aggregate_by_opponent,
    aggregate_by_opponent_tier,
    aggregate_by_series,
    aggregate_player_stats,
)


def make_fact(**overrides) -> PlayerMatchFact:
    data = {
        "player_id": "p1",
        "match_id": "m1",
        "format": Format.SINGLES,
        "team": Side.TEAM_A,
        "outcome": "win",
        "points_earned": 1.0,
        "player_team_id": "teamA",
        "opponent_team_id": "teamB",
        "opponent_ids": ["p2"],
        "opponent_tiers": ["B"],
        "holes_won": 5,
        "holes_lost": 2,
        "holes_halved": 9,
        "final_margin": 3,
        "final_thru": 16,
        "comeback_win": False,
        "blown_lead": False,
        "strokes_given": 0,
        "lead_changes": 0,
        "course_par": 72,
        "tournament_series": "rowdyCup",
    }
    data.update(overrides)
    return PlayerMatchFact.model_validate(data)


def test_record_and_points() -> None:
    facts = [
        make_fact(match_id="m1"),
        make_fact(match_id="m2", outcome="loss", points_earned=0),
        make_fact(match_id="m3", outcome="halve", points_earned=0.5),
        make_fact(match_id="m4", player_id="p9"),
    ]
    stats = aggregate_player_stats("p1", facts)
    assert (stats.wins, stats.losses, stats.halves) == (1, 1, 1)
    assert stats.matches_played == 3
    assert math.isclose(stats.points, 1.5)
    assert stats.holes_won == 15
    assert stats.player_id == "p1"


def test_format_breakdown() -> None:
    facts = [
        make_fact(),
        make_fact(format=Format.SCRAMBLE, outcome="loss", points_earned=0),
        make_fact(format=Format.SCRAMBLE),
    ]
    breakdown = aggregate_player_stats("p1", facts).format_breakdown
    assert set(breakdown) == {"singles", "twoManScramble"}
    assert breakdown["twoManScramble"].matches == 2
    assert breakdown["twoManScramble"].wins == 1
    assert breakdown["twoManScramble"].losses == 1


def test_scoring_totals_only_from_individual_formats() -> None:
    facts = [
        make_fact(
            total_gross=80,
            total_net=75,
            strokes_vs_par_gross=8,
            strokes_vs_par_net=3,
            hole_performance=[{"hole": n, "par": 4, "gross": 4} for n in range(1, 19)],
        ),
        make_fact(format=Format.SCRAMBLE, team_total_gross=66),
        make_fact(format=Format.BEST_BALL, total_gross=None),
    ]
    stats = aggregate_player_stats("p1", facts)
    assert stats.total_gross == 80
    assert stats.total_net == 75
    assert stats.strokes_vs_par_net == 3
    assert stats.holes_played == 18


def test_badges_are_counted() -> None:
    facts = [
        make_fact(comeback_win=True, was_never_behind=False, decided_on18=True),
        make_fact(outcome="loss", blown_lead=True, was_never_behind=True),
        make_fact(was_never_behind=True, jekyll_and_hyde=True),
        make_fact(outcome="loss", decided_on18=True),
    ]
    stats = aggregate_player_stats("p1", facts)
    assert stats.comeback_wins == 1
    assert stats.blown_leads == 1
    assert stats.never_behind_wins == 1
    assert stats.jekyll_and_hydes == 1
    assert stats.clutch_wins == 1


def test_usage_counters_ignore_missing_values() -> None:
    facts = [
        make_fact(
            format=Format.SHAMBLE, drives_used=4, balls_used=10, balls_used_solo=3
        ),
        make_fact(format=Format.SINGLES),
    ]
    stats = aggregate_player_stats("p1", facts)
    assert stats.drives_used == 4
    assert stats.balls_used == 10
    assert stats.balls_used_solo == 3


def test_aggregation_is_repeatable() -> None:
    facts = [make_fact(), make_fact(outcome="halve", points_earned=0.5)]
    assert aggregate_player_stats("p1", facts) == aggregate_player_stats("p1", facts)


def test_series_filter_and_split() -> None:
    facts = [
        make_fact(),
        make_fact(
            tournament_series="christmasClassic", outcome="loss", points_earned=0
        ),
    ]
    assert aggregate_player_stats("p1", facts, series="rowdyCup").wins == 1
    by_series = aggregate_by_series("p1", facts)
    assert list(by_series) == ["christmasClassic", "rowdyCup"]
    assert by_series["christmasClassic"].losses == 1
    assert by_series["christmasClassic"].series == "christmasClassic"


def test_by_opponent_tier_counts_each_tier_once() -> None:
    facts = [
        make_fact(opponent_ids=["p2", "p3"], opponent_tiers=["A", "A"]),
        make_fact(opponent_ids=["p4"], opponent_tiers=["B"], outcome="loss"),
    ]
    tiers = aggregate_by_opponent_tier("p1", facts)
    assert tiers["A"].matches == 1
    assert tiers["A"].wins == 1
    assert tiers["B"].losses == 1


def test_by_opponent() -> None:
    facts = [
        make_fact(opponent_ids=["p2", "p3"]),
        make_fact(opponent_ids=["p2"], outcome="halve", points_earned=0.5),
    ]
    opponents = aggregate_by_opponent("p1", facts)
    assert opponents["p2"].matches == 2
    assert opponents["p2"].halves == 1
    assert math.isclose(opponents["p2"].points, 1.5)
    assert opponents["p3"].wins == 1


def test_unknown_player_has_empty_record() -> None:
    stats = aggregate_player_stats("ghost", [make_fact()])
    assert stats.matches_played == 0
    assert stats.format_breakdown == {}
    assert aggregate_by_series("ghost", [make_fact()]) == {}

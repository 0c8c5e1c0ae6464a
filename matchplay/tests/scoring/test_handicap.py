from __future__ import annotations

import pytest

from matchplay.config import reset_settings_cache
from matchplay.scoring import course_handicap, spin_down, strokes_received
from matchplay.scoring.handicap import round_half_up
from matchplay.tests.helpers import course_holes


def test_course_handicap_standard_slope() -> None:
    assert course_handicap(10.4, 113, 72, 72) == 10


def test_course_handicap_rounds_half_up() -> None:
    assert round_half_up(12.5) == 13
    assert round_half_up(11.5) == 12
    assert course_handicap(12.5, 113) == 13


def test_course_handicap_applies_slope_and_rating() -> None:
    # 10 * 130 / 113 = 11.50...
    assert course_handicap(10, 130, 72, 72) == 12
    assert course_handicap(10, 113, 74.1, 72) == 12
    assert course_handicap(10, 113, 70, 72) == 8


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({"handicap_index": "abc", "course_rating": 74, "par": 72}, 2),
        ({"handicap_index": None}, 0),
        ({"handicap_index": True}, 0),
        ({"handicap_index": "10.4"}, 10),
        ({"handicap_index": 10, "slope_rating": 0}, 10),
        ({"handicap_index": 10, "slope_rating": "steep"}, 10),
        ({"handicap_index": 10, "par": 0}, 10),
        ({"handicap_index": float("nan")}, 0),
    ],
)
def test_course_handicap_fallbacks(kwargs, expected) -> None:
    assert course_handicap(**kwargs) == expected


def test_course_handicap_non_finite_result_is_zero() -> None:
    assert course_handicap(1e308, 1e308) == 0


def test_oversized_integers_are_unusable() -> None:
    assert course_handicap(10**400) == 0
    assert course_handicap(10, 10**400) == 10
    assert strokes_received(10**400, course_holes()) == [0] * 18


def test_course_handicap_uses_configured_default_par(monkeypatch) -> None:
    monkeypatch.setenv("MATCHPLAY_DEFAULT_COURSE_PAR", "70")
    reset_settings_cache()
    assert course_handicap(10, 113, 72) == 12


def test_strokes_received_on_hardest_holes() -> None:
    holes = [{"number": n, "par": 4, "hcpIndex": 19 - n} for n in range(1, 19)]
    strokes = strokes_received(2, holes)
    assert strokes[17] == 1 and strokes[16] == 1
    assert sum(strokes) == 2


@pytest.mark.parametrize(
    "handicap, expected",
    [(25, 18), (18, 18), (-3, 0), ("x", 0), (None, 0), (float("nan"), 0), (2.5, 3)],
)
def test_strokes_received_clamps(handicap, expected) -> None:
    assert sum(strokes_received(handicap, course_holes())) == expected


def test_strokes_received_ties_keep_input_order() -> None:
    holes = [
        {"number": 5, "hcpIndex": 1},
        {"number": 2, "hcpIndex": 1},
        {"number": 7, "hcpIndex": 2},
    ]
    strokes = strokes_received(1, holes)
    assert strokes[4] == 1
    assert sum(strokes) == 1


def test_strokes_received_skips_out_of_range_holes() -> None:
    holes = [{"number": 19, "hcpIndex": 1}, {"number": 3, "hcpIndex": 2}]
    assert strokes_received(1, holes) == [0] * 18
    assert strokes_received(2, holes)[2] == 1


def test_spin_down_plays_off_lowest() -> None:
    assert spin_down(12, 8) == (4, 0)
    assert spin_down(3, 3) == (0, 0)
    assert spin_down(-2, 5) == (0, 7)

"""Match document builders shared by the test modules."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from matchplay.scoring import MatchData

A_WINS = (4, 5)
B_WINS = (5, 4)
HALVED = (4, 4)


def strokes_on(*holes: int) -> list[int]:
    vector = [0] * 18
    for number in holes:
        vector[number - 1] = 1
    return vector


def course_holes(par: int = 4) -> list[dict[str, int]]:
    """Eighteen holes of equal par; hole 1 is the hardest."""

    return [{"number": n, "par": par, "hcpIndex": n} for n in range(1, 19)]


def sequence(*runs: tuple[int, tuple[Any, Any]]) -> dict[int, tuple[Any, Any]]:
    """Expand ``(count, scores)`` runs into a hole-number keyed mapping."""

    holes: dict[int, tuple[Any, Any]] = {}
    number = 1
    for count, scores in runs:
        for _ in range(count):
            holes[number] = scores
            number += 1
    return holes


def singles_doc(
    scores: Mapping[int, tuple[Any, Any]],
    *,
    players: Sequence[str] = ("pA", "pB"),
    strokes: Optional[tuple[list[int], list[int]]] = None,
    **extra: Any,
) -> dict[str, Any]:
    strokes_a, strokes_b = strokes or ([0] * 18, [0] * 18)
    doc: dict[str, Any] = {
        "id": "m1",
        "tournamentId": "t1",
        "roundId": "r1",
        "teamAPlayers": [{"playerId": players[0], "strokesReceived": strokes_a}],
        "teamBPlayers": [{"playerId": players[1], "strokesReceived": strokes_b}],
        "holes": {
            str(number): {"input": {"teamAPlayerGross": a, "teamBPlayerGross": b}}
            for number, (a, b) in scores.items()
        },
    }
    doc.update(extra)
    return doc


def singles_match(scores: Mapping[int, tuple[Any, Any]], **kwargs: Any) -> MatchData:
    return MatchData.model_validate(singles_doc(scores, **kwargs))


def pairs_doc(
    scores: Mapping[int, tuple[Sequence[Any], Sequence[Any]]],
    *,
    players: Sequence[str] = ("a1", "a2", "b1", "b2"),
    strokes: Optional[Sequence[list[int]]] = None,
    drives: Optional[Mapping[int, tuple[Any, Any]]] = None,
    **extra: Any,
) -> dict[str, Any]:
    """Best ball or shamble document: two gross scores per side per hole."""

    vectors = list(strokes or [[0] * 18] * 4)
    holes: dict[str, Any] = {}
    for number, (pair_a, pair_b) in scores.items():
        entry: dict[str, Any] = {
            "teamAPlayersGross": list(pair_a),
            "teamBPlayersGross": list(pair_b),
        }
        if drives and number in drives:
            entry["teamADrive"], entry["teamBDrive"] = drives[number]
        holes[str(number)] = {"input": entry}
    doc: dict[str, Any] = {
        "id": "m2",
        "tournamentId": "t1",
        "roundId": "r1",
        "teamAPlayers": [
            {"playerId": players[0], "strokesReceived": vectors[0]},
            {"playerId": players[1], "strokesReceived": vectors[1]},
        ],
        "teamBPlayers": [
            {"playerId": players[2], "strokesReceived": vectors[2]},
            {"playerId": players[3], "strokesReceived": vectors[3]},
        ],
        "holes": holes,
    }
    doc.update(extra)
    return doc


def pairs_match(
    scores: Mapping[int, tuple[Sequence[Any], Sequence[Any]]], **kwargs: Any
) -> MatchData:
    return MatchData.model_validate(pairs_doc(scores, **kwargs))


def scramble_doc(
    scores: Mapping[int, tuple[Any, Any]],
    *,
    players: Sequence[str] = ("a1", "a2", "b1", "b2"),
    drives: Optional[Mapping[int, tuple[Any, Any]]] = None,
    **extra: Any,
) -> dict[str, Any]:
    holes: dict[str, Any] = {}
    for number, (a, b) in scores.items():
        entry: dict[str, Any] = {"teamAGross": a, "teamBGross": b}
        if drives and number in drives:
            entry["teamADrive"], entry["teamBDrive"] = drives[number]
        holes[str(number)] = {"input": entry}
    doc: dict[str, Any] = {
        "id": "m3",
        "tournamentId": "t1",
        "roundId": "r1",
        "teamAPlayers": [{"playerId": players[0]}, {"playerId": players[1]}],
        "teamBPlayers": [{"playerId": players[2]}, {"playerId": players[3]}],
        "holes": holes,
    }
    doc.update(extra)
    return doc


def scramble_match(scores: Mapping[int, tuple[Any, Any]], **kwargs: Any) -> MatchData:
    return MatchData.model_validate(scramble_doc(scores, **kwargs))

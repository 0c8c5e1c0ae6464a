"""Helpers for initialising and repairing raw match documents.

These work on plain dicts in the store's shape, since their output is written
straight back to the match document.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from matchplay.constants import HOLE_COUNT

from .schemas import Format, players_per_side

__all__ = [
    "default_status",
    "empty_holes_for",
    "ensure_side_size",
    "normalize_holes",
    "players_per_side",
    "zeros18",
]


def zeros18() -> list[int]:
    return [0] * HOLE_COUNT


def default_status() -> dict[str, Any]:
    return {"leader": None, "margin": 0, "thru": 0, "dormie": False, "closed": False}


def _blank_input(fmt: Format) -> dict[str, Any]:
    if fmt is Format.SCRAMBLE:
        return {
            "teamAGross": None,
            "teamBGross": None,
            "teamADrive": None,
            "teamBDrive": None,
        }
    if fmt is Format.SINGLES:
        return {"teamAPlayerGross": None, "teamBPlayerGross": None}
    blank: dict[str, Any] = {
        "teamAPlayersGross": [None, None],
        "teamBPlayersGross": [None, None],
    }
    if fmt is Format.SHAMBLE:
        blank.update({"teamADrive": None, "teamBDrive": None})
    return blank


def empty_holes_for(fmt: Format | str) -> dict[str, dict[str, Any]]:
    fmt = Format.coerce(fmt)
    return {str(n): {"input": _blank_input(fmt)} for n in range(1, HOLE_COUNT + 1)}


def ensure_side_size(side: Any, count: int) -> list[dict[str, Any]]:
    """Trim or pad a stored roster to ``count`` players."""

    def blank() -> dict[str, Any]:
        return {"playerId": "", "strokesReceived": zeros18()}

    if not isinstance(side, Sequence) or isinstance(side, (str, bytes)):
        return [blank() for _ in range(count)]

    trimmed: list[dict[str, Any]] = []
    for player in list(side)[:count]:
        entry = player if isinstance(player, Mapping) else {}
        player_id = entry.get("playerId")
        strokes = entry.get("strokesReceived")
        trimmed.append(
            {
                "playerId": player_id if isinstance(player_id, str) else "",
                "strokesReceived": (
                    strokes
                    if isinstance(strokes, list) and len(strokes) == HOLE_COUNT
                    else zeros18()
                ),
            }
        )
    while len(trimmed) < count:
        trimmed.append(blank())
    return trimmed


def _pair(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return [None, None]
    padded = value + [None, None]
    return [padded[0], padded[1]]


def _reshape(existing: Mapping[str, Any], fmt: Format) -> dict[str, Any]:
    if fmt is Format.SCRAMBLE:
        return {
            "teamAGross": existing.get("teamAGross"),
            "teamBGross": existing.get("teamBGross"),
            "teamADrive": existing.get("teamADrive"),
            "teamBDrive": existing.get("teamBDrive"),
        }
    if fmt is Format.SINGLES:
        gross_a = existing.get("teamAPlayerGross")
        gross_b = existing.get("teamBPlayerGross")
        # Holes entered under a two-ball format keep the first player's score.
        if gross_a is None and isinstance(existing.get("teamAPlayersGross"), list):
            gross_a = _pair(existing["teamAPlayersGross"])[0]
        if gross_b is None and isinstance(existing.get("teamBPlayersGross"), list):
            gross_b = _pair(existing["teamBPlayersGross"])[0]
        return {"teamAPlayerGross": gross_a, "teamBPlayerGross": gross_b}
    reshaped: dict[str, Any] = {
        "teamAPlayersGross": _pair(existing.get("teamAPlayersGross")),
        "teamBPlayersGross": _pair(existing.get("teamBPlayersGross")),
    }
    if fmt is Format.SHAMBLE:
        reshaped["teamADrive"] = existing.get("teamADrive")
        reshaped["teamBDrive"] = existing.get("teamBDrive")
    return reshaped


def normalize_holes(
    existing: Mapping[str, Any] | None, fmt: Format | str
) -> dict[str, Any]:
    """Reshape stored holes to the format's layout, keeping entered scores."""

    fmt = Format.coerce(fmt)
    holes: dict[str, Any] = dict(existing or {})
    for number in range(1, HOLE_COUNT + 1):
        key = str(number)
        current = holes.get(key)
        if not isinstance(current, Mapping):
            holes[key] = {"input": _blank_input(fmt)}
            continue
        raw_input = current.get("input")
        holes[key] = {
            "input": _reshape(raw_input if isinstance(raw_input, Mapping) else {}, fmt)
        }
    return holes

"""Pydantic models for match documents and derived match state.

Raw documents are loose: score slots may hold strings, booleans, NaN or be
missing altogether, stroke vectors may be short or carry junk values, and the
holes mapping is keyed by strings. Everything is validated once, here, so the
scoring code downstream can rely on:

* every score slot is a finite ``int``/``float`` or ``None``;
* every stroke vector has exactly 18 entries, each 0 or 1;
* ``MatchData.holes`` is an 18-slot tuple indexed by ``hole_number - 1``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Tuple, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

from matchplay.constants import DEFAULT_HOLE_PAR, HOLE_COUNT

logger = logging.getLogger(__name__)

_HOLE_KEY = re.compile(r"[1-9]|1[0-8]")


class Format(str, Enum):
    SINGLES = "singles"
    BEST_BALL = "twoManBestBall"
    SHAMBLE = "twoManShamble"
    SCRAMBLE = "twoManScramble"

    @classmethod
    def coerce(cls, value: Any) -> "Format":
        """Resolve a stored format string; unknown values fall back to best ball."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.BEST_BALL


def players_per_side(fmt: Format | str) -> int:
    return 1 if Format.coerce(fmt) is Format.SINGLES else 2


def uses_player_scores(fmt: Format | str) -> bool:
    """Two individual scores per side (best ball and shamble)."""

    return Format.coerce(fmt) in (Format.BEST_BALL, Format.SHAMBLE)


def uses_handicap(fmt: Format | str) -> bool:
    return Format.coerce(fmt) in (Format.SINGLES, Format.BEST_BALL)


def tracks_drives(fmt: Format | str) -> bool:
    return Format.coerce(fmt) in (Format.SCRAMBLE, Format.SHAMBLE)


class Side(str, Enum):
    TEAM_A = "teamA"
    TEAM_B = "teamB"

    @property
    def opponent(self) -> "Side":
        return Side.TEAM_B if self is Side.TEAM_A else Side.TEAM_A


class HoleResult(str, Enum):
    TEAM_A = "teamA"
    TEAM_B = "teamB"
    ALL_SQUARE = "AS"
    INCOMPLETE = "incomplete"

    @classmethod
    def for_side(cls, side: Side) -> "HoleResult":
        return cls.TEAM_A if side is Side.TEAM_A else cls.TEAM_B


Winner = Literal["teamA", "teamB", "AS"]


def is_score(value: Any) -> bool:
    """True for finite real numbers; booleans and strings never count."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _score_or_none(value: Any) -> Any:
    return value if is_score(value) else None


def _pair_or_blank(value: Any) -> Tuple[Any, Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        items = list(value[:2]) + [None, None]
        return _score_or_none(items[0]), _score_or_none(items[1])
    return None, None


def _drive_or_none(value: Any) -> Optional[int]:
    if is_score(value) and value in (0, 1):
        return int(value)
    return None


def clamp_strokes(value: Any) -> Tuple[int, ...]:
    """Normalise a stored stroke vector to 18 entries of 0 or 1."""

    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return (0,) * HOLE_COUNT
    clamped = [1 if is_score(item) and item == 1 else 0 for item in value[:HOLE_COUNT]]
    clamped.extend([0] * (HOLE_COUNT - len(clamped)))
    if len(value) != HOLE_COUNT or any(
        clamped[idx] != item for idx, item in enumerate(value[:HOLE_COUNT])
    ):
        logger.debug("clamped stroke vector %r", value)
    return tuple(clamped)


Score = Annotated[Optional[Union[int, float]], BeforeValidator(_score_or_none)]
ScorePair = Annotated[Tuple[Score, Score], BeforeValidator(_pair_or_blank)]
Drive = Annotated[Optional[int], BeforeValidator(_drive_or_none)]


class HoleInput(BaseModel):
    """Raw entry for one hole; only the fields of the round's format are read."""

    team_a_player_gross: Score = Field(
        default=None,
        validation_alias=AliasChoices("team_a_player_gross", "teamAPlayerGross"),
        serialization_alias="teamAPlayerGross",
    )
    team_b_player_gross: Score = Field(
        default=None,
        validation_alias=AliasChoices("team_b_player_gross", "teamBPlayerGross"),
        serialization_alias="teamBPlayerGross",
    )
    team_a_players_gross: ScorePair = Field(
        default=(None, None),
        validation_alias=AliasChoices("team_a_players_gross", "teamAPlayersGross"),
        serialization_alias="teamAPlayersGross",
    )
    team_b_players_gross: ScorePair = Field(
        default=(None, None),
        validation_alias=AliasChoices("team_b_players_gross", "teamBPlayersGross"),
        serialization_alias="teamBPlayersGross",
    )
    team_a_gross: Score = Field(
        default=None,
        validation_alias=AliasChoices("team_a_gross", "teamAGross"),
        serialization_alias="teamAGross",
    )
    team_b_gross: Score = Field(
        default=None,
        validation_alias=AliasChoices("team_b_gross", "teamBGross"),
        serialization_alias="teamBGross",
    )
    team_a_drive: Drive = Field(
        default=None,
        validation_alias=AliasChoices("team_a_drive", "teamADrive"),
        serialization_alias="teamADrive",
    )
    team_b_drive: Drive = Field(
        default=None,
        validation_alias=AliasChoices("team_b_drive", "teamBDrive"),
        serialization_alias="teamBDrive",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def player_gross(self, side: Side) -> Optional[float]:
        if side is Side.TEAM_A:
            return self.team_a_player_gross
        return self.team_b_player_gross

    def players_gross(self, side: Side) -> Tuple[Optional[float], Optional[float]]:
        if side is Side.TEAM_A:
            return self.team_a_players_gross
        return self.team_b_players_gross

    def team_gross(self, side: Side) -> Optional[float]:
        return self.team_a_gross if side is Side.TEAM_A else self.team_b_gross

    def drive(self, side: Side) -> Optional[int]:
        return self.team_a_drive if side is Side.TEAM_A else self.team_b_drive


class PlayerInMatch(BaseModel):
    player_id: str = Field(
        default="",
        validation_alias=AliasChoices("player_id", "playerId"),
        serialization_alias="playerId",
    )
    strokes_received: Tuple[int, ...] = Field(
        default=(0,) * HOLE_COUNT,
        validation_alias=AliasChoices("strokes_received", "strokesReceived"),
        serialization_alias="strokesReceived",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("player_id", mode="before")
    @classmethod
    def _string_id(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("strokes_received", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> Tuple[int, ...]:
        return clamp_strokes(value)

    def stroke_on(self, hole_number: int) -> int:
        if 1 <= hole_number <= HOLE_COUNT:
            return self.strokes_received[hole_number - 1]
        return 0

    @property
    def strokes_given(self) -> int:
        return sum(self.strokes_received)


def _hole_entry(value: Any) -> HoleInput:
    if isinstance(value, HoleInput):
        return value
    if isinstance(value, Mapping):
        raw = value["input"] if "input" in value else value
        if isinstance(raw, HoleInput):
            return raw
        if isinstance(raw, Mapping):
            return HoleInput.model_validate(raw)
    return HoleInput()


def parse_holes(value: Any) -> Tuple[Optional[HoleInput], ...]:
    """Turn the stored sparse holes mapping into a fixed 18-slot tuple."""

    slots: list[Optional[HoleInput]] = [None] * HOLE_COUNT
    if isinstance(value, Mapping):
        for key, entry in value.items():
            if isinstance(key, int) and not isinstance(key, bool):
                key = str(key)
            if not isinstance(key, str) or not _HOLE_KEY.fullmatch(key):
                logger.debug("ignoring hole key %r", key)
                continue
            slots[int(key) - 1] = _hole_entry(entry)
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        for idx, entry in enumerate(value[:HOLE_COUNT]):
            slots[idx] = None if entry is None else _hole_entry(entry)
    return tuple(slots)


def _roster(value: Any) -> list[Any]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return []
    return [
        item if isinstance(item, (Mapping, PlayerInMatch)) else {} for item in value
    ]


class MatchData(BaseModel):
    id: Optional[str] = None
    tournament_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tournament_id", "tournamentId"),
        serialization_alias="tournamentId",
    )
    round_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("round_id", "roundId"),
        serialization_alias="roundId",
    )
    team_a_players: list[PlayerInMatch] = Field(
        default_factory=list,
        validation_alias=AliasChoices("team_a_players", "teamAPlayers"),
        serialization_alias="teamAPlayers",
    )
    team_b_players: list[PlayerInMatch] = Field(
        default_factory=list,
        validation_alias=AliasChoices("team_b_players", "teamBPlayers"),
        serialization_alias="teamBPlayers",
    )
    holes: Tuple[Optional[HoleInput], ...] = Field(default=(None,) * HOLE_COUNT)
    course_handicaps: list[Score] = Field(
        default_factory=list,
        validation_alias=AliasChoices("course_handicaps", "courseHandicaps"),
        serialization_alias="courseHandicaps",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("holes", mode="before")
    @classmethod
    def _parse_holes(cls, value: Any) -> Tuple[Optional[HoleInput], ...]:
        return parse_holes(value)

    @field_validator("team_a_players", "team_b_players", mode="before")
    @classmethod
    def _parse_roster(cls, value: Any) -> list[Any]:
        return _roster(value)

    @field_validator("course_handicaps", mode="before")
    @classmethod
    def _parse_course_handicaps(cls, value: Any) -> list[Any]:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
            return []
        return list(value)

    def hole(self, hole_number: int) -> Optional[HoleInput]:
        if 1 <= hole_number <= HOLE_COUNT:
            return self.holes[hole_number - 1]
        return None

    def played_hole_numbers(self) -> list[int]:
        """Hole numbers that carry an entry, ascending."""

        return [idx + 1 for idx, hole in enumerate(self.holes) if hole is not None]

    def players(self, side: Side) -> list[PlayerInMatch]:
        return self.team_a_players if side is Side.TEAM_A else self.team_b_players

    def stroke(self, side: Side, slot: int, hole_number: int) -> int:
        roster = self.players(side)
        if slot >= len(roster):
            return 0
        return roster[slot].stroke_on(hole_number)


class CourseHole(BaseModel):
    number: int
    par: int = DEFAULT_HOLE_PAR
    hcp_index: int = Field(
        default=HOLE_COUNT,
        validation_alias=AliasChoices("hcp_index", "hcpIndex"),
        serialization_alias="hcpIndex",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MatchSummary(BaseModel):
    holes_won_a: int = Field(alias="holesWonA")
    holes_won_b: int = Field(alias="holesWonB")
    thru: int
    leader: Optional[Side] = None
    margin: int
    dormie: bool
    closed: bool
    winner: Winner
    was_team_a_down3_plus_back9: bool = Field(alias="wasTeamADown3PlusBack9")
    was_team_a_up3_plus_back9: bool = Field(alias="wasTeamAUp3PlusBack9")
    margin_history: list[int] = Field(default_factory=list, alias="marginHistory")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def holes_left(self) -> int:
        return HOLE_COUNT - self.thru

    def holes_won(self, side: Side) -> int:
        return self.holes_won_a if side is Side.TEAM_A else self.holes_won_b

    def was_down3_plus_back9(self, side: Side) -> bool:
        if side is Side.TEAM_A:
            return self.was_team_a_down3_plus_back9
        return self.was_team_a_up3_plus_back9


class MatchStatus(BaseModel):
    leader: Optional[Side] = None
    margin: int = 0
    thru: int = 0
    dormie: bool = False
    closed: bool = False
    was_team_a_down3_plus_back9: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "was_team_a_down3_plus_back9", "wasTeamADown3PlusBack9"
        ),
        serialization_alias="wasTeamADown3PlusBack9",
    )
    was_team_a_up3_plus_back9: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "was_team_a_up3_plus_back9", "wasTeamAUp3PlusBack9"
        ),
        serialization_alias="wasTeamAUp3PlusBack9",
    )
    margin_history: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("margin_history", "marginHistory"),
        serialization_alias="marginHistory",
    )

    model_config = ConfigDict(populate_by_name=True)


class MatchResult(BaseModel):
    winner: Winner
    holes_won_a: int = Field(
        validation_alias=AliasChoices("holes_won_a", "holesWonA"),
        serialization_alias="holesWonA",
    )
    holes_won_b: int = Field(
        validation_alias=AliasChoices("holes_won_b", "holesWonB"),
        serialization_alias="holesWonB",
    )

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "CourseHole",
    "Format",
    "HoleInput",
    "HoleResult",
    "MatchData",
    "MatchResult",
    "MatchStatus",
    "MatchSummary",
    "PlayerInMatch",
    "Side",
    "Winner",
    "clamp_strokes",
    "is_score",
    "parse_holes",
    "players_per_side",
    "tracks_drives",
    "uses_handicap",
    "uses_player_scores",
]

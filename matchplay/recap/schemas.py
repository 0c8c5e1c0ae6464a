"""Round recap models: vs-all records, hole averages and leader boards."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from matchplay.config import get_settings
from matchplay.scoring.schemas import CourseHole, Score, Side
from matchplay.stats.schemas import HolePerformance, PlayerMatchFact


class PlayerFactForSim(BaseModel):
    """The slice of a player fact the head-to-head simulation reads."""

    player_id: str = Field(
        validation_alias=AliasChoices("player_id", "playerId"),
        serialization_alias="playerId",
    )
    player_name: str = Field(
        default="",
        validation_alias=AliasChoices("player_name", "playerName"),
        serialization_alias="playerName",
    )
    player_handicap: Score = Field(
        default=None,
        validation_alias=AliasChoices("player_handicap", "playerHandicap"),
        serialization_alias="playerHandicap",
    )
    team: Optional[Side] = None
    partner_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("partner_ids", "partnerIds"),
        serialization_alias="partnerIds",
    )
    hole_performance: list[HolePerformance] = Field(
        default_factory=list,
        validation_alias=AliasChoices("hole_performance", "holePerformance"),
        serialization_alias="holePerformance",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def from_fact(cls, fact: PlayerMatchFact) -> "PlayerFactForSim":
        return cls(
            player_id=fact.player_id,
            player_name=fact.player_name,
            player_handicap=fact.player_handicap,
            team=fact.team,
            partner_ids=list(fact.partner_ids),
            hole_performance=list(fact.hole_performance),
        )

    @property
    def team_key(self) -> str:
        return "_".join(sorted([self.player_id, *self.partner_ids]))

    def gross_on(self, hole_number: int) -> Optional[float]:
        for row in self.hole_performance:
            if row.hole == hole_number:
                return row.gross
        return None


class HeadToHeadResult(BaseModel):
    winner: Literal["A", "B", "tie"]
    holes_won_a: int = Field(alias="holesWonA")
    holes_won_b: int = Field(alias="holesWonB")

    model_config = ConfigDict(populate_by_name=True)


class VsAllRecord(BaseModel):
    player_id: str = Field(alias="playerId")
    player_name: str = Field(default="", alias="playerName")
    wins: int = 0
    losses: int = 0
    ties: int = 0
    team_key: Optional[str] = Field(default=None, alias="teamKey")

    model_config = ConfigDict(populate_by_name=True)


class HoleAverage(BaseModel):
    hole_number: int = Field(alias="holeNumber")
    par: int
    avg_gross: Optional[float] = Field(default=None, alias="avgGross")
    avg_net: Optional[float] = Field(default=None, alias="avgNet")
    lowest_gross: Optional[float] = Field(default=None, alias="lowestGross")
    lowest_net: Optional[float] = Field(default=None, alias="lowestNet")
    highest_gross: Optional[float] = Field(default=None, alias="highestGross")
    highest_net: Optional[float] = Field(default=None, alias="highestNet")
    scoring_count: int = Field(default=0, alias="scoringCount")

    model_config = ConfigDict(populate_by_name=True)


class LeaderEntry(BaseModel):
    player_id: str = Field(alias="playerId")
    player_name: str = Field(default="", alias="playerName")
    count: int
    holes: list[int] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class BestHole(BaseModel):
    hole_number: int = Field(alias="holeNumber")
    avg_strokes_under_par: float = Field(alias="avgStrokesUnderPar")

    model_config = ConfigDict(populate_by_name=True)


class WorstHole(BaseModel):
    hole_number: int = Field(alias="holeNumber")
    avg_strokes_over_par: float = Field(alias="avgStrokesOverPar")

    model_config = ConfigDict(populate_by_name=True)


class Leaders(BaseModel):
    birdies_gross: list[LeaderEntry] = Field(default_factory=list, alias="birdiesGross")
    birdies_net: list[LeaderEntry] = Field(default_factory=list, alias="birdiesNet")
    eagles_gross: list[LeaderEntry] = Field(default_factory=list, alias="eaglesGross")
    eagles_net: list[LeaderEntry] = Field(default_factory=list, alias="eaglesNet")
    best_hole: Optional[BestHole] = Field(default=None, alias="bestHole")
    worst_hole: Optional[WorstHole] = Field(default=None, alias="worstHole")

    model_config = ConfigDict(populate_by_name=True)


class CourseInfo(BaseModel):
    id: str = ""
    name: str = ""
    par: Optional[int] = None
    holes: list[CourseHole] = Field(default_factory=list)
    slope_rating: Score = Field(
        default=None,
        validation_alias=AliasChoices("slope_rating", "slopeRating", "slope"),
    )
    course_rating: Score = Field(
        default=None,
        validation_alias=AliasChoices("course_rating", "courseRating", "rating"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def resolved_par(self) -> int:
        if self.par is not None and self.par > 0:
            return self.par
        if self.holes:
            return sum(hole.par for hole in self.holes)
        return get_settings().default_course_par


class RoundRecap(BaseModel):
    round_id: str = Field(alias="roundId")
    tournament_id: str = Field(alias="tournamentId")
    format: str
    day: Optional[int] = None
    course_id: str = Field(default="", alias="courseId")
    course_name: str = Field(default="", alias="courseName")
    course_par: int = Field(alias="coursePar")
    vs_all_records: list[VsAllRecord] = Field(
        default_factory=list, alias="vsAllRecords"
    )
    hole_averages: list[HoleAverage] = Field(default_factory=list, alias="holeAverages")
    leaders: Leaders = Field(default_factory=Leaders)

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "BestHole",
    "CourseInfo",
    "HeadToHeadResult",
    "HoleAverage",
    "LeaderEntry",
    "Leaders",
    "PlayerFactForSim",
    "RoundRecap",
    "VsAllRecord",
    "WorstHole",
]

"""Models for per-match player facts and their lifetime aggregates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from matchplay.config import get_settings
from matchplay.constants import DEFAULT_HOLE_PAR
from matchplay.scoring.schemas import CourseHole, Format, Score, Side, is_score

Outcome = Literal["win", "loss", "halve"]
HoleOutcome = Literal["win", "loss", "halve"]

FormatField = Annotated[Format, BeforeValidator(Format.coerce)]


def _default_points() -> float:
    return get_settings().default_points_value


class MatchContext(BaseModel):
    """Round, course and tournament facts needed to describe a match."""

    format: FormatField = Format.BEST_BALL
    points_value: float = Field(
        default_factory=_default_points,
        validation_alias=AliasChoices("points_value", "pointsValue"),
    )
    course_id: str = Field(
        default="", validation_alias=AliasChoices("course_id", "courseId")
    )
    course_par: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("course_par", "coursePar")
    )
    course_holes: list[CourseHole] = Field(
        default_factory=list,
        validation_alias=AliasChoices("course_holes", "courseHoles"),
    )
    slope_rating: Score = Field(
        default=None, validation_alias=AliasChoices("slope_rating", "slopeRating")
    )
    course_rating: Score = Field(
        default=None, validation_alias=AliasChoices("course_rating", "courseRating")
    )
    day: int = 0
    team_a_id: str = Field(
        default="teamA", validation_alias=AliasChoices("team_a_id", "teamAId")
    )
    team_b_id: str = Field(
        default="teamB", validation_alias=AliasChoices("team_b_id", "teamBId")
    )
    tournament_year: int = Field(
        default=0, validation_alias=AliasChoices("tournament_year", "tournamentYear")
    )
    tournament_name: str = Field(
        default="", validation_alias=AliasChoices("tournament_name", "tournamentName")
    )
    tournament_series: str = Field(
        default="",
        validation_alias=AliasChoices("tournament_series", "tournamentSeries"),
    )
    player_tiers: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("player_tiers", "playerTiers"),
    )
    player_handicaps: dict[str, float] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("player_handicaps", "playerHandicaps"),
    )
    player_names: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("player_names", "playerNames"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def resolved_course_par(self) -> int:
        if self.course_par is not None and self.course_par > 0:
            return self.course_par
        if self.course_holes:
            return sum(hole.par for hole in self.course_holes)
        return get_settings().default_course_par

    def hole_par(self, hole_number: int) -> int:
        for hole in self.course_holes:
            if hole.number == hole_number:
                return hole.par
        return DEFAULT_HOLE_PAR

    def team_id(self, side: Side) -> str:
        return self.team_a_id if side is Side.TEAM_A else self.team_b_id

    def tier(self, player_id: str) -> str:
        return self.player_tiers.get(player_id, "Unknown")

    @classmethod
    def from_documents(
        cls,
        *,
        round_doc: Mapping[str, Any] | None = None,
        course_doc: Mapping[str, Any] | None = None,
        tournament_doc: Mapping[str, Any] | None = None,
        player_names: Mapping[str, str] | None = None,
    ) -> "MatchContext":
        """Assemble a context from raw round, course and tournament documents."""

        round_doc = round_doc or {}
        course_doc = course_doc or {}
        tournament_doc = tournament_doc or {}

        points = round_doc.get("pointsValue")
        data: dict[str, Any] = {
            "format": round_doc.get("format"),
            "points_value": points if is_score(points) else _default_points(),
            "course_id": round_doc.get("courseId") or "",
            "day": int(round_doc["day"]) if is_score(round_doc.get("day")) else 0,
        }

        holes = course_doc.get("holes")
        if not isinstance(holes, list):
            holes = (round_doc.get("course") or {}).get("holes")
        if isinstance(holes, list):
            data["course_holes"] = [h for h in holes if isinstance(h, Mapping)]
        if is_score(course_doc.get("par")):
            data["course_par"] = int(course_doc["par"])
        if is_score(course_doc.get("slope")):
            data["slope_rating"] = course_doc["slope"]
        if is_score(course_doc.get("rating")):
            data["course_rating"] = course_doc["rating"]

        tiers: dict[str, str] = {}
        handicaps: dict[str, float] = {}
        for team_key, id_key in (("teamA", "team_a_id"), ("teamB", "team_b_id")):
            team = tournament_doc.get(team_key) or {}
            data[id_key] = team.get("id") or team_key
            for tier, player_ids in (team.get("rosterByTier") or {}).items():
                if isinstance(player_ids, list):
                    tiers.update({pid: tier for pid in player_ids})
            for pid, hcp in (team.get("handicapByPlayer") or {}).items():
                if is_score(hcp):
                    handicaps[pid] = hcp
        data.update(
            tournament_year=tournament_doc.get("year") or 0,
            tournament_name=tournament_doc.get("name") or "",
            tournament_series=tournament_doc.get("series") or "",
            player_tiers=tiers,
            player_handicaps=handicaps,
            player_names=dict(player_names or {}),
        )
        return cls.model_validate(data)


class HolePerformance(BaseModel):
    hole: int
    par: int
    result: Optional[HoleOutcome] = None
    gross: Optional[float] = None
    net: Optional[float] = None
    strokes: Optional[int] = None
    drive_used: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("drive_used", "driveUsed"),
        serialization_alias="driveUsed",
    )

    model_config = ConfigDict(populate_by_name=True)


class PlayerMatchFact(BaseModel):
    player_id: str = Field(alias="playerId")
    player_name: str = Field(default="", alias="playerName")
    match_id: str = Field(default="", alias="matchId")
    tournament_id: str = Field(default="", alias="tournamentId")
    round_id: str = Field(default="", alias="roundId")
    format: Format
    team: Side

    outcome: Outcome
    points_earned: float = Field(alias="pointsEarned")

    player_tier: str = Field(default="Unknown", alias="playerTier")
    player_team_id: str = Field(alias="playerTeamId")
    opponent_team_id: str = Field(alias="opponentTeamId")
    player_handicap: Optional[float] = Field(default=None, alias="playerHandicap")
    player_course_handicap: Optional[int] = Field(
        default=None, alias="playerCourseHandicap"
    )
    opponent_ids: list[str] = Field(default_factory=list, alias="opponentIds")
    opponent_tiers: list[str] = Field(default_factory=list, alias="opponentTiers")
    opponent_handicaps: list[Optional[float]] = Field(
        default_factory=list, alias="opponentHandicaps"
    )
    partner_ids: list[str] = Field(default_factory=list, alias="partnerIds")
    partner_tiers: list[str] = Field(default_factory=list, alias="partnerTiers")
    partner_handicaps: list[Optional[float]] = Field(
        default_factory=list, alias="partnerHandicaps"
    )

    holes_won: int = Field(alias="holesWon")
    holes_lost: int = Field(alias="holesLost")
    holes_halved: int = Field(alias="holesHalved")
    final_margin: int = Field(alias="finalMargin")
    final_thru: int = Field(alias="finalThru")

    comeback_win: bool = Field(alias="comebackWin")
    blown_lead: bool = Field(alias="blownLead")
    strokes_given: int = Field(alias="strokesGiven")
    lead_changes: int = Field(alias="leadChanges")
    was_never_behind: Optional[bool] = Field(default=None, alias="wasNeverBehind")
    winning_hole: Optional[int] = Field(default=None, alias="winningHole")

    decided_on18: bool = Field(default=False, alias="decidedOn18")
    won18th_hole: Optional[bool] = Field(default=None, alias="won18thHole")

    balls_used: Optional[int] = Field(default=None, alias="ballsUsed")
    balls_used_solo: Optional[int] = Field(default=None, alias="ballsUsedSolo")
    balls_used_shared: Optional[int] = Field(default=None, alias="ballsUsedShared")
    balls_used_solo_won_hole: Optional[int] = Field(
        default=None, alias="ballsUsedSoloWonHole"
    )
    balls_used_solo_push: Optional[int] = Field(default=None, alias="ballsUsedSoloPush")
    ball_used_on18: Optional[bool] = Field(default=None, alias="ballUsedOn18")
    drives_used: Optional[int] = Field(default=None, alias="drivesUsed")

    course_id: str = Field(default="", alias="courseId")
    course_par: int = Field(alias="coursePar")
    day: int = 0
    tournament_year: int = Field(default=0, alias="tournamentYear")
    tournament_name: str = Field(default="", alias="tournamentName")
    tournament_series: str = Field(default="", alias="tournamentSeries")

    total_gross: Optional[float] = Field(default=None, alias="totalGross")
    total_net: Optional[float] = Field(default=None, alias="totalNet")
    strokes_vs_par_gross: Optional[float] = Field(
        default=None, alias="strokesVsParGross"
    )
    strokes_vs_par_net: Optional[float] = Field(default=None, alias="strokesVsParNet")
    team_total_gross: Optional[float] = Field(default=None, alias="teamTotalGross")
    team_strokes_vs_par_gross: Optional[float] = Field(
        default=None, alias="teamStrokesVsParGross"
    )

    birdies: int = 0
    eagles: int = 0
    jekyll_and_hyde: Optional[bool] = Field(default=None, alias="jekyllAndHyde")
    hole_performance: list[HolePerformance] = Field(
        default_factory=list, alias="holePerformance"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def document_id(self) -> str:
        return f"{self.match_id}_{self.player_id}"

    @property
    def holes_played(self) -> int:
        return sum(1 for hole in self.hole_performance if hole.gross is not None)


class RecordLine(BaseModel):
    wins: int = 0
    losses: int = 0
    halves: int = 0
    matches: int = 0
    points: float = 0.0

    def add(self, fact: PlayerMatchFact) -> None:
        self.matches += 1
        self.points += fact.points_earned
        if fact.outcome == "win":
            self.wins += 1
        elif fact.outcome == "loss":
            self.losses += 1
        else:
            self.halves += 1


class PlayerStats(BaseModel):
    player_id: str = Field(alias="playerId")
    series: Optional[str] = None

    wins: int = 0
    losses: int = 0
    halves: int = 0
    points: float = 0.0
    matches_played: int = Field(default=0, alias="matchesPlayed")
    format_breakdown: dict[str, RecordLine] = Field(
        default_factory=dict, alias="formatBreakdown"
    )

    total_gross: float = Field(default=0, alias="totalGross")
    total_net: float = Field(default=0, alias="totalNet")
    holes_played: int = Field(default=0, alias="holesPlayed")
    strokes_vs_par_gross: float = Field(default=0, alias="strokesVsParGross")
    strokes_vs_par_net: float = Field(default=0, alias="strokesVsParNet")

    birdies: int = 0
    eagles: int = 0
    holes_won: int = Field(default=0, alias="holesWon")
    holes_lost: int = Field(default=0, alias="holesLost")
    holes_halved: int = Field(default=0, alias="holesHalved")

    comeback_wins: int = Field(default=0, alias="comebackWins")
    blown_leads: int = Field(default=0, alias="blownLeads")
    never_behind_wins: int = Field(default=0, alias="neverBehindWins")
    jekyll_and_hydes: int = Field(default=0, alias="jekyllAndHydes")
    clutch_wins: int = Field(default=0, alias="clutchWins")

    drives_used: int = Field(default=0, alias="drivesUsed")
    balls_used: int = Field(default=0, alias="ballsUsed")
    balls_used_solo: int = Field(default=0, alias="ballsUsedSolo")

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "HolePerformance",
    "MatchContext",
    "PlayerMatchFact",
    "PlayerStats",
    "RecordLine",
]


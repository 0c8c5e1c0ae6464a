from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from matchplay.security import require_api_key
from matchplay.stats import (
    PlayerMatchFact,
    PlayerStats,
    RecordLine,
    aggregate_by_opponent,
    aggregate_by_opponent_tier,
    aggregate_by_series,
    aggregate_player_stats,
)

router = APIRouter(
    prefix="/api/players", tags=["players"], dependencies=[Depends(require_api_key)]
)


class PlayerStatsRequest(BaseModel):
    facts: list[PlayerMatchFact] = Field(default_factory=list)
    series: Optional[str] = None


class PlayerStatsResponse(BaseModel):
    stats: PlayerStats
    by_series: dict[str, PlayerStats] = Field(default_factory=dict, alias="bySeries")
    by_opponent_tier: dict[str, RecordLine] = Field(
        default_factory=dict, alias="byOpponentTier"
    )
    by_opponent: dict[str, RecordLine] = Field(default_factory=dict, alias="byOpponent")

    model_config = ConfigDict(populate_by_name=True)


@router.post("/{player_id}/stats", response_model=PlayerStatsResponse)
def player_stats(player_id: str, payload: PlayerStatsRequest) -> PlayerStatsResponse:
    return PlayerStatsResponse(
        stats=aggregate_player_stats(player_id, payload.facts, series=payload.series),
        by_series=aggregate_by_series(player_id, payload.facts),
        by_opponent_tier=aggregate_by_opponent_tier(player_id, payload.facts),
        by_opponent=aggregate_by_opponent(player_id, payload.facts),
    )

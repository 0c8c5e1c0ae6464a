from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from matchplay.metrics import RECOMPUTATIONS
from matchplay.scoring import (
    Format,
    MatchData,
    MatchResult,
    MatchStatus,
    MatchSummary,
    build_status_and_result,
    summarize,
)
from matchplay.security import require_api_key
from matchplay.stats import MatchContext, PlayerMatchFact, derive_player_facts
from matchplay.sync import plan_fact_writes, plan_match_update

router = APIRouter(
    prefix="/api/matches", tags=["matches"], dependencies=[Depends(require_api_key)]
)

logger = logging.getLogger(__name__)


class SummaryRequest(BaseModel):
    format: Format = Format.BEST_BALL
    match: MatchData


class SummaryResponse(BaseModel):
    summary: MatchSummary
    status: MatchStatus
    result: MatchResult


class FactsRequest(BaseModel):
    match: MatchData
    context: MatchContext = Field(default_factory=MatchContext)
    match_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("match_id", "matchId")
    )

    model_config = ConfigDict(populate_by_name=True)


class PlanRequest(BaseModel):
    match_id: str = Field(validation_alias=AliasChoices("match_id", "matchId"))
    before: Optional[dict[str, Any]] = None
    after: Optional[dict[str, Any]] = None
    context: MatchContext = Field(default_factory=MatchContext)

    model_config = ConfigDict(populate_by_name=True)


class PlanResponse(BaseModel):
    match_update: Optional[dict[str, Any]] = Field(default=None, alias="matchUpdate")
    delete_existing_facts: bool = Field(alias="deleteExistingFacts")
    fact_upserts: dict[str, PlayerMatchFact] = Field(
        default_factory=dict, alias="factUpserts"
    )

    model_config = ConfigDict(populate_by_name=True)


@router.post("/summary", response_model=SummaryResponse)
def match_summary(payload: SummaryRequest) -> SummaryResponse:
    RECOMPUTATIONS.labels(kind="summary").inc()
    summary = summarize(payload.format, payload.match)
    status, result = build_status_and_result(summary)
    return SummaryResponse(summary=summary, status=status, result=result)


@router.post("/facts", response_model=list[PlayerMatchFact])
def match_facts(payload: FactsRequest) -> list[PlayerMatchFact]:
    RECOMPUTATIONS.labels(kind="facts").inc()
    return derive_player_facts(
        payload.match, payload.context, match_id=payload.match_id
    )


@router.post("/plan", response_model=PlanResponse)
def match_plan(payload: PlanRequest) -> PlanResponse:
    update = plan_match_update(payload.before, payload.after, payload.context.format)
    facts = plan_fact_writes(payload.after, payload.context, match_id=payload.match_id)
    logger.info(
        "planned match %s: update=%s delete_facts=%s upserts=%d",
        payload.match_id,
        update is not None,
        facts.delete_existing,
        len(facts.upserts),
    )
    return PlanResponse(
        match_update=update,
        delete_existing_facts=facts.delete_existing,
        fact_upserts={fact.document_id: fact for fact in facts.upserts},
    )

"""Write planning for the match document triggers.

The store calls these on every match write. They never touch storage
themselves: they return what should be merged onto the match and which fact
documents to delete or upsert, so redundant trigger runs converge on the same
stored state.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from matchplay.metrics import RECOMPUTATIONS
from matchplay.scoring.schemas import Format, MatchData
from matchplay.scoring.summary import build_status_and_result, summarize
from matchplay.stats.facts import derive_player_facts
from matchplay.stats.schemas import MatchContext, PlayerMatchFact

logger = logging.getLogger(__name__)

DERIVED_MATCH_KEYS = frozenset({"status", "result", "_computeSig"})


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def changed_keys(
    before: Optional[Mapping[str, Any]], after: Optional[Mapping[str, Any]]
) -> set[str]:
    """Top-level keys whose value differs, including keys dropped in ``after``."""

    before = before or {}
    after = after or {}
    changed = {
        key
        for key, value in after.items()
        if key not in before or _canonical(value) != _canonical(before[key])
    }
    changed.update(key for key in before if key not in after)
    return changed


def plan_match_update(
    before: Optional[Mapping[str, Any]],
    after: Optional[Mapping[str, Any]],
    format: Format | str,
) -> Optional[dict[str, Any]]:
    """Return the ``status``/``result`` patch for a match write, or ``None``."""

    if after is None:
        return None
    changed = changed_keys(before, after)
    if changed <= DERIVED_MATCH_KEYS:
        logger.debug("skipping recompute; only derived keys changed: %s", changed)
        return None
    if not after.get("roundId"):
        logger.debug("skipping recompute; match has no roundId")
        return None

    RECOMPUTATIONS.labels(kind="status").inc()
    summary = summarize(format, MatchData.model_validate(after))
    status, result = build_status_and_result(summary)
    patch = {
        "status": status.model_dump(mode="json", by_alias=True),
        "result": result.model_dump(mode="json", by_alias=True),
    }
    stored = {"status": after.get("status"), "result": after.get("result")}
    if _canonical(stored) == _canonical(patch):
        logger.debug("stored status and result already current")
        return None
    return patch


@dataclass(frozen=True)
class FactWritePlan:
    delete_existing: bool
    upserts: list[PlayerMatchFact] = field(default_factory=list)

    @property
    def documents(self) -> dict[str, dict[str, Any]]:
        """Upserts keyed by fact document id, serialised for the store."""

        return {
            fact.document_id: fact.model_dump(mode="json", by_alias=True)
            for fact in self.upserts
        }


def plan_fact_writes(
    after: Optional[Mapping[str, Any]],
    context: MatchContext,
    *,
    match_id: str,
) -> FactWritePlan:
    """Plan player fact writes for a match.

    A deleted or unfinished match drops all of its facts, which is how a
    reopened match loses the facts it earned when it first closed.
    """

    if after is None:
        return FactWritePlan(delete_existing=True)

    match = MatchData.model_validate(after)
    summary = summarize(context.format, match)
    if not summary.closed:
        logger.debug("match %s is open; planning fact deletion", match_id)
        return FactWritePlan(delete_existing=True)

    RECOMPUTATIONS.labels(kind="facts").inc()
    facts = derive_player_facts(match, context, match_id=match_id, summary=summary)
    return FactWritePlan(delete_existing=False, upserts=facts)


__all__ = [
    "DERIVED_MATCH_KEYS",
    "FactWritePlan",
    "changed_keys",
    "plan_fact_writes",
    "plan_match_update",
]

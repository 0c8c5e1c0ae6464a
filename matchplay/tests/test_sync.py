from __future__ import annotations

import copy

from matchplay.metrics import REGISTRY
from matchplay.stats import MatchContext
from matchplay.sync import (
    DERIVED_MATCH_KEYS,
    changed_keys,
    plan_fact_writes,
    plan_match_update,
)
from matchplay.tests.helpers import A_WINS, B_WINS, course_holes, sequence, singles_doc


def _recomputations(kind: str) -> float:
    value = REGISTRY.get_sample_value(
        "matchplay_recomputations_total", {"kind": kind}
    )
    return value or 0.0


def _context() -> MatchContext:
    return MatchContext.model_validate(
        {"format": "singles", "courseHoles": course_holes()}
    )


def test_changed_keys() -> None:
    before = {"a": 1, "b": {"x": [1, 2]}, "gone": True}
    after = {"a": 1, "b": {"x": [1, 3]}, "c": 4}
    assert changed_keys(before, after) == {"b", "c", "gone"}
    assert changed_keys(None, {"a": 1}) == {"a"}
    assert changed_keys({"a": {"k": 1, "j": 2}}, {"a": {"j": 2, "k": 1}}) == set()


def test_derived_keys() -> None:
    assert DERIVED_MATCH_KEYS == {"status", "result", "_computeSig"}


def test_deleted_match_needs_no_update() -> None:
    assert plan_match_update(singles_doc({}), None, "singles") is None


def test_score_entry_produces_status_patch() -> None:
    before = singles_doc({})
    after = singles_doc(sequence((2, A_WINS)))
    start = _recomputations("status")

    patch = plan_match_update(before, after, "singles")

    assert patch is not None
    assert patch["status"]["thru"] == 2
    assert patch["status"]["leader"] == "teamA"
    assert patch["status"]["marginHistory"] == [1, 2]
    assert patch["result"] == {"winner": "teamA", "holesWonA": 2, "holesWonB": 0}
    assert _recomputations("status") == start + 1


def test_derived_only_writes_are_skipped() -> None:
    doc = singles_doc(sequence((2, A_WINS)))
    patched = {**doc, "status": {"thru": 2}, "result": {"winner": "teamA"}}
    assert plan_match_update(doc, patched, "singles") is None
    assert plan_match_update(doc, copy.deepcopy(doc), "singles") is None


def test_match_without_round_is_skipped() -> None:
    after = singles_doc(sequence((1, A_WINS)), roundId="")
    assert plan_match_update(singles_doc({}), after, "singles") is None


def test_applied_patch_converges() -> None:
    before = singles_doc({})
    after = singles_doc(sequence((3, B_WINS)))
    patch = plan_match_update(before, after, "singles")
    merged = {**after, **patch}

    assert plan_match_update(after, merged, "singles") is None
    # A later write touching other keys finds the stored status current.
    assert plan_match_update(before, merged, "singles") is None
    assert plan_match_update(before, after, "singles") == patch


def test_open_match_deletes_facts() -> None:
    doc = singles_doc(sequence((3, A_WINS)))
    plan = plan_fact_writes(doc, _context(), match_id="m1")
    assert plan.delete_existing is True
    assert plan.upserts == []
    assert plan_fact_writes(None, _context(), match_id="m1").delete_existing is True


def test_closed_match_upserts_facts() -> None:
    start = _recomputations("facts")
    plan = plan_fact_writes(
        singles_doc(sequence((10, A_WINS))), _context(), match_id="m1"
    )
    assert plan.delete_existing is False
    assert sorted(plan.documents) == ["m1_pA", "m1_pB"]
    assert plan.documents["m1_pA"]["outcome"] == "win"
    assert plan.documents["m1_pB"]["pointsEarned"] == 0
    assert _recomputations("facts") == start + 1


def test_closure_is_recomputed_from_holes() -> None:
    doc = singles_doc(sequence((3, A_WINS)), status={"closed": True})
    plan = plan_fact_writes(doc, _context(), match_id="m1")
    assert plan.delete_existing is True


def test_reopened_match_drops_facts() -> None:
    scores = sequence((10, A_WINS))
    closed = plan_fact_writes(singles_doc(scores), _context(), match_id="m1")
    assert closed.delete_existing is False

    scores[3] = B_WINS
    reopened = plan_fact_writes(singles_doc(scores), _context(), match_id="m1")
    assert reopened.delete_existing is True
    assert reopened.documents == {}

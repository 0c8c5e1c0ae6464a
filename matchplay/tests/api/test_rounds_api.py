from __future__ import annotations

from matchplay.stats import MatchContext, derive_player_facts
from matchplay.tests.helpers import course_holes, singles_match


def _fact_payload():
    match = singles_match({1: (3, 5), 2: (4, 4)})
    context = MatchContext.model_validate(
        {"format": "singles", "courseHoles": course_holes()}
    )
    return [
        fact.model_dump(mode="json", by_alias=True)
        for fact in derive_player_facts(match, context)
    ]


def test_vs_all_endpoint(client) -> None:
    facts = [
        {
            "playerId": "p1",
            "holePerformance": [{"hole": 1, "par": 4, "gross": 3}],
        },
        {
            "playerId": "p2",
            "holePerformance": [{"hole": 1, "par": 4, "gross": 5}],
        },
    ]
    response = client.post(
        "/api/rounds/vs-all",
        json={
            "format": "twoManScramble",
            "facts": facts,
            "courseHoles": course_holes(),
        },
    )
    assert response.status_code == 200
    records = {record["teamKey"]: record for record in response.json()}
    assert records["p1"]["wins"] == 1
    assert records["p2"]["losses"] == 1


def test_recap_endpoint(client) -> None:
    response = client.post(
        "/api/rounds/recap",
        json={
            "roundId": "r1",
            "tournamentId": "t1",
            "format": "singles",
            "day": 1,
            "course": {"id": "c1", "name": "Links", "holes": course_holes()},
            "facts": _fact_payload(),
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["roundId"] == "r1"
    assert body["coursePar"] == 72
    assert [r["playerId"] for r in body["vsAllRecords"]] == ["pA", "pB"]
    assert body["vsAllRecords"][0]["wins"] == 1
    assert body["holeAverages"][0]["scoringCount"] == 2
    assert body["leaders"]["birdiesGross"][0]["playerId"] == "pA"
    assert body["leaders"]["bestHole"]["holeNumber"] == 1

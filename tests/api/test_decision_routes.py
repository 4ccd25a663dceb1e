"""Decision route tests — CRUD, outcomes, drafts, stats and error envelopes."""

from tests.factories import make_decision


async def test_create_returns_camel_case_decision(client, seeded_decision, api_clock):
    assert seeded_decision["createdAt"] == "2024-01-01T12:00:00.000Z"
    assert seeded_decision["outcomes"] == []
    assert seeded_decision["id"]


async def test_create_schedules_reminders(client, seeded_decision):
    res = await client.get("/api/v1/reminders")
    assert [r["type"] for r in res.json()] == ["1day", "7day", "30day"]


async def test_create_validation_error_is_400(client):
    res = await client.post("/api/v1/decisions", json={"title": "", "confidence": 500})
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]


async def test_get_and_list(client, seeded_decision):
    decision_id = seeded_decision["id"]
    assert (await client.get(f"/api/v1/decisions/{decision_id}")).json()["title"] == "Move to Lisbon"
    listed = (await client.get("/api/v1/decisions")).json()
    assert [d["id"] for d in listed] == [decision_id]


async def test_missing_decision_is_404(client):
    res = await client.get("/api/v1/decisions/nope")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert res.json()["error"]["context"]["decision_id"] == "nope"


async def test_put_overwrites(client, seeded_decision):
    updated = {**seeded_decision, "title": "Move to Porto"}
    res = await client.put(f"/api/v1/decisions/{seeded_decision['id']}", json=updated)
    assert res.status_code == 200
    assert (await client.get(f"/api/v1/decisions/{seeded_decision['id']}")).json()["title"] == "Move to Porto"


async def test_put_with_mismatched_id_is_400(client):
    body = make_decision(id="a").to_dict()
    res = await client.put("/api/v1/decisions/b", json=body)
    assert res.status_code == 400


async def test_delete(client, seeded_decision):
    res = await client.delete(f"/api/v1/decisions/{seeded_decision['id']}")
    assert res.status_code == 204
    assert (await client.get(f"/api/v1/decisions/{seeded_decision['id']}")).status_code == 404
    assert (await client.get("/api/v1/reminders")).json() == []


async def test_record_outcome(client, seeded_decision, api_clock):
    api_clock.advance(days=2)
    res = await client.post(
        f"/api/v1/decisions/{seeded_decision['id']}/outcomes",
        json={"rating": 9, "wouldChooseDifferently": False, "reflection": "Love it"},
    )
    assert res.status_code == 201
    [outcome] = res.json()["outcomes"]
    assert outcome["rating"] == 9
    assert outcome["createdAt"] == "2024-01-03T12:00:00.000Z"
    statuses = {r["status"] for r in (await client.get("/api/v1/reminders")).json()}
    assert statuses == {"completed"}


async def test_outcome_for_missing_decision_is_404(client):
    res = await client.post(
        "/api/v1/decisions/missing/outcomes",
        json={"rating": 5, "wouldChooseDifferently": True},
    )
    assert res.status_code == 404


async def test_outcome_rating_out_of_range_is_400(client, seeded_decision):
    res = await client.post(
        f"/api/v1/decisions/{seeded_decision['id']}/outcomes",
        json={"rating": 11, "wouldChooseDifferently": False},
    )
    assert res.status_code == 400


async def test_stats(client, seeded_decision):
    stats = (await client.get("/api/v1/decisions/stats")).json()
    assert stats["total_decisions"] == 1
    assert stats["avg_confidence"] == 75
    assert stats["category_breakdown"] == [["Personal", 1]]


async def test_draft_round_trip(client):
    assert (await client.get("/api/v1/decisions/draft")).json() is None
    res = await client.put("/api/v1/decisions/draft", json={"title": "Half", "tags": ["x"]})
    assert res.status_code == 204
    assert (await client.get("/api/v1/decisions/draft")).json()["title"] == "Half"
    await client.delete("/api/v1/decisions/draft")
    assert (await client.get("/api/v1/decisions/draft")).json() is None


async def test_insights_round_trip(client):
    payload = {"personality": "Steady", "topPatterns": [], "generatedAt": 1704110400000}
    assert (await client.put("/api/v1/decisions/insights", json=payload)).status_code == 204
    assert (await client.get("/api/v1/decisions/insights")).json()["personality"] == "Steady"


async def test_list_search_and_filters(client, seeded_decision):
    await client.post("/api/v1/decisions", json={
        "title": "Buy a bike", "choice": "Road bike", "category": "Purchase", "confidence": 40,
    })

    searched = (await client.get("/api/v1/decisions", params={"q": "LISBON"})).json()
    assert [d["title"] for d in searched] == ["Move to Lisbon"]

    by_category = (await client.get("/api/v1/decisions", params={"category": "Purchase"})).json()
    assert [d["title"] for d in by_category] == ["Buy a bike"]

    low_first = (await client.get(
        "/api/v1/decisions", params={"sortBy": "confidence-low", "outcomeStatus": "without-outcome"},
    )).json()
    assert [d["confidence"] for d in low_first] == [40, 75]

    narrowed = (await client.get(
        "/api/v1/decisions", params={"minConfidence": 50, "dateRange": "week"},
    )).json()
    assert [d["title"] for d in narrowed] == ["Move to Lisbon"]


async def test_list_rejects_unknown_sort(client):
    res = await client.get("/api/v1/decisions", params={"sortBy": "alphabetical"})
    assert res.status_code == 400

"""Share route tests — links, public reads, comments and revocation."""


async def _share(client, decision_id, **extra):
    res = await client.post("/api/v1/shares", json={"decisionId": decision_id, **extra})
    assert res.status_code == 201
    return res.json()


async def test_create_share_uses_default_settings(client, seeded_decision):
    link = await _share(client, seeded_decision["id"])
    share = link["share"]
    assert share["shareType"] == "summary"
    assert share["expiresAt"] == "2024-01-08T12:00:00.000Z"
    assert link["url"].endswith(f"/shared/{share['shareId']}")


async def test_share_missing_decision_is_404(client):
    res = await client.post("/api/v1/shares", json={"decisionId": "missing"})
    assert res.status_code == 404


async def test_read_and_revoke(client, seeded_decision):
    share_id = (await _share(client, seeded_decision["id"], shareType="full"))["share"]["shareId"]
    shared = (await client.get(f"/api/v1/shares/{share_id}")).json()
    assert shared["decision"]["context"] == "Remote job makes it possible"

    assert (await client.delete(f"/api/v1/shares/{share_id}")).status_code == 204
    assert (await client.get(f"/api/v1/shares/{share_id}")).status_code == 404
    active = await client.get(f"/api/v1/shares/decision/{seeded_decision['id']}/active")
    assert active.json() == {"active": False}


async def test_expired_share_is_404(client, seeded_decision, api_clock):
    share_id = (await _share(client, seeded_decision["id"], expireDays=1))["share"]["shareId"]
    api_clock.advance(days=2)
    assert (await client.get(f"/api/v1/shares/{share_id}")).status_code == 404
    assert (await client.post("/api/v1/shares/cleanup")).json() == {"removed": 1}


async def test_comments_and_unread_count(client, seeded_decision, api_clock):
    share_id = (await _share(client, seeded_decision["id"]))["share"]["shareId"]
    api_clock.advance(minutes=5)
    res = await client.post(
        f"/api/v1/shares/{share_id}/comments", json={"author": "Ana", "content": "Go!"},
    )
    assert res.status_code == 201
    assert (await client.get("/api/v1/shares/comments/unread")).json() == {"count": 1}
    await client.post("/api/v1/shares/comments/read")
    assert (await client.get("/api/v1/shares/comments/unread")).json() == {"count": 0}
    comments = (await client.get(f"/api/v1/shares/{share_id}/comments")).json()
    assert [c["author"] for c in comments] == ["Ana"]


async def test_comment_on_unknown_share_is_404(client):
    res = await client.post(
        "/api/v1/shares/share_0_nothing/comments", json={"author": "A", "content": "B"},
    )
    assert res.status_code == 404


async def test_sharing_settings(client):
    res = await client.patch("/api/v1/shares/settings", json={"defaultExpireDays": 30})
    assert res.json()["defaultExpireDays"] == 30
    assert (await client.get("/api/v1/shares/settings")).json()["defaultShareType"] == "summary"

"""Ratings routes."""

import pytest

from tests.api.conftest import BOB


async def test_unauthenticated_request_is_rejected(client, session, release, store):
    session["principal"] = None
    response = await client.post("/api/ratings", json={"releaseId": "rel-1", "score": 8})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized access"}
    assert store.rows("ratings") == []


async def test_rating_twice_keeps_one_row(client, store, release):
    first = await client.post("/api/ratings", json={"releaseId": "rel-1", "score": 7})
    second = await client.post("/api/ratings", json={"releaseId": "rel-1", "score": 9})

    assert first.json()["message"] == "Rating added"
    assert second.json()["message"] == "Rating updated"
    data = second.json()["data"]
    assert data["is_new"] is False
    assert data["score"] == 9
    assert data["created_at"] == first.json()["data"]["created_at"]
    assert data["release_stats"] == {"average_rating": 9.0, "ratings_count": 1}
    assert len(store.rows("ratings")) == 1


@pytest.mark.parametrize("score", [-1, 11, "eight", True, "7", None])
async def test_out_of_range_score_writes_nothing(client, store, release, score):
    response = await client.post("/api/ratings", json={"releaseId": "rel-1", "score": score})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert store.calls == []


async def test_non_numeric_score_names_the_rule(client, store, release):
    response = await client.post("/api/ratings", json={"releaseId": "rel-1", "score": True})

    assert response.status_code == 400
    assert response.json()["error"] == "score: Score must be a number between 0 and 10"


async def test_unknown_field_is_rejected(client, store, release):
    response = await client.post(
        "/api/ratings", json={"releaseId": "rel-1", "score": 5, "userId": BOB.id},
    )
    assert response.status_code == 400
    assert store.rows("ratings") == []


async def test_rating_unknown_release_is_404(client, store):
    response = await client.post("/api/ratings", json={"releaseId": "nope", "score": 5})
    assert response.status_code == 404
    assert response.json()["error"] == "Release not found"


async def test_list_only_returns_callers_ratings(client, store, release):
    store.seed(
        "ratings",
        {"user_id": "user-alice", "release_id": "rel-1", "score": 6, "updated_at": "2026-01-01"},
        {"user_id": BOB.id, "release_id": "rel-1", "score": 2, "updated_at": "2026-01-02"},
    )
    response = await client.get("/api/ratings", params={"releaseId": "rel-1"})

    assert [r["user_id"] for r in response.json()["data"]] == ["user-alice"]


async def test_cannot_delete_another_users_rating(client, store, release):
    [theirs] = store.seed("ratings", {"user_id": BOB.id, "release_id": "rel-1", "score": 2})

    response = await client.delete("/api/ratings", params={"id": theirs["id"]})

    assert response.status_code == 404
    assert store.rows("ratings")[0]["score"] == 2


async def test_delete_without_address_is_400(client):
    response = await client.delete("/api/ratings")
    assert response.status_code == 400
    assert response.json()["error"] == "Rating ID or Release ID is required"


async def test_malformed_json_body_is_400(client, store, release):
    response = await client.post(
        "/api/ratings", content=b"{not json", headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "body: Invalid JSON"}
    assert store.calls == []

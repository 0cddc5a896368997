"""Release and artist read routes."""

from tests.api.conftest import BOB


async def test_release_details(client, store, release):
    store.seed(
        "ratings",
        {"user_id": "user-alice", "release_id": "rel-1", "score": 8},
        {"user_id": BOB.id, "release_id": "rel-1", "score": 7.5},
        {"user_id": "user-carol", "release_id": "rel-1", "score": 9},
    )
    response = await client.get("/api/releases", params={"id": "rel-1"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Kid A"
    assert [(a["name"], a["role"]) for a in data["artists"]] == [
        ("Radiohead", "primary"), ("Nigel Godrich", "producer"),
    ]
    assert [g["name"] for g in data["genres"]] == ["Art Rock"]
    assert [t["id"] for t in data["tracks"]] == ["trk-1", "trk-2", "trk-3"]
    assert data["average_rating"] == (8 + 7.5 + 9) / 3
    assert data["rating_count"] == 3


async def test_unrated_release_has_null_average(client, release):
    response = await client.get("/api/releases", params={"id": "rel-1"})
    assert response.json()["data"]["average_rating"] is None


async def test_release_survives_unreadable_tracks(client, store, release):
    store.fail["tracks"] = "permission denied for table tracks"
    response = await client.get("/api/releases", params={"id": "rel-1"})

    assert response.status_code == 200
    assert response.json()["data"]["tracks"] == []


async def test_unknown_release_is_404(client, release):
    response = await client.get("/api/releases", params={"id": "rel-404"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Release not found"}


async def test_release_id_required(client):
    response = await client.get("/api/releases")
    assert response.status_code == 400
    assert response.json()["error"] == "Release ID is required"


async def test_release_reads_need_no_session(client, session, release):
    session["principal"] = None
    response = await client.get("/api/releases", params={"id": "rel-1"})
    assert response.status_code == 200


async def test_artist_with_releases(client, release):
    response = await client.get("/api/artists", params={"id": "art-2"})

    data = response.json()["data"]
    assert data["name"] == "Nigel Godrich"
    assert [(r["title"], r["role"]) for r in data["releases"]] == [("Kid A", "producer")]


async def test_unknown_artist_is_404(client):
    response = await client.get("/api/artists", params={"id": "nobody"})
    assert response.status_code == 404
    assert response.json()["error"] == "Artist not found"

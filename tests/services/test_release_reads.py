"""Release reads — concurrent assembly with graceful degradation."""

import pytest

from beesides.core.errors import NotFoundError, PersistenceError
from beesides.services.artists import get_artist_with_releases
from beesides.services.releases import get_release_details
from tests.fakes import InMemoryTableStore


@pytest.fixture
def store():
    store = InMemoryTableStore()
    store.seed("releases", {"id": "rel-1", "title": "Blue", "release_type": "album"})
    store.seed("artists", {"id": "art-1", "name": "Joni Mitchell", "image_url": None})
    store.seed("artist_releases", {"artist_id": "art-1", "release_id": "rel-1", "role": "primary"})
    store.seed(
        "tracks",
        {"release_id": "rel-1", "title": "River", "disc_number": 1, "track_number": 7},
        {"release_id": "rel-1", "title": "All I Want", "disc_number": 1, "track_number": 1},
    )
    return store


async def test_missing_sub_collections_degrade_to_empty(store):
    store.fail["tracks"] = "permission denied for table tracks"
    store.fail["release_genres"] = "permission denied"

    release = await get_release_details(store, "rel-1")

    assert release["tracks"] == []
    assert release["genres"] == []
    assert release["artists"] == [
        {"id": "art-1", "name": "Joni Mitchell", "image_url": None, "role": "primary"},
    ]


async def test_root_failure_propagates(store):
    store.fail["releases"] = "connection reset"
    with pytest.raises(PersistenceError):
        await get_release_details(store, "rel-1")


async def test_tracks_ordered_by_disc_and_number(store):
    release = await get_release_details(store, "rel-1")
    assert [t["title"] for t in release["tracks"]] == ["All I Want", "River"]


async def test_no_ratings_gives_null_average(store):
    release = await get_release_details(store, "rel-1")
    assert release["average_rating"] is None
    assert release["rating_count"] == 0


async def test_artist_with_releases_and_roles(store):
    artist = await get_artist_with_releases(store, "art-1")
    assert artist["name"] == "Joni Mitchell"
    assert [(r["id"], r["role"]) for r in artist["releases"]] == [("rel-1", "primary")]


async def test_unknown_artist_is_not_found(store):
    with pytest.raises(NotFoundError, match="Artist not found"):
        await get_artist_with_releases(store, "nobody")

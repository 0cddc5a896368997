"""Route test fixtures — FastAPI test client over in-memory collaborators.

Invariants:
    - get_store and get_admin_store both resolve to the same InMemoryTableStore
      (the service role sees every row)
    - resolve_principal is overridden with a mutable holder: set
      `session["principal"] = None` to simulate a request without a session;
      require_principal itself is not overridden, so the real guard runs
    - get_metadata_provider returns a FakeMetadataProvider
"""

import pytest
from httpx import ASGITransport, AsyncClient

from beesides.api.dependencies import (
    get_admin_store, get_metadata_provider, get_store, resolve_principal,
)
from beesides.core.domain_types import Principal, UserId
from beesides.main import app
from tests.fakes import FakeMetadataProvider, InMemoryTableStore

ALICE = Principal(id=UserId("user-alice"), email="alice@example.com")
BOB = Principal(id=UserId("user-bob"), email="bob@example.com")


@pytest.fixture
def store():
    return InMemoryTableStore()


@pytest.fixture
def session():
    return {"principal": ALICE}


@pytest.fixture
def metadata():
    return FakeMetadataProvider()


@pytest.fixture
async def client(store, session, metadata):
    """FastAPI test client with collaborator dependencies overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_admin_store] = lambda: store
    app.dependency_overrides[resolve_principal] = lambda: session["principal"]
    app.dependency_overrides[get_metadata_provider] = lambda: metadata

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def release(store):
    """One release with two artists, a genre and three tracks across two discs."""
    [rel] = store.seed("releases", {
        "id": "rel-1", "title": "Kid A", "release_type": "album",
        "release_date": "2000-10-02",
    })
    store.seed(
        "artists",
        {"id": "art-1", "name": "Radiohead", "image_url": None},
        {"id": "art-2", "name": "Nigel Godrich", "image_url": None},
    )
    store.seed(
        "artist_releases",
        {"artist_id": "art-1", "release_id": "rel-1", "role": "primary"},
        {"artist_id": "art-2", "release_id": "rel-1", "role": "producer"},
    )
    store.seed("genres", {"id": "gen-1", "name": "Art Rock", "parent_id": None})
    store.seed("release_genres", {"release_id": "rel-1", "genre_id": "gen-1"})
    store.seed(
        "tracks",
        {"id": "trk-3", "release_id": "rel-1", "title": "Idioteque", "disc_number": 2, "track_number": 1},
        {"id": "trk-2", "release_id": "rel-1", "title": "Kid A", "disc_number": 1, "track_number": 2},
        {"id": "trk-1", "release_id": "rel-1", "title": "Everything in Its Right Place", "disc_number": 1, "track_number": 1},
    )
    return rel

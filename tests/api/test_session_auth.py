"""Session resolution from the Supabase auth cookie, end to end through the app."""

import base64
import json

import pytest
from httpx import ASGITransport, AsyncClient

from beesides.api.dependencies import get_store
from beesides.config import get_settings
from beesides.main import app
from tests.api.conftest import ALICE
from tests.fakes import FakeAuthGateway, InMemoryTableStore


def _cookie_value(access_token: str) -> str:
    session = json.dumps({"access_token": access_token, "refresh_token": "r"})
    encoded = base64.urlsafe_b64encode(session.encode()).decode().rstrip("=")
    return f"base64-{encoded}"


@pytest.fixture
def gateway():
    return FakeAuthGateway({"good-token": ALICE})


@pytest.fixture
async def raw_client(gateway):
    """Client whose auth guard runs for real against a fake gateway."""
    store = InMemoryTableStore()
    store.seed("profiles", {"id": ALICE.id, "username": "alice"})
    app.state.auth_gateway = gateway
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.auth_gateway


async def test_valid_cookie_resolves_principal(raw_client, gateway):
    name = get_settings().resolved_cookie_name
    raw_client.cookies.set(name, _cookie_value("good-token"))

    response = await raw_client.get("/api/profile/me")

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "alice"
    assert gateway.lookups == ["good-token"]


async def test_chunked_cookie_is_reassembled(raw_client):
    name = get_settings().resolved_cookie_name
    value = _cookie_value("good-token")
    raw_client.cookies.set(f"{name}.0", value[:12])
    raw_client.cookies.set(f"{name}.1", value[12:])

    response = await raw_client.get("/api/profile/me")

    assert response.status_code == 200


async def test_unknown_token_is_401(raw_client):
    raw_client.cookies.set(get_settings().resolved_cookie_name, _cookie_value("forged"))

    response = await raw_client.get("/api/profile/me")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized access"}


async def test_no_cookie_never_calls_auth(raw_client, gateway):
    response = await raw_client.get("/api/profile/me")

    assert response.status_code == 401
    assert gateway.lookups == []

"""Request Dependencies — auth guard, table stores and the metadata provider.

Invariants:
    - resolve_principal reads identity only from the session cookie, re-resolving
      it against the auth service on every request (no caching across requests)
    - require_principal fails closed with UnauthorizedError
    - get_store is authenticated as the caller; get_admin_store uses the
      service-role key and is injected only into signup-time profile creation
    - Stores are closed when the request finishes
"""

from typing import AsyncIterator

from fastapi import Depends, Request

from beesides.config import get_settings
from beesides.core.domain_types import Principal
from beesides.core.errors import UnauthorizedError
from beesides.core.repository_protocols import AuthGateway, MetadataProvider, TableStore
from beesides.core.session_cookie import extract_access_token
from beesides.infrastructure.supabase_store import PostgrestTableStore


def session_access_token(request: Request) -> str | None:
    return extract_access_token(request.cookies, get_settings().resolved_cookie_name)


async def resolve_principal(request: Request) -> Principal | None:
    """Principal behind the request's session, or None."""
    token = session_access_token(request)
    if not token:
        return None
    gateway: AuthGateway = request.app.state.auth_gateway
    return await gateway.get_principal(token)


async def require_principal(
    principal: Principal | None = Depends(resolve_principal),
) -> Principal:
    if principal is None:
        raise UnauthorizedError()
    return principal


async def get_store(request: Request) -> AsyncIterator[TableStore]:
    settings = get_settings()
    store = PostgrestTableStore.open(
        settings.supabase_url,
        settings.supabase_anon_key,
        access_token=session_access_token(request),
        timeout_seconds=settings.supabase_timeout_seconds,
    )
    try:
        yield store
    finally:
        await store.aclose()


async def get_admin_store() -> AsyncIterator[TableStore]:
    settings = get_settings()
    store = PostgrestTableStore.open(
        settings.supabase_url,
        settings.supabase_service_role_key,
        timeout_seconds=settings.supabase_timeout_seconds,
    )
    try:
        yield store
    finally:
        await store.aclose()


def get_metadata_provider(request: Request) -> MetadataProvider:
    return request.app.state.metadata_provider

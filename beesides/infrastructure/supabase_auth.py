"""Supabase Auth Gateway — resolves a Principal from a session access token.

Invariants:
    - GET <supabase_url>/auth/v1/user is the only identity source
    - 401/403 → None (token expired, revoked or forged)
    - Transport failure or any other status → logged, None: the guard fails closed
"""

import logging

import httpx

from beesides.core.domain_types import Principal, UserId

logger = logging.getLogger(__name__)


class SupabaseAuthGateway:
    """Looks up the user behind an access token via the Supabase auth API."""

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{supabase_url}/auth/v1",
            headers={"apikey": anon_key},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def get_principal(self, access_token: str) -> Principal | None:
        try:
            response = await self._client.get(
                "/user", headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Auth lookup failed: {e}")
            return None

        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            logger.warning(
                f"Auth lookup returned unexpected status {response.status_code}",
                extra={"provider_status": response.status_code},
            )
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Auth lookup returned a non-JSON body")
            return None
        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            return None
        return Principal(id=UserId(str(user_id)), email=payload.get("email"))

    async def aclose(self) -> None:
        await self._client.aclose()

"""MusicBrainz Client — read-only catalog search with rate limiting and client signature.

Invariants:
    - Every call sends User-Agent "<app>/<version> ( <contact> )" and Accept: application/json
    - Call starts are spaced by at least min_interval_seconds across the whole process
    - No retries; provider failures map to MetadataProviderError (detail logged, not returned)
    - Lookup of an unknown id (provider 404) maps to NotFoundError
    - Response bodies are passed through unchanged
"""

import asyncio
import logging
import time
from typing import Any

import httpx

from beesides.core.errors import MetadataProviderError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://musicbrainz.org/ws/2"


def build_user_agent(app_name: str, version: str, contact: str) -> str:
    return f"{app_name}/{version} ( {contact} )"


class MusicBrainzClient:
    """Async MusicBrainz web-service client."""

    def __init__(
        self,
        contact: str,
        app_name: str = "Beesides-WebApp",
        app_version: str = "0.1.0",
        base_url: str = DEFAULT_BASE_URL,
        min_interval_seconds: float = 1.0,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user_agent = build_user_agent(app_name, app_version, contact)
        self.min_interval_seconds = min_interval_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            timeout=timeout_seconds,
            transport=transport,
        )
        self._lock = asyncio.Lock()
        self._last_call: float | None = None

    async def search_release_groups(
        self, query: str, limit: int = 10, offset: int = 0,
    ) -> dict:
        """Search release groups (albums, EPs, singles) by free text."""
        params = {
            "query": query, "limit": limit, "offset": offset, "fmt": "json",
        }
        return await self._get(
            "/release-group", params, public_message="Failed to search for albums",
        )

    async def get_release_group(self, mbid: str) -> dict:
        """Release group by MusicBrainz id, with artist credits."""
        return await self._get(
            f"/release-group/{mbid}",
            {"fmt": "json", "inc": "artists"},
            public_message="Failed to fetch album details",
            not_found="Release group",
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _throttle(self) -> None:
        async with self._lock:
            if self._last_call is not None:
                wait = self.min_interval_seconds - (time.monotonic() - self._last_call)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_call = time.monotonic()

    async def _get(
        self,
        path: str,
        params: dict[str, Any],
        public_message: str,
        not_found: str | None = None,
    ) -> dict:
        await self._throttle()
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"MusicBrainz request to {path} failed: {e}")
            raise MetadataProviderError(str(e), public_message)

        if response.status_code == 404 and not_found:
            raise NotFoundError(not_found)
        if response.status_code != 200:
            logger.error(
                f"MusicBrainz API error: {response.status_code} {response.reason_phrase}",
                extra={"provider_status": response.status_code},
            )
            raise MetadataProviderError(
                f"MusicBrainz API error: {response.status_code}", public_message,
            )
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"MusicBrainz returned invalid JSON for {path}: {e}")
            raise MetadataProviderError("invalid JSON body", public_message)

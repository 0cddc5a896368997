"""Music Routes — pass-through catalog search against MusicBrainz.

Invariants:
    - No session required (the provider is public and read-only)
    - Provider failures surface as 500 with a generic message
"""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_metadata_provider
from beesides.api.handler import api_handler
from beesides.core.envelope import success
from beesides.core.repository_protocols import MetadataProvider
from beesides.services import catalog_search

router = APIRouter(prefix="/api/music", tags=["music"])


@router.get("/search")
@api_handler
async def search(
    query: str | None = Query(None),
    limit: int = Query(10),
    offset: int = Query(0),
    provider: MetadataProvider = Depends(get_metadata_provider),
):
    """Search release groups (albums, EPs, singles) by free text."""
    return success(
        await catalog_search.search_albums(provider, query, limit=limit, offset=offset),
    )


@router.get("/release-groups")
@api_handler
async def get_release_group(
    id: str | None = Query(None),
    provider: MetadataProvider = Depends(get_metadata_provider),
):
    return success(await catalog_search.get_album(provider, id))

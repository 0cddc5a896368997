"""Releases Routes — denormalized release reads."""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_store
from beesides.api.handler import api_handler
from beesides.core.envelope import success
from beesides.core.errors import ValidationFailedError
from beesides.core.repository_protocols import TableStore
from beesides.services import releases as release_ops

router = APIRouter(prefix="/api/releases", tags=["releases"])


@router.get("")
@api_handler
async def get_release(
    id: str | None = Query(None),
    store: TableStore = Depends(get_store),
):
    """Release with artists, genres, tracks and rating summary."""
    if not id:
        raise ValidationFailedError("Release ID is required", "id")
    return success(await release_ops.get_release_details(store, id))

"""Artists Routes."""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_store
from beesides.api.handler import api_handler
from beesides.core.envelope import success
from beesides.core.errors import ValidationFailedError
from beesides.core.repository_protocols import TableStore
from beesides.services import artists as artist_ops

router = APIRouter(prefix="/api/artists", tags=["artists"])


@router.get("")
@api_handler
async def get_artist(
    id: str | None = Query(None),
    store: TableStore = Depends(get_store),
):
    if not id:
        raise ValidationFailedError("Artist ID is required", "id")
    return success(await artist_ops.get_artist_with_releases(store, id))

"""Ratings Routes — the caller's scores for releases."""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_store, require_principal
from beesides.api.handler import api_handler
from beesides.core.domain_types import Principal
from beesides.core.envelope import success
from beesides.core.repository_protocols import TableStore
from beesides.schemas.ratings import RatingUpsert
from beesides.services import ratings as rating_ops

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


@router.get("")
@api_handler
async def list_ratings(
    release_id: str | None = Query(None, alias="releaseId"),
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    """The caller's ratings, most recently updated first."""
    return success(await rating_ops.list_my_ratings(store, principal, release_id))


@router.post("")
@api_handler
async def upsert_rating(
    body: RatingUpsert,
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    """Add or update the caller's rating of a release."""
    result = await rating_ops.upsert_rating(store, principal, body)
    return success(
        result.to_dict(), "Rating added" if result.is_new else "Rating updated",
    )


@router.delete("")
@api_handler
async def delete_rating(
    id: str | None = Query(None),
    release_id: str | None = Query(None, alias="releaseId"),
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    await rating_ops.delete_rating(store, principal, rating_id=id, release_id=release_id)
    return success(None, "Rating removed successfully")

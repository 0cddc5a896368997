"""Reviews Routes — written reviews of releases."""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_store, require_principal, resolve_principal
from beesides.api.handler import api_handler
from beesides.core.domain_types import Principal
from beesides.core.envelope import success
from beesides.core.errors import ValidationFailedError
from beesides.core.repository_protocols import TableStore
from beesides.schemas.reviews import ReviewUpsert
from beesides.services import reviews as review_ops

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("")
@api_handler
async def get_reviews(
    id: str | None = Query(None),
    release_id: str | None = Query(None, alias="releaseId"),
    viewer: Principal | None = Depends(resolve_principal),
    store: TableStore = Depends(get_store),
):
    """One review by id, or the published reviews of a release."""
    if id:
        return success(await review_ops.get_review(store, id, viewer))
    if release_id:
        return success(await review_ops.list_release_reviews(store, release_id))
    raise ValidationFailedError("Review ID or Release ID is required", "id")


@router.post("")
@api_handler
async def upsert_review(
    body: ReviewUpsert,
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    result = await review_ops.upsert_review(store, principal, body)
    return success(
        result.to_dict(), "Review added" if result.is_new else "Review updated",
    )


@router.delete("")
@api_handler
async def delete_review(
    id: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    if not id:
        raise ValidationFailedError("Review ID is required", "id")
    await review_ops.delete_review(store, principal, id)
    return success(None, "Review removed successfully")

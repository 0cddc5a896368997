"""Collections Routes — user-curated lists of releases.

Invariants:
    - GET without id lists the caller's own collections and requires a session
    - GET with id is public for public collections, owner-only otherwise
"""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import get_store, require_principal, resolve_principal
from beesides.api.handler import api_handler
from beesides.core.domain_types import Principal
from beesides.core.envelope import success
from beesides.core.errors import UnauthorizedError, ValidationFailedError
from beesides.core.repository_protocols import TableStore
from beesides.schemas.collections import CollectionCreate, CollectionReleaseAdd
from beesides.services import collections as collection_ops

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.get("")
@api_handler
async def get_collections(
    id: str | None = Query(None),
    principal: Principal | None = Depends(resolve_principal),
    store: TableStore = Depends(get_store),
):
    if id:
        return success(await collection_ops.get_collection(store, id, principal))
    if principal is None:
        raise UnauthorizedError()
    return success(await collection_ops.list_my_collections(store, principal))


@router.post("")
@api_handler
async def create_collection(
    body: CollectionCreate,
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    row = await collection_ops.create_collection(store, principal, body)
    return success(row, "Collection created successfully")


@router.delete("")
@api_handler
async def delete_collection(
    id: str | None = Query(None),
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    if not id:
        raise ValidationFailedError("Collection ID is required", "id")
    await collection_ops.delete_collection(store, principal, id)
    return success(None, "Collection deleted successfully")


@router.post("/releases")
@api_handler
async def add_release(
    body: CollectionReleaseAdd,
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    entry, is_new = await collection_ops.add_release(store, principal, body)
    return success(
        {**entry, "is_new": is_new},
        "Release added to collection" if is_new else "Release already in collection",
    )


@router.delete("/releases")
@api_handler
async def remove_release(
    collection_id: str | None = Query(None, alias="collectionId"),
    release_id: str | None = Query(None, alias="releaseId"),
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    if not collection_id:
        raise ValidationFailedError("Collection ID is required", "collectionId")
    if not release_id:
        raise ValidationFailedError("Release ID is required", "releaseId")
    await collection_ops.remove_release(store, principal, collection_id, release_id)
    return success(None, "Release removed from collection")

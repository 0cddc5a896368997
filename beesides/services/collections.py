"""Collection Operations — owner-scoped lists of releases.

Invariants:
    - Every mutation first loads the collection filtered by id AND owner;
      absence and foreign ownership both raise NotFoundError("Collection")
    - Private collections of other users read as not found
    - release_count is derived from collection_releases at read time
    - Adding a release already in the collection is a no-op reported with is_new=False
"""

import logging
from collections import Counter
from datetime import datetime

from beesides.core.domain_types import CollectionId, Principal, ReleaseId, Table
from beesides.core.errors import NotFoundError
from beesides.core.repository_protocols import Row, TableStore
from beesides.schemas.collections import CollectionCreate, CollectionReleaseAdd
from beesides.services.clock import timestamp
from beesides.services.releases import require_release

logger = logging.getLogger(__name__)


async def _owned_collection(
    store: TableStore, principal: Principal, collection_id: CollectionId,
) -> Row:
    collection = await store.select_one(
        Table.COLLECTIONS, {"id": collection_id, "user_id": principal.id},
    )
    if not collection:
        raise NotFoundError("Collection")
    return collection


async def release_counts(store: TableStore, collection_ids: list) -> Counter:
    if not collection_ids:
        return Counter()
    links = await store.select_many(
        Table.COLLECTION_RELEASES, {"collection_id": collection_ids},
        columns="collection_id",
    )
    return Counter(link["collection_id"] for link in links)


async def list_my_collections(store: TableStore, principal: Principal) -> list[Row]:
    collections = await store.select_many(
        Table.COLLECTIONS, {"user_id": principal.id}, order_by=[("updated_at", True)],
    )
    counts = await release_counts(store, [c["id"] for c in collections])
    return [{**c, "release_count": counts.get(c["id"], 0)} for c in collections]


async def get_collection(
    store: TableStore, collection_id: CollectionId, viewer: Principal | None = None,
) -> Row:
    """Collection with its release entries; private ones only for the owner."""
    collection = await store.select_one(Table.COLLECTIONS, {"id": collection_id})
    if not collection:
        raise NotFoundError("Collection")
    is_owner = viewer is not None and collection["user_id"] == viewer.id
    if not collection.get("is_public") and not is_owner:
        raise NotFoundError("Collection")

    entries = await store.select_many(
        Table.COLLECTION_RELEASES, {"collection_id": collection_id},
        order_by=[("added_at", True)],
    )
    return {**collection, "releases": entries, "release_count": len(entries)}


async def create_collection(
    store: TableStore,
    principal: Principal,
    body: CollectionCreate,
    now: datetime | None = None,
) -> Row:
    stamp = timestamp(now)
    row = await store.insert(Table.COLLECTIONS, {
        "user_id": principal.id,
        "name": body.name,
        "description": body.description,
        "is_public": body.is_public,
        "created_at": stamp,
        "updated_at": stamp,
    })
    return {**row, "release_count": 0}


async def delete_collection(
    store: TableStore, principal: Principal, collection_id: CollectionId,
) -> None:
    await _owned_collection(store, principal, collection_id)
    await store.delete(Table.COLLECTION_RELEASES, {"collection_id": collection_id})
    await store.delete(
        Table.COLLECTIONS, {"id": collection_id, "user_id": principal.id},
    )
    logger.info(f"Collection {collection_id} deleted", extra={"user_id": principal.id})


async def add_release(
    store: TableStore,
    principal: Principal,
    body: CollectionReleaseAdd,
    now: datetime | None = None,
) -> tuple[Row, bool]:
    """Add a release to one of the caller's collections; returns (entry, is_new)."""
    await _owned_collection(store, principal, body.collection_id)
    await require_release(store, body.release_id)

    key = {"collection_id": body.collection_id, "release_id": body.release_id}
    existing = await store.select_one(Table.COLLECTION_RELEASES, key)
    if existing:
        return existing, False

    stamp = timestamp(now)
    entry = await store.insert(
        Table.COLLECTION_RELEASES, {**key, "note": body.note, "added_at": stamp},
    )
    await store.update(
        Table.COLLECTIONS,
        {"id": body.collection_id, "user_id": principal.id},
        {"updated_at": stamp},
    )
    return entry, True


async def remove_release(
    store: TableStore,
    principal: Principal,
    collection_id: CollectionId,
    release_id: ReleaseId,
    now: datetime | None = None,
) -> None:
    await _owned_collection(store, principal, collection_id)
    key = {"collection_id": collection_id, "release_id": release_id}
    if not await store.select_one(Table.COLLECTION_RELEASES, key):
        raise NotFoundError("Release", "Release not found in collection")
    await store.delete(Table.COLLECTION_RELEASES, key)
    await store.update(
        Table.COLLECTIONS,
        {"id": collection_id, "user_id": principal.id},
        {"updated_at": timestamp(now)},
    )

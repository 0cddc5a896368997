"""Release Reads — one denormalized view assembled from independent lookups.

Invariants:
    - Missing release → NotFoundError (404); a failed release lookup propagates
    - Artists, genres, tracks and ratings are fetched concurrently; a failure in
      any of them degrades that part to an empty list
    - average_rating is the exact mean of stored scores, None when there are none
    - Tracks are ordered by disc_number, then track_number
"""

import asyncio
import logging
from typing import Awaitable

from beesides.core.domain_types import ReleaseId, Table
from beesides.core.errors import NotFoundError, PersistenceError
from beesides.core.rating_stats import summarize_scores
from beesides.core.repository_protocols import Row, TableStore

logger = logging.getLogger(__name__)


async def require_release(store: TableStore, release_id: ReleaseId) -> Row:
    """Release row or NotFoundError."""
    release = await store.select_one(Table.RELEASES, {"id": release_id}, columns="id")
    if not release:
        raise NotFoundError("Release")
    return release


async def optional_rows(fetch: Awaitable[list[Row]], part: str) -> list[Row]:
    """Await a sub-collection lookup; a persistence failure yields []."""
    try:
        return await fetch
    except PersistenceError as e:
        logger.warning(
            f"Degrading {part} to empty: {e.message}", extra={"table": part},
        )
        return []


def order_by_ids(rows: list[Row], ids: list, key: str = "id") -> list[Row]:
    by_id = {r[key]: r for r in rows}
    return [by_id[i] for i in ids if i in by_id]


async def get_release_details(store: TableStore, release_id: ReleaseId) -> Row:
    """Release with artists, genres, tracks and rating summary."""
    release, artist_links, genre_links, tracks, ratings = await asyncio.gather(
        store.select_one(Table.RELEASES, {"id": release_id}),
        optional_rows(
            store.select_many(
                Table.ARTIST_RELEASES, {"release_id": release_id},
                columns="artist_id, role",
            ),
            "artist_releases",
        ),
        optional_rows(
            store.select_many(
                Table.RELEASE_GENRES, {"release_id": release_id}, columns="genre_id",
            ),
            "release_genres",
        ),
        optional_rows(
            store.select_many(
                Table.TRACKS, {"release_id": release_id},
                order_by=[("disc_number", False), ("track_number", False)],
            ),
            "tracks",
        ),
        optional_rows(
            store.select_many(Table.RATINGS, {"release_id": release_id}, columns="score"),
            "ratings",
        ),
    )
    if not release:
        raise NotFoundError("Release")

    artist_ids = [link["artist_id"] for link in artist_links]
    genre_ids = [link["genre_id"] for link in genre_links]
    artists, genres = await asyncio.gather(
        _fetch_by_ids(store, Table.ARTISTS, artist_ids, "id, name, image_url"),
        _fetch_by_ids(store, Table.GENRES, genre_ids, "id, name, parent_id"),
    )
    roles = {link["artist_id"]: link.get("role") for link in artist_links}
    summary = summarize_scores(r["score"] for r in ratings)

    return {
        **release,
        "artists": [
            {**artist, "role": roles.get(artist["id"])}
            for artist in order_by_ids(artists, artist_ids)
        ],
        "genres": order_by_ids(genres, genre_ids),
        "tracks": tracks,
        "average_rating": summary.average_rating,
        "rating_count": summary.ratings_count,
    }


async def _fetch_by_ids(
    store: TableStore, table: Table, ids: list, columns: str,
) -> list[Row]:
    if not ids:
        return []
    return await optional_rows(
        store.select_many(table, {"id": ids}, columns=columns), table.value,
    )

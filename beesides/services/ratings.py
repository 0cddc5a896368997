"""Rating Operations — upsert keyed on (user, release), ownership-checked delete.

Invariants:
    - At most one rating per (user_id, release_id)
    - Update keeps created_at and advances updated_at; insert sets both to now
    - The release must exist before anything is written
    - Delete of a missing rating and of another user's rating raise the same NotFoundError
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from beesides.core.domain_types import Principal, RatingId, ReleaseId, Table
from beesides.core.errors import NotFoundError, ValidationFailedError
from beesides.core.rating_stats import summarize_scores
from beesides.core.repository_protocols import Row, TableStore
from beesides.schemas.ratings import RatingUpsert
from beesides.services.clock import timestamp
from beesides.services.releases import require_release

logger = logging.getLogger(__name__)


@dataclass
class RatingResult:
    row: Row
    is_new: bool
    release_stats: dict

    def to_dict(self) -> dict:
        return {**self.row, "is_new": self.is_new, "release_stats": self.release_stats}


async def upsert_rating(
    store: TableStore,
    principal: Principal,
    body: RatingUpsert,
    now: datetime | None = None,
) -> RatingResult:
    """Create the caller's rating of a release, or update it in place."""
    await require_release(store, body.release_id)

    existing = await store.select_one(
        Table.RATINGS,
        {"user_id": principal.id, "release_id": body.release_id},
        columns="id, score",
    )
    stamp = timestamp(now)
    if existing:
        row = await store.update(
            Table.RATINGS,
            {"id": existing["id"], "user_id": principal.id},
            {"score": body.score, "updated_at": stamp},
        )
        if row is None:
            raise NotFoundError("Rating")
    else:
        row = await store.insert(Table.RATINGS, {
            "user_id": principal.id,
            "release_id": body.release_id,
            "score": body.score,
            "created_at": stamp,
            "updated_at": stamp,
        })

    scores = await store.select_many(
        Table.RATINGS, {"release_id": body.release_id}, columns="score",
    )
    stats = summarize_scores((r["score"] for r in scores), ndigits=1)
    logger.info(
        f"Rating {'updated' if existing else 'added'} for release {body.release_id}",
        extra={"user_id": principal.id},
    )
    return RatingResult(row=row, is_new=existing is None, release_stats=stats.to_dict())


async def list_my_ratings(
    store: TableStore, principal: Principal, release_id: ReleaseId | None = None,
) -> list[Row]:
    filters: dict = {"user_id": principal.id}
    if release_id:
        filters["release_id"] = release_id
    return await store.select_many(
        Table.RATINGS, filters, order_by=[("updated_at", True)],
    )


async def delete_rating(
    store: TableStore,
    principal: Principal,
    rating_id: RatingId | None = None,
    release_id: ReleaseId | None = None,
) -> None:
    """Delete the caller's rating, addressed by id or by release."""
    if not rating_id and not release_id:
        raise ValidationFailedError("Rating ID or Release ID is required", "id")

    filters: dict = {"user_id": principal.id}
    if rating_id:
        filters["id"] = rating_id
    if release_id:
        filters["release_id"] = release_id

    existing = await store.select_one(Table.RATINGS, filters, columns="id")
    if not existing:
        raise NotFoundError("Rating")
    await store.delete(Table.RATINGS, {"id": existing["id"], "user_id": principal.id})

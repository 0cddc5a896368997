"""Review Operations — upsert keyed on (user, release), author-only visibility of drafts.

Invariants:
    - At most one review per (user_id, release_id)
    - A referenced rating must be the caller's rating of the same release
    - Unpublished reviews are visible to their author only; to anyone else they do not exist
    - Delete of a missing review and of another user's review raise the same NotFoundError
"""

from dataclasses import dataclass
from datetime import datetime

from beesides.core.domain_types import Principal, ReleaseId, ReviewId, Table
from beesides.core.errors import NotFoundError
from beesides.core.repository_protocols import Row, TableStore
from beesides.schemas.reviews import ReviewUpsert
from beesides.services.clock import timestamp
from beesides.services.releases import require_release


@dataclass
class ReviewResult:
    row: Row
    is_new: bool

    def to_dict(self) -> dict:
        return {**self.row, "is_new": self.is_new}


async def upsert_review(
    store: TableStore,
    principal: Principal,
    body: ReviewUpsert,
    now: datetime | None = None,
) -> ReviewResult:
    await require_release(store, body.release_id)

    if body.rating_id:
        rating = await store.select_one(
            Table.RATINGS,
            {"id": body.rating_id, "user_id": principal.id, "release_id": body.release_id},
            columns="id",
        )
        if not rating:
            raise NotFoundError("Rating")

    existing = await store.select_one(
        Table.REVIEWS,
        {"user_id": principal.id, "release_id": body.release_id},
        columns="id",
    )
    stamp = timestamp(now)
    fields = {
        "title": body.title,
        "content": body.content,
        "rating_id": body.rating_id,
        "is_published": body.is_published,
        "updated_at": stamp,
    }
    if existing:
        row = await store.update(
            Table.REVIEWS, {"id": existing["id"], "user_id": principal.id}, fields,
        )
        if row is None:
            raise NotFoundError("Review")
    else:
        row = await store.insert(Table.REVIEWS, {
            **fields,
            "user_id": principal.id,
            "release_id": body.release_id,
            "created_at": stamp,
        })
    return ReviewResult(row=row, is_new=existing is None)


async def get_review(
    store: TableStore, review_id: ReviewId, viewer: Principal | None = None,
) -> Row:
    review = await store.select_one(Table.REVIEWS, {"id": review_id})
    if not review:
        raise NotFoundError("Review")
    if not review.get("is_published") and (viewer is None or review["user_id"] != viewer.id):
        raise NotFoundError("Review")
    return review


async def list_release_reviews(store: TableStore, release_id: ReleaseId) -> list[Row]:
    """Published reviews of a release, newest first."""
    return await store.select_many(
        Table.REVIEWS,
        {"release_id": release_id, "is_published": True},
        order_by=[("created_at", True)],
    )


async def delete_review(
    store: TableStore, principal: Principal, review_id: ReviewId,
) -> None:
    review = await store.select_one(
        Table.REVIEWS, {"id": review_id, "user_id": principal.id}, columns="id",
    )
    if not review:
        raise NotFoundError(
            "Review", "Review not found or you do not have permission to delete it",
        )
    await store.delete(Table.REVIEWS, {"id": review_id, "user_id": principal.id})

"""Profile Operations — own profile, public profile statistics, signup-time creation.

Invariants:
    - A profile's id is always the Principal id from the session, never a body field
    - Updates write only PROFILE_UPDATABLE_FIELDS plus updated_at
    - create_signup_profile runs against the admin store (service-role credential):
      it is the one write that bypasses row-level security
    - create_signup_profile is idempotent for the same Principal; a username held
      by another profile is a ValidationFailedError
    - Public stats count only public collections
"""

import asyncio
import logging
import re
from datetime import datetime

from beesides.core.domain_types import (
    PROFILE_UPDATABLE_FIELDS, Principal, Table, UserId,
)
from beesides.core.errors import NotFoundError, ValidationFailedError
from beesides.core.rating_stats import rating_distribution, summarize_scores
from beesides.core.repository_protocols import Row, TableStore
from beesides.schemas.profiles import ProfileCreate, ProfileUpdate
from beesides.services.clock import timestamp

logger = logging.getLogger(__name__)


async def follow_counts(store: TableStore, user_id: UserId) -> dict:
    followers, following = await asyncio.gather(
        store.count(Table.FOLLOWS, {"following_id": user_id}),
        store.count(Table.FOLLOWS, {"follower_id": user_id}),
    )
    return {"followers_count": followers, "following_count": following}


async def get_my_profile(store: TableStore, principal: Principal) -> Row:
    profile = await store.select_one(Table.PROFILES, {"id": principal.id})
    if not profile:
        raise NotFoundError("Profile")
    return {**profile, **await follow_counts(store, principal.id)}


async def update_my_profile(
    store: TableStore,
    principal: Principal,
    body: ProfileUpdate,
    now: datetime | None = None,
) -> Row:
    changes = {k: v for k, v in body.changes().items() if k in PROFILE_UPDATABLE_FIELDS}
    changes["updated_at"] = timestamp(now)
    row = await store.update(Table.PROFILES, {"id": principal.id}, changes)
    if row is None:
        raise NotFoundError("Profile")
    return row


async def get_public_profile(
    store: TableStore, username: str, viewer: Principal | None = None,
) -> Row:
    """Profile by username with follow counts and activity statistics."""
    profile = await store.select_one(Table.PROFILES, {"username": username})
    if not profile:
        raise NotFoundError("Profile")
    user_id = profile["id"]

    counts, ratings, reviews_count, collections_count = await asyncio.gather(
        follow_counts(store, user_id),
        store.select_many(Table.RATINGS, {"user_id": user_id}, columns="score"),
        store.count(Table.REVIEWS, {"user_id": user_id, "is_published": True}),
        store.count(Table.COLLECTIONS, {"user_id": user_id, "is_public": True}),
    )
    scores = [r["score"] for r in ratings]
    summary = summarize_scores(scores, ndigits=1)

    is_following = None
    if viewer is not None and viewer.id != user_id:
        is_following = await store.select_one(
            Table.FOLLOWS, {"follower_id": viewer.id, "following_id": user_id},
        ) is not None

    return {
        **profile,
        **counts,
        "is_following": is_following,
        "stats": {
            "ratings_count": summary.ratings_count,
            "average_rating": summary.average_rating,
            "reviews_count": reviews_count,
            "collections_count": collections_count,
            "rating_distribution": rating_distribution(scores),
        },
    }


def default_username(principal: Principal) -> str:
    """Email local part reduced to username characters, padded to 3."""
    local = (principal.email or "").split("@")[0]
    candidate = re.sub(r"[^A-Za-z0-9_]", "_", local)[:30]
    if len(candidate) < 3:
        candidate = f"user_{principal.id.replace('-', '')[:8]}"
    return candidate


async def create_signup_profile(
    admin_store: TableStore,
    principal: Principal,
    body: ProfileCreate,
    now: datetime | None = None,
) -> tuple[Row, bool]:
    """Create the Principal's profile under the elevated credential; (row, created)."""
    existing = await admin_store.select_one(Table.PROFILES, {"id": principal.id})
    if existing:
        return existing, False

    username = body.username or default_username(principal)
    taken = await admin_store.select_one(
        Table.PROFILES, {"username": username}, columns="id",
    )
    if taken:
        raise ValidationFailedError("Username is already taken", "username")

    stamp = timestamp(now)
    row = await admin_store.insert(Table.PROFILES, {
        "id": principal.id,
        "username": username,
        "display_name": body.display_name or username,
        "created_at": stamp,
        "updated_at": stamp,
    })
    logger.info("Signup profile created", extra={"user_id": principal.id})
    return row, True

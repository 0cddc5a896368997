"""Domain Types — identities, value bounds and table names shared across layers.

Invariants:
    - Principal is resolved per request by the auth guard and never mutated
    - Rating scores are bounded MIN_SCORE–MAX_SCORE
    - Table names are declared once here; services never spell them inline
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ReleaseId = NewType("ReleaseId", str)
RatingId = NewType("RatingId", str)
ReviewId = NewType("ReviewId", str)
CollectionId = NewType("CollectionId", str)


@dataclass(frozen=True)
class Principal:
    """The authenticated identity making a request."""
    id: UserId
    email: str | None = None


# ─── Value Types ─────────────────────────────────────────────────

MIN_SCORE = 0.0
MAX_SCORE = 10.0
REVIEW_MIN_LENGTH = 10
REVIEW_TITLE_MAX_LENGTH = 200
COLLECTION_NAME_MAX_LENGTH = 100
COLLECTION_DESCRIPTION_MAX_LENGTH = 1000
USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,30}$"

PROFILE_UPDATABLE_FIELDS = ("display_name", "bio", "website_url", "avatar_url")


# ─── Enums ───────────────────────────────────────────────────────

class Table(str, Enum):
    """Tables of the hosted data store."""
    PROFILES = "profiles"
    RELEASES = "releases"
    ARTISTS = "artists"
    ARTIST_RELEASES = "artist_releases"
    GENRES = "genres"
    RELEASE_GENRES = "release_genres"
    TRACKS = "tracks"
    RATINGS = "ratings"
    REVIEWS = "reviews"
    COLLECTIONS = "collections"
    COLLECTION_RELEASES = "collection_releases"
    FOLLOWS = "follows"

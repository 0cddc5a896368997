"""Rating Schemas — score bounds enforced before any persistence call.

Invariants:
    - score is a JSON number (no booleans, no numeric strings) within
      MIN_SCORE–MAX_SCORE inclusive
    - release_id is non-empty after stripping
    - unknown fields are rejected (extra="forbid")
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beesides.core.domain_types import MAX_SCORE, MIN_SCORE

SCORE_MESSAGE = f"Score must be a number between {MIN_SCORE:g} and {MAX_SCORE:g}"


class RatingUpsert(BaseModel):
    """Create-or-update the caller's rating of a release."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    release_id: str = Field(alias="releaseId", min_length=1)
    score: float = Field(strict=True)

    @field_validator("release_id")
    @classmethod
    def strip_release_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Release ID is required")
        return v

    @field_validator("score", mode="before")
    @classmethod
    def require_number(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(SCORE_MESSAGE)
        return v

    @field_validator("score")
    @classmethod
    def check_score_range(cls, v: float) -> float:
        if not MIN_SCORE <= v <= MAX_SCORE:
            raise ValueError(SCORE_MESSAGE)
        return v

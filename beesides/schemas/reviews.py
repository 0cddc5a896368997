"""Review Schemas — content length checked on the trimmed text."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beesides.core.domain_types import REVIEW_MIN_LENGTH, REVIEW_TITLE_MAX_LENGTH


class ReviewUpsert(BaseModel):
    """Create-or-update the caller's review of a release."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    release_id: str = Field(alias="releaseId", min_length=1)
    content: str
    title: str | None = Field(None, max_length=REVIEW_TITLE_MAX_LENGTH)
    rating_id: str | None = Field(None, alias="ratingId")
    is_published: bool = Field(True, alias="isPublished")

    @field_validator("release_id")
    @classmethod
    def strip_release_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Release ID is required")
        return v

    @field_validator("content")
    @classmethod
    def check_content_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < REVIEW_MIN_LENGTH:
            raise ValueError(
                f"Review content must be at least {REVIEW_MIN_LENGTH} characters",
            )
        return v

    @field_validator("title")
    @classmethod
    def blank_title_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

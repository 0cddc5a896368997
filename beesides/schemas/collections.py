"""Collection Schemas — names are trimmed and must stay non-empty.

Invariants:
    - CollectionCreate.name: 1-100 chars after strip
    - CollectionReleaseAdd requires both ids
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beesides.core.domain_types import (
    COLLECTION_DESCRIPTION_MAX_LENGTH, COLLECTION_NAME_MAX_LENGTH,
)


class CollectionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    description: str | None = Field(None, max_length=COLLECTION_DESCRIPTION_MAX_LENGTH)
    is_public: bool = Field(True, alias="isPublic")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Collection name is required")
        if len(v) > COLLECTION_NAME_MAX_LENGTH:
            raise ValueError(
                f"Collection name must be at most {COLLECTION_NAME_MAX_LENGTH} characters",
            )
        return v


class CollectionReleaseAdd(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    collection_id: str = Field(alias="collectionId", min_length=1)
    release_id: str = Field(alias="releaseId", min_length=1)
    note: str | None = Field(None, max_length=500)

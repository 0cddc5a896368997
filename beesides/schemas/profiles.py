"""Profile Schemas — allow-listed updates and signup-time creation.

Invariants:
    - ProfileUpdate accepts only display_name, bio, website_url, avatar_url;
      any other key is rejected rather than ignored
    - ProfileUpdate must carry at least one field
    - usernames match USERNAME_PATTERN
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from beesides.core.domain_types import USERNAME_PATTERN


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    display_name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    website_url: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def require_some_field(self):
        if not self.model_fields_set:
            raise ValueError("No profile fields to update")
        return self

    def changes(self) -> dict:
        """Only the fields the caller actually sent (explicit nulls included)."""
        return self.model_dump(include=self.model_fields_set)


class ProfileCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(None, pattern=USERNAME_PATTERN)
    display_name: str | None = Field(None, max_length=100)

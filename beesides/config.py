"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Supabase URL/keys and the MusicBrainz contact are required: a missing value
      fails at process start (pydantic ValidationError), never per request
    - get_settings() is cached (lru_cache) — single instance per process
    - supabase_service_role_key is read only by the admin table store dependency
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from beesides.core.session_cookie import default_cookie_name


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Supabase (persistence + auth)
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str
    supabase_timeout_seconds: float = 10.0
    session_cookie_name: str | None = None

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # MusicBrainz (metadata provider)
    musicbrainz_contact: str
    musicbrainz_base_url: str = "https://musicbrainz.org/ws/2"
    musicbrainz_app_name: str = "Beesides-WebApp"
    musicbrainz_min_interval_seconds: float = 1.0
    musicbrainz_timeout_seconds: float = 10.0
    app_version: str = "0.1.0"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_cookie_name(self) -> str:
        return self.session_cookie_name or default_cookie_name(self.supabase_url)


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Beesides API — FastAPI application entry point.

Invariants:
    - Settings are loaded at import: missing required configuration stops the
      process before it serves anything
    - Routes registered explicitly (no auto-discovery)
    - Auth gateway and metadata client live on app.state for the process lifetime
    - Error handlers map every failure to a status + failure envelope
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beesides.api.error_handlers import register_error_handlers
from beesides.api.routes import (
    artists, collections, health, music, profiles, ratings, releases, reviews,
)
from beesides.config import get_settings
from beesides.infrastructure.musicbrainz_client import MusicBrainzClient
from beesides.infrastructure.observability import setup_logging
from beesides.infrastructure.supabase_auth import SupabaseAuthGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.auth_gateway = SupabaseAuthGateway(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout_seconds=settings.supabase_timeout_seconds,
    )
    app.state.metadata_provider = MusicBrainzClient(
        settings.musicbrainz_contact,
        app_name=settings.musicbrainz_app_name,
        app_version=settings.app_version,
        base_url=settings.musicbrainz_base_url,
        min_interval_seconds=settings.musicbrainz_min_interval_seconds,
        timeout_seconds=settings.musicbrainz_timeout_seconds,
    )
    logger.info("Beesides API started")
    yield
    await app.state.metadata_provider.aclose()
    await app.state.auth_gateway.aclose()
    logger.info("Beesides API shutting down")


settings = get_settings()

app = FastAPI(
    title="Beesides API", version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(music.router)
app.include_router(releases.router)
app.include_router(artists.router)
app.include_router(ratings.router)
app.include_router(reviews.router)
app.include_router(collections.router)
app.include_router(profiles.router)

register_error_handlers(app)

"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/health/ always returns 200 if the process is up
    - Not enveloped: orchestrators read `status` directly
"""

import logging

from fastapi import APIRouter, status

from beesides.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "beesides-api",
        "version": get_settings().app_version,
    }

"""Profile Routes — own profile, public profiles, signup-time profile creation.

Invariants:
    - /api/auth/profile is the only route that receives the admin store
    - The profile id always comes from the session Principal
"""

from fastapi import APIRouter, Depends, Query

from beesides.api.dependencies import (
    get_admin_store, get_store, require_principal, resolve_principal,
)
from beesides.api.handler import api_handler
from beesides.core.domain_types import Principal
from beesides.core.envelope import success
from beesides.core.errors import ValidationFailedError
from beesides.core.repository_protocols import TableStore
from beesides.schemas.profiles import ProfileCreate, ProfileUpdate
from beesides.services import profiles as profile_ops

router = APIRouter(tags=["profiles"])


@router.get("/api/profile/me")
@api_handler
async def get_my_profile(
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    return success(await profile_ops.get_my_profile(store, principal))


@router.patch("/api/profile/me")
@api_handler
async def update_my_profile(
    body: ProfileUpdate,
    principal: Principal = Depends(require_principal),
    store: TableStore = Depends(get_store),
):
    row = await profile_ops.update_my_profile(store, principal, body)
    return success(row, "Profile updated successfully")


@router.get("/api/profiles")
@api_handler
async def get_public_profile(
    username: str | None = Query(None),
    viewer: Principal | None = Depends(resolve_principal),
    store: TableStore = Depends(get_store),
):
    """Public profile with follow counts and activity statistics."""
    if not username:
        raise ValidationFailedError("Username is required", "username")
    return success(await profile_ops.get_public_profile(store, username, viewer))


@router.post("/api/auth/profile")
@api_handler
async def create_profile(
    body: ProfileCreate,
    principal: Principal = Depends(require_principal),
    admin_store: TableStore = Depends(get_admin_store),
):
    """Create the signed-up user's profile with the elevated credential."""
    row, created = await profile_ops.create_signup_profile(admin_store, principal, body)
    return success(row, "Profile created" if created else "Profile already exists")

"""Account and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from diet_manager.api.deps import admin_user, current_user, get_container
from diet_manager.api.responses import envelope
from diet_manager.api.schemas import ProfileUpdate, changes_of
from diet_manager.containers import AppContainer
from diet_manager.domain.errors import NotFoundError
from diet_manager.domain.models import UserRecord
from diet_manager.services.admin import serialize_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me")
async def me(user: UserRecord = Depends(current_user)) -> dict[str, object]:
    """Return the calling user."""
    return envelope(serialize_user(user))


@router.get("/users")
async def list_users(
    _: UserRecord = Depends(admin_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return all users (admin role only)."""
    users = [serialize_user(user) for user in container.user_service.list_users()]
    return envelope(users, count=len(users))


@router.get("/profile")
async def get_profile(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's profile."""
    profile = container.profile_service.get_profile(user.id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return envelope(profile)


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create or update the caller's profile."""
    profile = container.profile_service.update_profile(user.id, changes_of(body))
    return envelope(profile, message="Profile updated successfully")

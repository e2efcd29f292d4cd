"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from diet_manager.api.deps import get_container
from diet_manager.api.schemas import UserCreate
from diet_manager.containers import AppContainer
from diet_manager.services.admin import serialize_user

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    return get_container(request).settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a list of users with 7-day logging summaries."""
    return {"users": container.admin_service.list_users()}


@router.get("/users/{user_id}", dependencies=[Depends(require_admin)])
async def user_detail(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a detailed user summary."""
    return container.admin_service.get_user_detail(user_id)


@router.post("/users", status_code=201, dependencies=[Depends(require_admin)])
async def create_user(
    body: UserCreate, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Register an account; the API token is only returned here."""
    user = container.user_service.create_user(body.email, body.role)
    return {"user": serialize_user(user), "api_token": user.api_token}

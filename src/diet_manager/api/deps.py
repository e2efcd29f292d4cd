"""Request dependencies shared by the API routers."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import Depends, Header, HTTPException, Request, status

from diet_manager.containers import AppContainer
from diet_manager.domain.errors import BadRequestError, InvalidDateError
from diet_manager.domain.models import UserRecord
from diet_manager.services.access import require_admin

DATE_FORMAT = "%Y-%m-%d"


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def current_user(
    request: Request,
    x_api_token: str | None = Header(default=None),
) -> UserRecord:
    """Resolve the caller from the X-Api-Token header."""
    container = get_container(request)
    user = container.user_service.authenticate(x_api_token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no valid token",
        )
    return user


async def admin_user(user: UserRecord = Depends(current_user)) -> UserRecord:
    """Resolve the caller and require the admin role."""
    require_admin(user)
    return user


def parse_day(raw: str) -> date:
    """Parse a YYYY-MM-DD string."""
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()  # noqa: DTZ007
    except ValueError as exc:
        raise InvalidDateError() from exc


def parse_day_range(start_date: str | None, end_date: str | None) -> tuple[date, date]:
    """Parse a required start/end pair of YYYY-MM-DD strings."""
    if not start_date or not end_date:
        raise BadRequestError("start_date and end_date are required")
    return parse_day(start_date), parse_day(end_date)

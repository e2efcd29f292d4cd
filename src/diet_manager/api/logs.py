"""Meal log and daily totals endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from diet_manager.api.deps import (
    current_user,
    get_container,
    parse_day,
    parse_day_range,
)
from diet_manager.api.responses import envelope
from diet_manager.api.schemas import MealLogCreate, MealLogUpdate, changes_of
from diet_manager.containers import AppContainer
from diet_manager.domain.models import UserRecord
from diet_manager.services.meals import DEFAULT_HISTORY_LIMIT

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("/totals/today")
async def totals_today(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return today's totals, zeroed when nothing was logged."""
    return envelope(container.totals_service.get_today(user.id))


@router.get("/totals/weekly")
async def totals_weekly(
    week_start: str | None = None,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return averages for the current (or given) Monday-start week."""
    start = parse_day(week_start) if week_start else None
    return envelope(container.totals_service.summarize_week(user.id, start))


@router.get("/totals/range")
async def totals_range(
    start_date: str | None = None,
    end_date: str | None = None,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return stored totals for each logged day in the range."""
    start, end = parse_day_range(start_date, end_date)
    days = container.totals_service.summarize_range(user.id, start, end)
    return envelope(days, count=len(days))


@router.get("/totals/date/{day}")
async def totals_for_date(
    day: str,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.totals_service.get_day(user.id, parse_day(day)))


@router.get("/today")
async def logs_today(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    logs = container.meal_log_service.list_today(user.id)
    return envelope(logs, count=len(logs))


@router.get("/range")
async def logs_range(
    start_date: str | None = None,
    end_date: str | None = None,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    start, end = parse_day_range(start_date, end_date)
    logs = container.meal_log_service.list_range(user.id, start, end)
    return envelope(logs, count=len(logs))


@router.get("/date/{day}")
async def logs_for_date(
    day: str,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    logs = container.meal_log_service.list_for_day(user.id, parse_day(day))
    return envelope(logs, count=len(logs))


@router.get("")
async def recent_logs(
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=500),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the latest meal logs, newest first."""
    logs = container.meal_log_service.list_recent(user.id, limit)
    return envelope(logs, count=len(logs))


@router.post("", status_code=201)
async def create_log(
    body: MealLogCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a meal and refresh that day's totals."""
    entry = container.meal_log_service.log_meal(
        user_id=user.id,
        food_id=body.food_id,
        meal_type=body.meal_type,
        quantity=body.quantity,
        logged_at=body.logged_at,
    )
    return envelope(entry, message="Meal logged successfully")


@router.put("/{log_id}")
async def update_log(
    log_id: UUID,
    body: MealLogUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.meal_log_service.update_meal(user, log_id, changes_of(body))
    return envelope(entry, message="Log updated successfully")


@router.delete("/{log_id}")
async def delete_log(
    log_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    container.meal_log_service.delete_meal(user, log_id)
    return envelope(message="Log deleted successfully")

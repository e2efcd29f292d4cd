"""Weight history and progress endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from diet_manager.api.deps import current_user, get_container, parse_day_range
from diet_manager.api.responses import envelope
from diet_manager.api.schemas import WeightCreate, WeightUpdate, changes_of
from diet_manager.containers import AppContainer
from diet_manager.domain.models import UserRecord
from diet_manager.services.progress import DEFAULT_WEIGHT_HISTORY_LIMIT

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("/summary")
async def summary(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return weight, nutrition and goal progress together."""
    return envelope(container.progress_service.get_summary(user.id))


@router.get("/weight-progress")
async def weight_progress(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.progress_service.get_weight_progress(user.id))


@router.get("/nutrition")
async def nutrition_progress(
    days: int = Query(default=7, ge=1, le=365),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.progress_service.get_nutrition_progress(user.id, days))


@router.get("/goal")
async def goal_progress(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.progress_service.get_goal_progress(user.id))


@router.get("/weight/latest")
async def latest_weight(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.progress_service.get_latest(user.id))


@router.get("/weight/range")
async def weight_range(
    start_date: str | None = None,
    end_date: str | None = None,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    start, end = parse_day_range(start_date, end_date)
    entries = container.progress_service.list_range(user.id, start, end)
    return envelope(entries, count=len(entries))


@router.get("/weight")
async def weight_history(
    limit: int = Query(default=DEFAULT_WEIGHT_HISTORY_LIMIT, ge=1, le=500),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the latest weight entries, newest first."""
    entries = container.progress_service.list_history(user.id, limit)
    return envelope(entries, count=len(entries))


@router.post("/weight", status_code=201)
async def log_weight(
    body: WeightCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.progress_service.log_weight(
        user.id, body.value, measured_at=body.date, notes=body.notes
    )
    return envelope(entry, message="Weight logged successfully")


@router.put("/weight/{entry_id}")
async def update_weight(
    entry_id: UUID,
    body: WeightUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.progress_service.update_weight(user, entry_id, changes_of(body))
    return envelope(entry, message="Weight entry updated")


@router.delete("/weight/{entry_id}")
async def delete_weight(
    entry_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    container.progress_service.delete_weight(user, entry_id)
    return envelope(message="Weight entry deleted")

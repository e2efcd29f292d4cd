"""Food catalog endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from diet_manager.api.deps import current_user, get_container
from diet_manager.api.responses import envelope
from diet_manager.api.schemas import FoodCreate, FoodUpdate, changes_of
from diet_manager.containers import AppContainer
from diet_manager.domain.models import UserRecord
from diet_manager.services.foods import DEFAULT_FOOD_LIMIT

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("")
async def list_foods(
    category: str | None = None,
    search: str | None = None,
    limit: int = Query(default=DEFAULT_FOOD_LIMIT, ge=1, le=500),
    _: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return catalog foods, optionally filtered."""
    foods = container.food_service.list_foods(category, search, limit)
    return envelope(foods, count=len(foods))


@router.get("/{food_id}")
async def get_food(
    food_id: UUID,
    _: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.food_service.get_food(food_id))


@router.post("", status_code=201)
async def create_food(
    body: FoodCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    food = container.food_service.create_food(user, body.model_dump())
    return envelope(food, message="Food created successfully")


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    body: FoodUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    food = container.food_service.update_food(user, food_id, changes_of(body))
    return envelope(food, message="Food updated successfully")


@router.delete("/{food_id}")
async def delete_food(
    food_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    container.food_service.delete_food(user, food_id)
    return envelope(message="Food deleted successfully")

"""Diet plan endpoints."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from diet_manager.api.deps import current_user, get_container
from diet_manager.api.responses import envelope
from diet_manager.api.schemas import PlanCreate, PlanItemInput, PlanUpdate, changes_of
from diet_manager.containers import AppContainer
from diet_manager.domain.models import UserRecord

router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.get("/calculate-calories")
async def calculate_calories(
    sex: Literal["male", "female"] = Query(default="male", alias="gender"),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Estimate daily calories and macros from the caller's profile."""
    return envelope(container.plan_service.calculate_calories(user.id, sex))


@router.get("/active")
async def active_plan(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.plan_service.get_active_plan(user.id))


@router.get("")
async def list_plans(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    plans = container.plan_service.list_plans(user.id)
    return envelope(plans, count=len(plans))


@router.post("", status_code=201)
async def create_plan(
    body: PlanCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a plan; it replaces any previously active plan."""
    plan = container.plan_service.create_plan(
        user.id,
        name=body.name,
        items=[item.model_dump() for item in body.items],
    )
    return envelope(plan, message="Diet plan created successfully")


@router.get("/{plan_id}")
async def get_plan(
    plan_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return envelope(container.plan_service.get_plan(user, plan_id))


@router.put("/{plan_id}")
async def update_plan(
    plan_id: UUID,
    body: PlanUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    plan = container.plan_service.update_plan(user, plan_id, changes_of(body))
    return envelope(plan, message="Plan updated successfully")


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    container.plan_service.delete_plan(user, plan_id)
    return envelope(message="Plan deleted successfully")


@router.put("/{plan_id}/activate")
async def activate_plan(
    plan_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    plan = container.plan_service.activate_plan(user, plan_id)
    return envelope(plan, message="Plan activated")


@router.post("/{plan_id}/items")
async def add_item(
    plan_id: UUID,
    body: PlanItemInput,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    plan = container.plan_service.add_item(
        user, plan_id, body.food_id, body.meal_type, body.quantity
    )
    return envelope(plan, message="Item added to plan")


@router.delete("/{plan_id}/items/{item_id}")
async def remove_item(
    plan_id: UUID,
    item_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    plan = container.plan_service.remove_item(user, plan_id, item_id)
    return envelope(plan, message="Item removed from plan")

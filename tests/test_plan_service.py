"""Tests for diet plan service."""

import logging
from uuid import uuid4

import pytest

from diet_manager.domain.errors import (
    AccessDeniedError,
    IncompleteProfileError,
    NotFoundError,
)
from diet_manager.domain.nutrition import MacroProfile
from diet_manager.domain.plans import DietPlan, PlanItem, PlanTotals
from diet_manager.domain.profiles import Goal
from diet_manager.services.plans import PlanService, recompute_plan_totals
from diet_manager.services.profiles import ProfileService
from tests.conftest import (
    InMemoryFoodRepository,
    InMemoryPlanRepository,
    make_admin,
    make_user,
)


def test_plan_totals_recompute_after_item_removal(
    plan_service: PlanService, food_repository: InMemoryFoodRepository
) -> None:
    user = make_user()
    food = food_repository.add("Rice bowl", MacroProfile(100, 10.0, 10.0, 5.0))

    plan = plan_service.create_plan(
        user.id,
        items=[
            {"food_id": food.id, "quantity": 1, "meal_type": "breakfast"},
            {"food_id": food.id, "quantity": 2, "meal_type": "lunch"},
        ],
    )

    assert plan.totals == PlanTotals(300, 30.0, 30.0, 15.0)
    assert [item.calories for item in plan.items] == [100, 200]

    double = next(item for item in plan.items if item.quantity == 2)  # noqa: PLR2004
    updated = plan_service.remove_item(user, plan.id, double.id)

    assert updated.totals == PlanTotals(100, 10.0, 10.0, 5.0)
    assert len(updated.items) == 1


def test_create_plan_defaults(plan_service: PlanService) -> None:
    plan = plan_service.create_plan(uuid4())

    assert plan.name == "My Diet Plan"
    assert plan.items == []
    assert plan.totals == PlanTotals(0, 0.0, 0.0, 0.0)
    assert plan.is_active is True


def test_create_plan_drops_unknown_foods(
    plan_service: PlanService, food_repository: InMemoryFoodRepository
) -> None:
    food = food_repository.add("Egg", MacroProfile(70, 6.0, 0.5, 5.0))

    plan = plan_service.create_plan(
        uuid4(),
        items=[
            {"food_id": food.id, "quantity": 2, "meal_type": "breakfast"},
            {"food_id": uuid4(), "quantity": 1, "meal_type": "lunch"},
        ],
    )

    assert len(plan.items) == 1
    assert plan.totals.total_calories == 140


def test_only_one_active_plan(plan_service: PlanService) -> None:
    user = make_user()
    first = plan_service.create_plan(user.id, name="Cut")
    second = plan_service.create_plan(user.id, name="Bulk")

    active = [plan for plan in plan_service.list_plans(user.id) if plan.is_active]
    assert [plan.id for plan in active] == [second.id]

    plan_service.activate_plan(user, first.id)

    active = [plan for plan in plan_service.list_plans(user.id) if plan.is_active]
    assert [plan.id for plan in active] == [first.id]
    assert plan_service.get_active_plan(user.id).id == first.id


class FailingCreatePlanRepository(InMemoryPlanRepository):
    def create_plan(self, plan: DietPlan) -> DietPlan:
        raise RuntimeError("Failed to create diet plan")


def test_failed_create_keeps_current_active_plan(plan_service: PlanService) -> None:
    user = make_user()
    current = plan_service.create_plan(user.id, name="Cut")
    repository = FailingCreatePlanRepository(plans=dict(plan_service.repository.plans))
    failing = PlanService(
        repository=repository,
        food_service=plan_service.food_service,
        profile_service=plan_service.profile_service,
    )

    with pytest.raises(RuntimeError):
        failing.create_plan(user.id, name="Bulk")

    assert failing.get_active_plan(user.id).id == current.id


def test_list_plans_newest_first(plan_service: PlanService) -> None:
    user = make_user()
    plan_service.create_plan(user.id, name="Old")
    plan_service.create_plan(user.id, name="New")

    assert [plan.name for plan in plan_service.list_plans(user.id)] == ["New", "Old"]


def test_activate_is_owner_only(plan_service: PlanService) -> None:
    owner = make_user()
    plan = plan_service.create_plan(owner.id)

    with pytest.raises(AccessDeniedError):
        plan_service.activate_plan(make_admin(), plan.id)


def test_get_plan_allows_admin(plan_service: PlanService) -> None:
    plan = plan_service.create_plan(make_user().id)

    assert plan_service.get_plan(make_admin(), plan.id).id == plan.id
    with pytest.raises(AccessDeniedError):
        plan_service.get_plan(make_user(), plan.id)


def test_get_active_plan_missing(plan_service: PlanService) -> None:
    with pytest.raises(NotFoundError):
        plan_service.get_active_plan(uuid4())


def test_add_item_requires_existing_food(plan_service: PlanService) -> None:
    user = make_user()
    plan = plan_service.create_plan(user.id)

    with pytest.raises(NotFoundError):
        plan_service.add_item(user, plan.id, uuid4(), "dinner")


def test_add_item_updates_totals(
    plan_service: PlanService, food_repository: InMemoryFoodRepository
) -> None:
    user = make_user()
    food = food_repository.add("Oats", MacroProfile(150, 5.0, 27.0, 2.5))
    plan = plan_service.create_plan(user.id)

    updated = plan_service.add_item(user, plan.id, food.id, "breakfast", 1.5)

    assert updated.totals == PlanTotals(225, 7.5, 40.5, 3.8)
    assert updated.items[0].calories == 225


def test_update_plan_replaces_items_and_name(
    plan_service: PlanService, food_repository: InMemoryFoodRepository
) -> None:
    user = make_user()
    food = food_repository.add("Apple", MacroProfile(52, 0.3, 14.0, 0.2))
    plan = plan_service.create_plan(user.id)

    updated = plan_service.update_plan(
        user,
        plan.id,
        {
            "name": "Fruit",
            "items": [{"food_id": food.id, "quantity": 3, "meal_type": "snack"}],
            "is_active": False,
        },
    )

    assert updated.name == "Fruit"
    assert updated.totals.total_calories == 156
    assert updated.is_active is False


def test_deleted_food_is_skipped_with_warning(
    food_repository: InMemoryFoodRepository,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("diet_manager"), "propagate", True)
    food = food_repository.add("Bread", MacroProfile(80, 3.0, 15.0, 1.0))
    items = [
        PlanItem(
            id=uuid4(), food_id=food.id, quantity=1, meal_type="lunch", calories=80
        ),
        PlanItem(
            id=uuid4(), food_id=uuid4(), quantity=1, meal_type="lunch", calories=500
        ),
    ]

    with caplog.at_level(logging.WARNING, logger="diet_manager.services.plans"):
        totals = recompute_plan_totals(items, {food.id: food})

    assert totals == PlanTotals(80, 3.0, 15.0, 1.0)
    assert "unknown food" in caplog.text


def test_delete_plan(plan_service: PlanService) -> None:
    user = make_user()
    plan = plan_service.create_plan(user.id)

    plan_service.delete_plan(user, plan.id)

    with pytest.raises(NotFoundError):
        plan_service.get_plan(user, plan.id)


def test_calculate_calories_requires_complete_profile(
    plan_service: PlanService, profile_service: ProfileService
) -> None:
    user_id = uuid4()
    profile_service.update_profile(user_id, {"age": 30})

    with pytest.raises(IncompleteProfileError):
        plan_service.calculate_calories(user_id)


def test_calculate_calories(
    plan_service: PlanService, profile_service: ProfileService
) -> None:
    user_id = uuid4()
    profile_service.update_profile(
        user_id,
        {"age": 30, "height": 175, "weight": 70, "goal": Goal.MAINTAIN_WEIGHT},
    )

    estimate = plan_service.calculate_calories(user_id)

    assert estimate.daily_calories == 2628
    assert estimate.macros.protein_g == 164
    assert estimate.goal == Goal.MAINTAIN_WEIGHT

"""Diet plan service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID, uuid4

from diet_manager.domain.errors import IncompleteProfileError, NotFoundError
from diet_manager.domain.foods import Food
from diet_manager.domain.models import UserRecord
from diet_manager.domain.nutrition import ZERO_MACROS, round_whole
from diet_manager.domain.plans import (
    DEFAULT_PLAN_NAME,
    CalorieEstimate,
    DietPlan,
    PlanItem,
    PlanTotals,
)
from diet_manager.services.access import require_owner, require_owner_or_admin
from diet_manager.services.estimator import estimate_daily_calories, estimate_macros
from diet_manager.services.foods import FoodService
from diet_manager.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for diet plans."""

    def create_plan(self, plan: DietPlan) -> DietPlan:
        """Insert a plan and return it as stored."""

    def save_plan(self, plan: DietPlan) -> DietPlan:
        """Replace a stored plan's name, items, totals and active flag."""

    def get_plan(self, plan_id: UUID) -> DietPlan | None:
        """Return a plan by id."""

    def list_plans(self, user_id: UUID) -> list[DietPlan]:
        """Return a user's plans, newest first."""

    def get_active_plan(self, user_id: UUID) -> DietPlan | None:
        """Return the user's active plan, if any."""

    def deactivate_plans(self, user_id: UUID, keep: UUID | None = None) -> None:
        """Clear the active flag on a user's plans other than `keep`."""

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""


@dataclass
class PlanService:
    """Plan CRUD with totals re-derived on every item change."""

    repository: PlanRepository
    food_service: FoodService
    profile_service: ProfileService

    def create_plan(
        self,
        user_id: UUID,
        name: str | None = None,
        items: list[dict[str, object]] | None = None,
    ) -> DietPlan:
        """Create a plan and make it the user's only active plan."""
        raw_items = items or []
        foods = self._foods_for(raw_items)
        plan_items = _build_items(raw_items, foods)
        plan = DietPlan(
            id=uuid4(),
            user_id=user_id,
            name=name or DEFAULT_PLAN_NAME,
            totals=recompute_plan_totals(plan_items, foods),
            items=plan_items,
            is_active=True,
        )
        created = self.repository.create_plan(plan)
        self.repository.deactivate_plans(user_id, keep=created.id)
        return created

    def list_plans(self, user_id: UUID) -> list[DietPlan]:
        """Return the user's plans."""
        return self.repository.list_plans(user_id)

    def get_plan(self, actor: UserRecord, plan_id: UUID) -> DietPlan:
        """Return a plan the actor may access."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Plan not found")
        require_owner_or_admin(actor, plan.user_id)
        return plan

    def update_plan(
        self, actor: UserRecord, plan_id: UUID, changes: dict[str, object]
    ) -> DietPlan:
        """Rename, (de)activate or replace the items of a plan."""
        plan = self.get_plan(actor, plan_id)
        if changes.get("name"):
            plan = replace(plan, name=str(changes["name"]))
        if "items" in changes and changes["items"] is not None:
            raw_items = list(changes["items"])
            foods = self._foods_for(raw_items)
            plan_items = _build_items(raw_items, foods)
            plan = replace(
                plan,
                items=plan_items,
                totals=recompute_plan_totals(plan_items, foods),
            )
        if changes.get("is_active") is not None:
            plan = replace(plan, is_active=bool(changes["is_active"]))
        saved = self.repository.save_plan(plan)
        if changes.get("is_active") is True:
            self.repository.deactivate_plans(saved.user_id, keep=saved.id)
        return saved

    def add_item(  # noqa: PLR0913
        self,
        actor: UserRecord,
        plan_id: UUID,
        food_id: UUID,
        meal_type: str,
        quantity: float | None = None,
    ) -> DietPlan:
        """Append an item to a plan and re-derive its totals."""
        plan = self.get_plan(actor, plan_id)
        food = self.food_service.get_food(food_id)
        portion = quantity or 1
        item = PlanItem(
            id=uuid4(),
            food_id=food.id,
            quantity=portion,
            meal_type=meal_type,
            calories=round_whole(food.calories * portion),
        )
        return self._save_items(plan, [*plan.items, item])

    def remove_item(self, actor: UserRecord, plan_id: UUID, item_id: UUID) -> DietPlan:
        """Remove an item from a plan and re-derive its totals."""
        plan = self.get_plan(actor, plan_id)
        remaining = [item for item in plan.items if item.id != item_id]
        return self._save_items(plan, remaining)

    def delete_plan(self, actor: UserRecord, plan_id: UUID) -> None:
        """Delete a plan."""
        plan = self.get_plan(actor, plan_id)
        self.repository.delete_plan(plan.id)

    def get_active_plan(self, user_id: UUID) -> DietPlan:
        """Return the user's active plan or raise NotFoundError."""
        plan = self.repository.get_active_plan(user_id)
        if plan is None:
            raise NotFoundError("No active plan found")
        return plan

    def activate_plan(self, actor: UserRecord, plan_id: UUID) -> DietPlan:
        """Make a plan the owner's only active plan."""
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("Plan not found")
        require_owner(actor, plan.user_id)
        saved = self.repository.save_plan(replace(plan, is_active=True))
        self.repository.deactivate_plans(saved.user_id, keep=saved.id)
        return saved

    def calculate_calories(self, user_id: UUID, sex: str = "male") -> CalorieEstimate:
        """Estimate daily calories and macros from the user's profile."""
        profile = self.profile_service.get_profile(user_id)
        if profile is None or not profile.is_complete:
            raise IncompleteProfileError()
        daily_calories = estimate_daily_calories(profile, sex)
        return CalorieEstimate(
            daily_calories=daily_calories,
            macros=estimate_macros(daily_calories, profile.goal),
            goal=profile.goal,
            age=profile.age,
            height=profile.height,
            weight=profile.weight,
        )

    def _save_items(self, plan: DietPlan, items: list[PlanItem]) -> DietPlan:
        foods = self.food_service.resolve([item.food_id for item in items])
        totals = recompute_plan_totals(items, foods)
        return self.repository.save_plan(replace(plan, items=items, totals=totals))

    def _foods_for(self, raw_items: list[dict[str, object]]) -> dict[UUID, Food]:
        food_ids = [UUID(str(item["food_id"])) for item in raw_items]
        return self.food_service.resolve(food_ids)


def recompute_plan_totals(
    items: list[PlanItem], foods: Mapping[UUID, Food]
) -> PlanTotals:
    """Sum food macros times quantity over items, rounding once at the end.

    Items whose food can no longer be resolved are skipped.
    """
    total = ZERO_MACROS
    for item in items:
        food = foods.get(item.food_id)
        if food is None:
            _logger.warning(
                "Skipping plan item with unknown food: item=%s food=%s",
                item.id,
                item.food_id,
            )
            continue
        total = total.plus(food.macros.scaled(item.quantity or 1))
    total = total.rounded()
    return PlanTotals(
        total_calories=total.calories,
        total_protein_g=total.protein_g,
        total_carbs_g=total.carbs_g,
        total_fat_g=total.fat_g,
    )


def _build_items(
    raw_items: list[dict[str, object]], foods: Mapping[UUID, Food]
) -> list[PlanItem]:
    """Turn request items into plan items, dropping unknown foods."""
    items: list[PlanItem] = []
    for raw in raw_items:
        food = foods.get(UUID(str(raw["food_id"])))
        if food is None:
            continue
        quantity = float(raw.get("quantity") or 1)
        items.append(
            PlanItem(
                id=uuid4(),
                food_id=food.id,
                quantity=quantity,
                meal_type=str(raw["meal_type"]),
                calories=round_whole(food.calories * quantity),
            )
        )
    return items

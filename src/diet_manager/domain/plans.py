"""Domain models for diet plans."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from diet_manager.domain.nutrition import MacroTargets
from diet_manager.domain.profiles import Goal

DEFAULT_PLAN_NAME = "My Diet Plan"


@dataclass(frozen=True)
class PlanItem:
    """A food portion scheduled for a meal in a plan."""

    id: UUID
    food_id: UUID
    quantity: float
    meal_type: str
    calories: float


@dataclass(frozen=True)
class PlanTotals:
    """Summed nutrition of a plan's items."""

    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float


@dataclass(frozen=True)
class DietPlan:
    """A user's named list of planned meals."""

    id: UUID
    user_id: UUID
    name: str
    totals: PlanTotals
    items: list[PlanItem] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class CalorieEstimate:
    """Recommended daily intake for a profile."""

    daily_calories: int
    macros: MacroTargets
    goal: Goal | None
    age: int
    height: float
    weight: float

"""Domain models for nutrition statistics."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class DailyTotals:
    """Per-user, per-day sum of logged meals."""

    user_id: UUID
    day: date
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    meals_count: int


@dataclass(frozen=True)
class WeeklySummary:
    """Averages over the days logged in a Monday-start week."""

    week_start: date
    days_logged: int
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float
    total_meals: int


@dataclass(frozen=True)
class NutritionProgress:
    """Averages and history over the most recent days."""

    days_tracked: int
    avg_calories: float
    avg_protein_g: float
    avg_carbs_g: float
    avg_fat_g: float
    history: list[DailyTotals] = field(default_factory=list)

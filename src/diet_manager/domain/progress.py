"""Domain models for weight tracking and goal progress."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from diet_manager.domain.profiles import Goal
from diet_manager.domain.stats import NutritionProgress

TREND_GAINING = "gaining"
TREND_LOSING = "losing"
TREND_STABLE = "stable"
TREND_NO_DATA = "no_data"


@dataclass(frozen=True)
class WeightEntry:
    """A dated body-weight measurement in kilograms."""

    id: UUID
    user_id: UUID
    value: float
    date: datetime
    notes: str | None = None


@dataclass(frozen=True)
class WeightProgress:
    """Change over the full history plus a short-window trend."""

    current_weight: float | None
    start_weight: float | None
    total_change: float
    percent_change: float
    trend: str
    entries_count: int


@dataclass(frozen=True)
class GoalProgress:
    """Status of a user's stated goal against the weight trend."""

    goal: Goal | None
    status: str
    message: str
    weight_progress: WeightProgress | None = None
    calorie_target: int | None = None


@dataclass(frozen=True)
class ProgressSummary:
    """Weight, nutrition and goal progress computed together."""

    weight: WeightProgress
    nutrition: NutritionProgress
    goal: GoalProgress
    generated_at: datetime

"""Weight tracking and progress evaluation."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from diet_manager.domain.errors import NotFoundError
from diet_manager.domain.models import UserRecord
from diet_manager.domain.nutrition import round_tenth
from diet_manager.domain.profiles import Goal, Profile
from diet_manager.domain.progress import (
    TREND_GAINING,
    TREND_LOSING,
    TREND_NO_DATA,
    TREND_STABLE,
    GoalProgress,
    ProgressSummary,
    WeightEntry,
    WeightProgress,
)
from diet_manager.domain.stats import NutritionProgress
from diet_manager.services.access import require_owner_or_admin
from diet_manager.services.clock import as_aware, day_bounds
from diet_manager.services.profiles import ProfileService
from diet_manager.services.totals import TotalsService

# The trend window counts entries, not calendar days.
TREND_WINDOW_ENTRIES = 7
TREND_THRESHOLD_KG = 0.5
DEFAULT_WEIGHT_HISTORY_LIMIT = 30

STATUS_ON_TRACK = "on_track"
STATUS_OFF_TRACK = "off_track"
STATUS_STABLE = "stable"
STATUS_ATTENTION = "attention"
STATUS_NO_PROFILE = "no_profile"

_LOSING_ON_TRACK = (STATUS_ON_TRACK, "Great progress! You are losing weight.")
_GAINING_ON_TRACK = (STATUS_ON_TRACK, "Great progress! You are gaining weight.")
_GAIN_GOAL_TABLE = {
    TREND_GAINING: _GAINING_ON_TRACK,
    TREND_LOSING: (
        STATUS_OFF_TRACK,
        "You are losing weight. Consider increasing calorie intake.",
    ),
    None: (
        STATUS_STABLE,
        "Your weight is stable. Consider adjusting your diet plan.",
    ),
}
_MAINTAIN_CHANGING = (
    STATUS_ATTENTION,
    "Your weight is changing. Review your calorie intake.",
)

# goal -> trend -> (status, message); the None trend key covers every other trend.
_GOAL_TABLE: dict[Goal, dict[str | None, tuple[str, str]]] = {
    Goal.LOSE_WEIGHT: {
        TREND_LOSING: _LOSING_ON_TRACK,
        TREND_GAINING: (
            STATUS_OFF_TRACK,
            "You are gaining weight. Consider reviewing your diet plan.",
        ),
        None: (
            STATUS_STABLE,
            "Your weight is stable. Keep consistent with your plan.",
        ),
    },
    Goal.GAIN_WEIGHT: _GAIN_GOAL_TABLE,
    Goal.BUILD_MUSCLE: _GAIN_GOAL_TABLE,
    Goal.MAINTAIN_WEIGHT: {
        TREND_STABLE: (STATUS_ON_TRACK, "Perfect! You are maintaining your weight."),
        None: _MAINTAIN_CHANGING,
    },
}
_NO_GOAL = (STATUS_ON_TRACK, "Set a goal in your profile to track progress.")
_NO_PROFILE_MESSAGE = "Please complete your profile to track goal progress"


class WeightRepository(Protocol):
    """Persistence interface for weight entries."""

    def create_weight(
        self, user_id: UUID, value: float, measured_at: datetime, notes: str | None
    ) -> WeightEntry:
        """Create a weight entry and return it."""

    def get_weight(self, entry_id: UUID) -> WeightEntry | None:
        """Return a weight entry by id."""

    def update_weight(self, entry_id: UUID, payload: dict[str, object]) -> WeightEntry:
        """Update a weight entry and return it."""

    def delete_weight(self, entry_id: UUID) -> None:
        """Delete a weight entry."""

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        """Return all of a user's entries, oldest first."""

    def list_recent_weights(self, user_id: UUID, limit: int) -> list[WeightEntry]:
        """Return the latest entries, newest first."""

    def list_weights_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WeightEntry]:
        """Return entries with start <= date < end, oldest first."""


@dataclass
class ProgressService:
    """Weight history plus weight, nutrition and goal progress reads."""

    repository: WeightRepository
    profile_service: ProfileService
    totals_service: TotalsService

    def log_weight(
        self,
        user_id: UUID,
        value: float,
        measured_at: datetime | None = None,
        notes: str | None = None,
    ) -> WeightEntry:
        """Record a weight and copy it onto the profile."""
        moment = self.totals_service.clock.now()
        if measured_at is not None:
            moment = as_aware(measured_at, self.totals_service.tz)
        entry = self.repository.create_weight(user_id, value, moment, notes)
        self.profile_service.record_weight(user_id, value)
        return entry

    def list_history(
        self, user_id: UUID, limit: int = DEFAULT_WEIGHT_HISTORY_LIMIT
    ) -> list[WeightEntry]:
        """Return the latest weight entries."""
        return self.repository.list_recent_weights(user_id, limit)

    def list_range(self, user_id: UUID, start: date, end: date) -> list[WeightEntry]:
        """Return weight entries for the days start..end inclusive."""
        tz = self.totals_service.tz
        range_start, _ = day_bounds(start, tz)
        _, range_end = day_bounds(end, tz)
        return self.repository.list_weights_between(user_id, range_start, range_end)

    def get_latest(self, user_id: UUID) -> WeightEntry:
        """Return the most recent entry or raise NotFoundError."""
        recent = self.repository.list_recent_weights(user_id, 1)
        if not recent:
            raise NotFoundError("No weight entries found")
        return recent[0]

    def update_weight(
        self, actor: UserRecord, entry_id: UUID, changes: dict[str, object]
    ) -> WeightEntry:
        """Update an entry the actor may access."""
        self._get_entry(actor, entry_id)
        payload = dict(changes)
        if payload.get("date"):
            payload["date"] = as_aware(payload["date"], self.totals_service.tz)
        return self.repository.update_weight(entry_id, payload)

    def delete_weight(self, actor: UserRecord, entry_id: UUID) -> None:
        """Delete an entry the actor may access."""
        self._get_entry(actor, entry_id)
        self.repository.delete_weight(entry_id)

    def get_weight_progress(self, user_id: UUID) -> WeightProgress:
        """Classify the user's full weight history."""
        return classify_weight_progress(self.repository.list_weights(user_id))

    def get_nutrition_progress(self, user_id: UUID, days: int = 7) -> NutritionProgress:
        """Return nutrition averages over the last days."""
        return self.totals_service.summarize_nutrition(user_id, days)

    def get_goal_progress(self, user_id: UUID) -> GoalProgress:
        """Evaluate the profile goal against the weight trend."""
        profile = self.profile_service.get_profile(user_id)
        return evaluate_goal_progress(profile, self.get_weight_progress(user_id))

    def get_summary(self, user_id: UUID) -> ProgressSummary:
        """Return weight, 7-day nutrition and goal progress together."""
        weight = self.get_weight_progress(user_id)
        profile = self.profile_service.get_profile(user_id)
        return ProgressSummary(
            weight=weight,
            nutrition=self.get_nutrition_progress(user_id, 7),
            goal=evaluate_goal_progress(profile, weight),
            generated_at=self.totals_service.clock.now(),
        )

    def _get_entry(self, actor: UserRecord, entry_id: UUID) -> WeightEntry:
        entry = self.repository.get_weight(entry_id)
        if entry is None:
            raise NotFoundError("Weight entry not found")
        require_owner_or_admin(actor, entry.user_id)
        return entry


def classify_weight_progress(entries: Sequence[WeightEntry]) -> WeightProgress:
    """Compute overall change and the short-term trend of a weight series."""
    if not entries:
        return WeightProgress(
            current_weight=None,
            start_weight=None,
            total_change=0,
            percent_change=0,
            trend=TREND_NO_DATA,
            entries_count=0,
        )
    ordered = sorted(entries, key=lambda entry: entry.date)
    start_weight = ordered[0].value
    current_weight = ordered[-1].value
    total_change = round_tenth(current_weight - start_weight)
    percent_change = round_tenth(total_change / start_weight * 100)
    return WeightProgress(
        current_weight=current_weight,
        start_weight=start_weight,
        total_change=total_change,
        percent_change=percent_change,
        trend=_recent_trend(ordered[-TREND_WINDOW_ENTRIES:]),
        entries_count=len(ordered),
    )


def _recent_trend(window: Sequence[WeightEntry]) -> str:
    if len(window) < 2:  # noqa: PLR2004
        return TREND_STABLE
    change = window[-1].value - window[0].value
    if change > TREND_THRESHOLD_KG:
        return TREND_GAINING
    if change < -TREND_THRESHOLD_KG:
        return TREND_LOSING
    return TREND_STABLE


def evaluate_goal_progress(
    profile: Profile | None, weight_progress: WeightProgress
) -> GoalProgress:
    """Map the profile goal and weight trend to a status and message."""
    if profile is None:
        return GoalProgress(
            goal=None, status=STATUS_NO_PROFILE, message=_NO_PROFILE_MESSAGE
        )
    table = _GOAL_TABLE.get(profile.goal) if profile.goal else None
    if table is None:
        status, message = _NO_GOAL
    else:
        status, message = table.get(weight_progress.trend, table[None])
    return GoalProgress(
        goal=profile.goal,
        status=status,
        message=message,
        weight_progress=weight_progress,
        calorie_target=profile.daily_calorie_target,
    )

"""Meal logging service."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from diet_manager.domain.errors import NotFoundError
from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.models import UserRecord
from diet_manager.domain.nutrition import MacroProfile
from diet_manager.services.access import require_owner_or_admin
from diet_manager.services.clock import as_aware, day_bounds, local_day
from diet_manager.services.foods import FoodService
from diet_manager.services.totals import TotalsService

DEFAULT_HISTORY_LIMIT = 50


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        quantity: float,
        meal_type: str,
        logged_at: datetime,
        macros: MacroProfile,
    ) -> MealLogEntry:
        """Create a meal log and return it."""

    def get_meal_log(self, meal_log_id: UUID) -> MealLogEntry | None:
        """Return a meal log by id."""

    def update_meal_log(
        self, meal_log_id: UUID, payload: dict[str, object]
    ) -> MealLogEntry:
        """Update a meal log and return it."""

    def delete_meal_log(self, meal_log_id: UUID) -> None:
        """Delete a meal log."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs with start <= logged_at < end, oldest first."""

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogEntry]:
        """Return the most recent meal logs, newest first."""


@dataclass
class MealLogService:
    """Persists meal logs and keeps daily totals in step with them."""

    repository: MealLogRepository
    food_service: FoodService
    totals_service: TotalsService

    def log_meal(
        self,
        user_id: UUID,
        food_id: UUID,
        meal_type: str,
        quantity: float | None = None,
        logged_at: datetime | None = None,
    ) -> MealLogEntry:
        """Log a food portion and re-derive that day's totals."""
        food = self.food_service.get_food(food_id)
        portion = quantity or 1
        moment = self.totals_service.clock.now()
        if logged_at is not None:
            moment = as_aware(logged_at, self.totals_service.tz)
        entry = self.repository.create_meal_log(
            user_id=user_id,
            food_id=food.id,
            quantity=portion,
            meal_type=meal_type,
            logged_at=moment,
            macros=food.macros.scaled(portion).rounded(),
        )
        self.totals_service.recompute_daily_totals(user_id, entry.logged_at)
        return entry

    def get_meal_log(self, actor: UserRecord, meal_log_id: UUID) -> MealLogEntry:
        """Return a meal log the actor may access."""
        entry = self.repository.get_meal_log(meal_log_id)
        if entry is None:
            raise NotFoundError("Log not found")
        require_owner_or_admin(actor, entry.user_id)
        return entry

    def list_for_day(self, user_id: UUID, day: date) -> list[MealLogEntry]:
        """Return a day's meal logs in time order."""
        start, end = day_bounds(day, self.totals_service.tz)
        return self.repository.list_meal_logs(user_id, start, end)

    def list_today(self, user_id: UUID) -> list[MealLogEntry]:
        """Return today's meal logs in time order."""
        return self.list_for_day(user_id, self.totals_service.today())

    def list_range(self, user_id: UUID, start: date, end: date) -> list[MealLogEntry]:
        """Return meal logs for the days start..end inclusive."""
        tz = self.totals_service.tz
        range_start, _ = day_bounds(start, tz)
        _, range_end = day_bounds(end, tz)
        return self.repository.list_meal_logs(user_id, range_start, range_end)

    def list_recent(
        self, user_id: UUID, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[MealLogEntry]:
        """Return the latest meal logs."""
        return self.repository.list_recent_meal_logs(user_id, limit)

    def update_meal(
        self, actor: UserRecord, meal_log_id: UUID, changes: dict[str, object]
    ) -> MealLogEntry:
        """Apply changes to a log, re-deriving macros and affected totals."""
        entry = self.get_meal_log(actor, meal_log_id)
        payload = dict(changes)
        if payload.get("logged_at"):
            payload["logged_at"] = as_aware(
                payload["logged_at"], self.totals_service.tz
            )
        if payload.get("quantity") or payload.get("food_id"):
            food_id = payload.get("food_id") or entry.food_id
            quantity = payload.get("quantity") or entry.quantity
            resolved = self.food_service.resolve([food_id])
            food = resolved.get(food_id)
            if food is not None:
                macros = food.macros.scaled(quantity).rounded()
                payload.update(
                    calories=macros.calories,
                    protein_g=macros.protein_g,
                    carbs_g=macros.carbs_g,
                    fat_g=macros.fat_g,
                )
        updated = self.repository.update_meal_log(meal_log_id, payload)
        self._recompute_days(entry.user_id, entry.logged_at, updated.logged_at)
        return updated

    def delete_meal(self, actor: UserRecord, meal_log_id: UUID) -> None:
        """Delete a log and re-derive that day's totals."""
        entry = self.get_meal_log(actor, meal_log_id)
        self.repository.delete_meal_log(meal_log_id)
        self.totals_service.recompute_daily_totals(entry.user_id, entry.logged_at)

    def _recompute_days(self, user_id: UUID, *moments: datetime) -> None:
        tz = self.totals_service.tz
        days = dict.fromkeys(local_day(moment, tz) for moment in moments)
        for day in days:
            self.totals_service.recompute_daily_totals(user_id, day)

"""Daily nutrition totals and period summaries."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.nutrition import ZERO_MACROS, round_tenth, round_whole
from diet_manager.domain.stats import DailyTotals, NutritionProgress, WeeklySummary
from diet_manager.services.clock import Clock, SystemClock, day_bounds, local_day

DAYS_PER_WEEK = 7

_logger = logging.getLogger(__name__)


class TotalsRepository(Protocol):
    """Persistence interface for meal logs and their daily totals."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs with start <= logged_at < end."""

    def get_daily_totals(self, user_id: UUID, day: date) -> DailyTotals | None:
        """Return the stored totals for a day, if any."""

    def upsert_daily_totals(self, totals: DailyTotals) -> DailyTotals:
        """Insert or replace the totals keyed by (user_id, day)."""

    def list_daily_totals(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyTotals]:
        """Return stored totals with start <= day <= end, oldest first."""


@dataclass
class TotalsService:
    """Re-derives per-day totals and summarizes them over periods."""

    repository: TotalsRepository
    clock: Clock = field(default_factory=SystemClock)
    timezone_name: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        """Return the timezone that defines calendar days."""
        return ZoneInfo(self.timezone_name)

    def today(self) -> date:
        """Return the clock's current local date."""
        return local_day(self.clock.now(), self.tz)

    def recompute_daily_totals(
        self, user_id: UUID, moment: datetime | date
    ) -> DailyTotals:
        """Re-sum a day's meal logs and replace the stored totals."""
        day = local_day(moment, self.tz)
        start, end = day_bounds(day, self.tz)
        logs = self.repository.list_meal_logs(user_id, start, end)
        totals = aggregate_day(user_id, day, logs)
        _logger.info(
            "Recomputed daily totals: user=%s day=%s meals=%s calories=%s",
            user_id,
            day,
            totals.meals_count,
            totals.total_calories,
        )
        return self.repository.upsert_daily_totals(totals)

    def get_day(self, user_id: UUID, day: date) -> DailyTotals:
        """Return a day's totals, zeroed when nothing was logged."""
        stored = self.repository.get_daily_totals(user_id, day)
        if stored is None:
            return aggregate_day(user_id, day, [])
        return stored

    def get_today(self, user_id: UUID) -> DailyTotals:
        """Return today's totals in the configured timezone."""
        return self.get_day(user_id, self.today())

    def summarize_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyTotals]:
        """Return stored totals for every logged day in [start, end]."""
        return self.repository.list_daily_totals(user_id, start, end)

    def summarize_week(
        self, user_id: UUID, week_start: date | None = None
    ) -> WeeklySummary:
        """Return averages for the week starting on week_start.

        Without an explicit start the current Monday-start week is used.
        """
        start = week_start or current_week_start(self.today())
        end = start + timedelta(days=DAYS_PER_WEEK - 1)
        days = self.repository.list_daily_totals(user_id, start, end)
        return summarize_week_days(start, days)

    def summarize_nutrition(self, user_id: UUID, days: int = 7) -> NutritionProgress:
        """Return averages and history over the last `days` calendar days."""
        end = self.today()
        start = end - timedelta(days=max(days, 1) - 1)
        history = self.repository.list_daily_totals(user_id, start, end)
        averages = _average(history)
        return NutritionProgress(
            days_tracked=len(history),
            avg_calories=averages[0],
            avg_protein_g=averages[1],
            avg_carbs_g=averages[2],
            avg_fat_g=averages[3],
            history=history,
        )


def aggregate_day(user_id: UUID, day: date, logs: list[MealLogEntry]) -> DailyTotals:
    """Sum the stored macro snapshots of a day's logs."""
    total = ZERO_MACROS
    for log in logs:
        total = total.plus(log.macros)
    total = total.rounded()
    return DailyTotals(
        user_id=user_id,
        day=day,
        total_calories=total.calories,
        total_protein_g=total.protein_g,
        total_carbs_g=total.carbs_g,
        total_fat_g=total.fat_g,
        meals_count=len(logs),
    )


def current_week_start(today: date) -> date:
    """Return the Monday on or before today."""
    return today - timedelta(days=today.weekday())


def summarize_week_days(week_start: date, days: list[DailyTotals]) -> WeeklySummary:
    """Average totals over the days that have a record."""
    averages = _average(days)
    return WeeklySummary(
        week_start=week_start,
        days_logged=len(days),
        avg_calories=averages[0],
        avg_protein_g=averages[1],
        avg_carbs_g=averages[2],
        avg_fat_g=averages[3],
        total_meals=sum(day.meals_count for day in days),
    )


def _average(days: list[DailyTotals]) -> tuple[float, float, float, float]:
    if not days:
        return 0, 0.0, 0.0, 0.0
    count = len(days)
    return (
        round_whole(sum(day.total_calories for day in days) / count),
        round_tenth(sum(day.total_protein_g for day in days) / count),
        round_tenth(sum(day.total_carbs_g for day in days) / count),
        round_tenth(sum(day.total_fat_g for day in days) / count),
    )

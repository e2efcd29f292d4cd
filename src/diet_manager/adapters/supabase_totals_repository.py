"""Supabase repository for daily nutrition totals."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_meal_log_repository import (
    MEAL_LOG_COLUMNS,
    parse_meal_log,
)
from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.stats import DailyTotals
from diet_manager.services.totals import TotalsRepository

_TOTALS_COLUMNS = (
    "user_id, day, total_calories, total_protein_g, total_carbs_g, "
    "total_fat_g, meals_count"
)


@dataclass
class SupabaseTotalsRepository(TotalsRepository):
    """Supabase queries backing daily totals and summaries."""

    client: Client

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs for a user within a half-open time range."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .execute()
        )
        return [parse_meal_log(row) for row in response.data or []]

    def get_daily_totals(self, user_id: UUID, day: date) -> DailyTotals | None:
        """Return stored totals for a day."""
        response = (
            self.client.table("daily_totals")
            .select(_TOTALS_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_totals(response.data[0])

    def upsert_daily_totals(self, totals: DailyTotals) -> DailyTotals:
        """Insert or replace the totals row for (user_id, day)."""
        response = (
            self.client.table("daily_totals")
            .upsert(
                {
                    "user_id": str(totals.user_id),
                    "day": totals.day.isoformat(),
                    "total_calories": totals.total_calories,
                    "total_protein_g": totals.total_protein_g,
                    "total_carbs_g": totals.total_carbs_g,
                    "total_fat_g": totals.total_fat_g,
                    "meals_count": totals.meals_count,
                },
                on_conflict="user_id,day",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily totals")
        return _parse_totals(response.data[0])

    def list_daily_totals(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyTotals]:
        """Return stored totals for days in [start, end], oldest first."""
        response = (
            self.client.table("daily_totals")
            .select(_TOTALS_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day", desc=False)
            .execute()
        )
        return [_parse_totals(row) for row in response.data or []]


def _parse_totals(row: dict[str, object]) -> DailyTotals:
    return DailyTotals(
        user_id=UUID(row["user_id"]),
        day=date.fromisoformat(str(row["day"])[:10]),
        total_calories=float(row.get("total_calories", 0.0)),
        total_protein_g=float(row.get("total_protein_g", 0.0)),
        total_carbs_g=float(row.get("total_carbs_g", 0.0)),
        total_fat_g=float(row.get("total_fat_g", 0.0)),
        meals_count=int(row.get("meals_count", 0)),
    )

"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import to_row
from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.nutrition import MacroProfile
from diet_manager.services.meals import MealLogRepository

MEAL_LOG_COLUMNS = (
    "id, user_id, food_id, quantity, meal_type, logged_at, "
    "calories, protein_g, carbs_g, fat_g"
)


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        quantity: float,
        meal_type: str,
        logged_at: datetime,
        macros: MacroProfile,
    ) -> MealLogEntry:
        """Create a meal log row and return it."""
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "food_id": str(food_id),
                    "quantity": quantity,
                    "meal_type": meal_type,
                    "logged_at": logged_at.isoformat(),
                    "calories": macros.calories,
                    "protein_g": macros.protein_g,
                    "carbs_g": macros.carbs_g,
                    "fat_g": macros.fat_g,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return parse_meal_log(response.data[0])

    def get_meal_log(self, meal_log_id: UUID) -> MealLogEntry | None:
        """Return a meal log by id."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_LOG_COLUMNS)
            .eq("id", str(meal_log_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_meal_log(response.data[0])

    def update_meal_log(
        self, meal_log_id: UUID, payload: dict[str, object]
    ) -> MealLogEntry:
        """Update a meal log and return it."""
        response = (
            self.client.table("meal_logs")
            .update(to_row(payload))
            .eq("id", str(meal_log_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal log")
        return parse_meal_log(response.data[0])

    def delete_meal_log(self, meal_log_id: UUID) -> None:
        """Delete a meal log."""
        self.client.table("meal_logs").delete().eq("id", str(meal_log_id)).execute()

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        """Return meal logs in a half-open time range, oldest first."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [parse_meal_log(row) for row in response.data or []]

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogEntry]:
        """Return the most recent meal logs."""
        response = (
            self.client.table("meal_logs")
            .select(MEAL_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_meal_log(row) for row in response.data or []]


def parse_meal_log(row: dict[str, object]) -> MealLogEntry:
    """Parse a meal log row into a domain entry."""
    return MealLogEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        food_id=UUID(row["food_id"]),
        quantity=float(row.get("quantity") or 1),
        meal_type=str(row.get("meal_type", "")),
        logged_at=datetime.fromisoformat(row["logged_at"]),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
    )

"""Admin service for reporting."""

from dataclasses import dataclass
from uuid import UUID

from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.models import UserRecord
from diet_manager.services.meals import MealLogService
from diet_manager.services.progress import ProgressService
from diet_manager.services.totals import TotalsService
from diet_manager.services.users import UserService

SUMMARY_DAYS = 7


@dataclass
class AdminService:
    """Service for admin dashboards."""

    user_service: UserService
    totals_service: TotalsService
    meal_log_service: MealLogService
    progress_service: ProgressService

    def list_users(self) -> list[dict[str, object]]:
        """Return users with 7-day usage summaries."""
        summaries = []
        for user in self.user_service.list_users():
            nutrition = self.totals_service.summarize_nutrition(user.id, SUMMARY_DAYS)
            summaries.append(
                {
                    **serialize_user(user),
                    "days_logged_7d": nutrition.days_tracked,
                    "meals_logged_7d": sum(
                        day.meals_count for day in nutrition.history
                    ),
                    "avg_calories_7d": nutrition.avg_calories,
                }
            )
        return summaries

    def get_user_detail(self, user_id: UUID) -> dict[str, object]:
        """Return detailed info for a user."""
        user = self.user_service.get_user(user_id)
        recent_logs = self.meal_log_service.list_recent(user_id, limit=10)
        week = self.totals_service.summarize_week(user_id)
        weight = self.progress_service.get_weight_progress(user_id)
        return {
            "user": serialize_user(user),
            "recent_meals": [_serialize_meal_log(log) for log in recent_logs],
            "week": {
                "week_start": week.week_start.isoformat(),
                "days_logged": week.days_logged,
                "avg_calories": week.avg_calories,
            },
            "weight": {
                "current_weight": weight.current_weight,
                "total_change": weight.total_change,
                "trend": weight.trend,
            },
        }


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Return the public fields of a user; the API token is never included."""
    return {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def _serialize_meal_log(log: MealLogEntry) -> dict[str, object]:
    return {
        "logged_at": log.logged_at.isoformat(),
        "meal_type": log.meal_type,
        "calories": log.calories,
        "protein_g": log.protein_g,
        "carbs_g": log.carbs_g,
        "fat_g": log.fat_g,
    }

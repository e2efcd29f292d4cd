"""Supabase repository for diet plans."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import parse_datetime
from diet_manager.domain.plans import DietPlan, PlanItem, PlanTotals
from diet_manager.services.plans import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for diet plans; items are stored as JSON."""

    client: Client

    def create_plan(self, plan: DietPlan) -> DietPlan:
        """Insert a plan row and return it."""
        response = (
            self.client.table("diet_plans")
            .insert({"id": str(plan.id), **_plan_row(plan)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create diet plan")
        return _parse_plan(response.data[0])

    def save_plan(self, plan: DietPlan) -> DietPlan:
        """Replace a plan's mutable columns."""
        response = (
            self.client.table("diet_plans")
            .update(_plan_row(plan))
            .eq("id", str(plan.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update diet plan")
        return _parse_plan(response.data[0])

    def get_plan(self, plan_id: UUID) -> DietPlan | None:
        """Return a plan by id."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self, user_id: UUID) -> list[DietPlan]:
        """Return a user's plans, newest first."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def get_active_plan(self, user_id: UUID) -> DietPlan | None:
        """Return the active plan for a user."""
        response = (
            self.client.table("diet_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def deactivate_plans(self, user_id: UUID, keep: UUID | None = None) -> None:
        """Clear the active flag on a user's plans other than `keep`."""
        query = (
            self.client.table("diet_plans")
            .update({"is_active": False})
            .eq("user_id", str(user_id))
        )
        if keep is not None:
            query = query.neq("id", str(keep))
        query.execute()

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""
        self.client.table("diet_plans").delete().eq("id", str(plan_id)).execute()


def _plan_row(plan: DietPlan) -> dict[str, object]:
    return {
        "user_id": str(plan.user_id),
        "name": plan.name,
        "items": [
            {
                "id": str(item.id),
                "food_id": str(item.food_id),
                "quantity": item.quantity,
                "meal_type": item.meal_type,
                "calories": item.calories,
            }
            for item in plan.items
        ],
        "total_calories": plan.totals.total_calories,
        "total_protein_g": plan.totals.total_protein_g,
        "total_carbs_g": plan.totals.total_carbs_g,
        "total_fat_g": plan.totals.total_fat_g,
        "is_active": plan.is_active,
    }


def _parse_plan(row: dict[str, object]) -> DietPlan:
    items = [
        PlanItem(
            id=UUID(item["id"]),
            food_id=UUID(item["food_id"]),
            quantity=float(item.get("quantity") or 1),
            meal_type=str(item.get("meal_type", "")),
            calories=float(item.get("calories", 0.0)),
        )
        for item in row.get("items") or []
    ]
    return DietPlan(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        totals=PlanTotals(
            total_calories=float(row.get("total_calories", 0.0)),
            total_protein_g=float(row.get("total_protein_g", 0.0)),
            total_carbs_g=float(row.get("total_carbs_g", 0.0)),
            total_fat_g=float(row.get("total_fat_g", 0.0)),
        ),
        items=items,
        is_active=bool(row.get("is_active", False)),
        created_at=parse_datetime(row.get("created_at")),
    )

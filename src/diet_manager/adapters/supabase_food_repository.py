"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_manager.adapters.supabase_rows import (
    parse_datetime,
    parse_optional_uuid,
    to_row,
)
from diet_manager.domain.foods import DEFAULT_SERVING_SIZE, Food
from diet_manager.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for catalog foods."""

    client: Client

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food entry and return it."""
        response = self.client.table("foods").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_food(response.data[0])

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food entry by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_foods(self, food_ids: list[UUID]) -> list[Food]:
        """Return the foods that exist among the ids."""
        response = (
            self.client.table("foods")
            .select("*")
            .in_("id", [str(food_id) for food_id in food_ids])
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def list_foods(
        self, category: str | None, search: str | None, limit: int
    ) -> list[Food]:
        """Return foods filtered by category and name."""
        query = self.client.table("foods").select("*")
        if category:
            query = query.eq("category", category)
        if search:
            query = query.ilike("name", f"%{search}%")
        response = query.order("name", desc=False).limit(limit).execute()
        return [_parse_food(row) for row in response.data or []]

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food | None:
        """Update a food entry and return it."""
        response = (
            self.client.table("foods")
            .update(to_row(payload))
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food entry."""
        response = self.client.table("foods").delete().eq("id", str(food_id)).execute()
        return bool(response.data)


def _parse_food(row: dict[str, object]) -> Food:
    """Parse a food row into a domain model."""
    return Food(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        serving_size=str(row.get("serving_size") or DEFAULT_SERVING_SIZE),
        category=str(row.get("category") or "other"),
        created_by=parse_optional_uuid(row.get("created_by")),
        created_at=parse_datetime(row.get("created_at")),
    )

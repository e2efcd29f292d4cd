"""Food catalog service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_manager.domain.errors import NotFoundError
from diet_manager.domain.foods import Food
from diet_manager.domain.models import UserRecord
from diet_manager.services.access import require_admin

DEFAULT_FOOD_LIMIT = 50


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def get_foods(self, food_ids: list[UUID]) -> list[Food]:
        """Return the foods that exist among the given ids."""

    def list_foods(
        self, category: str | None, search: str | None, limit: int
    ) -> list[Food]:
        """Return foods filtered by category and a name substring."""

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food | None:
        """Update a food and return it, or None when it does not exist."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food, returning False when it did not exist."""


@dataclass
class FoodService:
    """Catalog reads for everyone, writes for administrators."""

    repository: FoodRepository

    def list_foods(
        self,
        category: str | None = None,
        search: str | None = None,
        limit: int = DEFAULT_FOOD_LIMIT,
    ) -> list[Food]:
        """Return catalog foods, optionally filtered."""
        return self.repository.list_foods(category, search or None, limit)

    def get_food(self, food_id: UUID) -> Food:
        """Return a food or raise NotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def resolve(self, food_ids: list[UUID]) -> dict[UUID, Food]:
        """Return the existing foods among the ids, keyed by id."""
        if not food_ids:
            return {}
        unique_ids = list(dict.fromkeys(food_ids))
        return {food.id: food for food in self.repository.get_foods(unique_ids)}

    def create_food(self, actor: UserRecord, payload: dict[str, object]) -> Food:
        """Create a catalog food."""
        require_admin(actor)
        return self.repository.create_food({**payload, "created_by": str(actor.id)})

    def update_food(
        self, actor: UserRecord, food_id: UUID, payload: dict[str, object]
    ) -> Food:
        """Update a catalog food."""
        require_admin(actor)
        food = self.repository.update_food(food_id, payload)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def delete_food(self, actor: UserRecord, food_id: UUID) -> None:
        """Delete a catalog food. Logs and plans keep their references."""
        require_admin(actor)
        if not self.repository.delete_food(food_id):
            raise NotFoundError("Food not found")

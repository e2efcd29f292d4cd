"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

from diet_manager.domain.nutrition import MacroProfile

FoodCategory = Literal[
    "protein",
    "carbs",
    "vegetables",
    "fruits",
    "dairy",
    "fats",
    "snacks",
    "beverages",
    "other",
]
DEFAULT_SERVING_SIZE = "100g"


@dataclass(frozen=True)
class Food:
    """Catalog food with macros for one serving."""

    id: UUID
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: str = DEFAULT_SERVING_SIZE
    category: str = "other"
    created_by: UUID | None = None
    created_at: datetime | None = None

    @property
    def macros(self) -> MacroProfile:
        """Return the per-serving macro profile."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )

"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

from diet_manager.domain.nutrition import MacroProfile

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


@dataclass(frozen=True)
class MealLogEntry:
    """A logged food portion with its macro snapshot."""

    id: UUID
    user_id: UUID
    food_id: UUID
    quantity: float
    meal_type: str
    logged_at: datetime
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @property
    def macros(self) -> MacroProfile:
        """Return the stored macro snapshot."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )

"""Nutrition domain models and rounding rules."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrient grams for a portion or a total."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    def scaled(self, quantity: float) -> "MacroProfile":
        """Return the profile multiplied by a serving quantity."""
        return MacroProfile(
            calories=self.calories * quantity,
            protein_g=self.protein_g * quantity,
            carbs_g=self.carbs_g * quantity,
            fat_g=self.fat_g * quantity,
        )

    def plus(self, other: "MacroProfile") -> "MacroProfile":
        """Return the element-wise sum of two profiles."""
        return MacroProfile(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def rounded(self) -> "MacroProfile":
        """Round calories to whole numbers and grams to tenths."""
        return MacroProfile(
            calories=round_whole(self.calories),
            protein_g=round_tenth(self.protein_g),
            carbs_g=round_tenth(self.carbs_g),
            fat_g=round_tenth(self.fat_g),
        )


ZERO_MACROS = MacroProfile(0, 0.0, 0.0, 0.0)


def round_whole(value: float) -> int:
    """Round half-up to an integer (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class MacroTargets:
    """Daily gram targets derived from a calorie goal."""

    protein_g: int
    carbs_g: int
    fat_g: int

"""Domain models for user profiles."""

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

DEFAULT_CALORIE_TARGET = 2000


class Goal(str, Enum):
    """Body-weight goal stated on a profile."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN_WEIGHT = "maintain_weight"
    GAIN_WEIGHT = "gain_weight"
    BUILD_MUSCLE = "build_muscle"


@dataclass(frozen=True)
class Profile:
    """Body measurements and goal for a user (one per account)."""

    user_id: UUID
    age: int | None
    height: float | None
    weight: float | None
    goal: Goal | None = Goal.MAINTAIN_WEIGHT
    daily_calorie_target: int = DEFAULT_CALORIE_TARGET

    @property
    def is_complete(self) -> bool:
        """Return True when age, height and weight are all present."""
        return bool(self.age and self.height and self.weight)


def parse_goal(value: object) -> Goal | None:
    """Return the matching goal, or None for unset or unknown values."""
    if isinstance(value, Goal):
        return value
    try:
        return Goal(str(value))
    except ValueError:
        return None

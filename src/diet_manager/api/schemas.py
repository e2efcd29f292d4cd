"""Request bodies accepted by the API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from diet_manager.domain.foods import DEFAULT_SERVING_SIZE, FoodCategory
from diet_manager.domain.meals import MealType
from diet_manager.domain.plans import DEFAULT_PLAN_NAME
from diet_manager.domain.profiles import Goal

Role = Literal["admin", "user"]


class ProfileUpdate(BaseModel):
    """Profile fields; omitted fields are left unchanged."""

    age: int | None = Field(default=None, ge=1, le=150)
    height: float | None = Field(default=None, ge=50, le=300)
    weight: float | None = Field(default=None, ge=20, le=500)
    goal: Goal | None = None
    daily_calorie_target: int | None = Field(default=None, ge=1000, le=10000)


class FoodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    calories: float = Field(ge=0)
    protein_g: float = Field(default=0, ge=0)
    carbs_g: float = Field(default=0, ge=0)
    fat_g: float = Field(default=0, ge=0)
    serving_size: str = DEFAULT_SERVING_SIZE
    category: FoodCategory = "other"


class FoodUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    calories: float | None = Field(default=None, ge=0)
    protein_g: float | None = Field(default=None, ge=0)
    carbs_g: float | None = Field(default=None, ge=0)
    fat_g: float | None = Field(default=None, ge=0)
    serving_size: str | None = None
    category: FoodCategory | None = None


class MealLogCreate(BaseModel):
    food_id: UUID
    meal_type: MealType
    quantity: float = Field(default=1, gt=0)
    logged_at: datetime | None = None


class MealLogUpdate(BaseModel):
    food_id: UUID | None = None
    meal_type: MealType | None = None
    quantity: float | None = Field(default=None, gt=0)
    logged_at: datetime | None = None


class PlanItemInput(BaseModel):
    food_id: UUID
    meal_type: MealType
    quantity: float = Field(default=1, gt=0)


class PlanCreate(BaseModel):
    name: str = Field(default=DEFAULT_PLAN_NAME, min_length=1, max_length=100)
    items: list[PlanItemInput] = Field(default_factory=list)


class PlanUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    is_active: bool | None = None
    items: list[PlanItemInput] | None = None


class WeightCreate(BaseModel):
    value: float = Field(ge=20, le=500)
    date: datetime | None = None
    notes: str | None = Field(default=None, max_length=200)


class WeightUpdate(BaseModel):
    value: float | None = Field(default=None, ge=20, le=500)
    date: datetime | None = None
    notes: str | None = Field(default=None, max_length=200)


class UserCreate(BaseModel):
    """Admin request to register an account and issue its API token."""

    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Role = "user"


def changes_of(model: BaseModel) -> dict[str, object]:
    """Return the fields a client actually sent, minus explicit nulls."""
    return {
        key: value
        for key, value in model.model_dump(exclude_unset=True).items()
        if value is not None
    }

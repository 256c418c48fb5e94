"""Meal plan schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from galley.models.enums import MealSlot
from galley.schemas.meal import MealResponse


class MealPlanCreate(BaseModel):
    """Create a meal plan covering a date range."""

    name: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: date


class MealPlanUpdate(BaseModel):
    """Update a meal plan."""

    name: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None


class PlannedMealCreate(BaseModel):
    """Place a meal on a date and slot."""

    meal_id: int
    date: date
    slot: MealSlot


class PlannedMealResponse(BaseModel):
    """Planned meal with the meal it refers to."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    meal_plan_id: int
    meal_id: int
    date: date
    slot: MealSlot
    meal: MealResponse


class MealPlanResponse(BaseModel):
    """Meal plan with its planned meals."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    start_date: date
    end_date: date
    planned_meals: list[PlannedMealResponse] = []
    created_at: datetime
    updated_at: datetime

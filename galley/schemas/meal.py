"""Meal schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from galley.models.enums import Category


class MealIngredientCreate(BaseModel):
    """Ingredient for a meal."""

    name: str = Field(..., min_length=1, max_length=200)
    category: Category
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)


class MealIngredientUpdate(BaseModel):
    """Update an ingredient."""

    name: str | None = Field(None, min_length=1, max_length=200)
    category: Category | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = Field(None, min_length=1, max_length=50)


class MealIngredientResponse(BaseModel):
    """Ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    meal_id: int
    name: str
    category: Category
    quantity: float
    unit: str


class MealCreate(BaseModel):
    """Create a meal, optionally with its ingredients."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    servings: int = Field(2, ge=1)
    ingredients: list[MealIngredientCreate] = []


class MealUpdate(BaseModel):
    """Update meal metadata."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    servings: int | None = Field(None, ge=1)


class MealResponse(BaseModel):
    """Meal with ingredients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None
    servings: int
    ingredients: list[MealIngredientResponse] = []
    created_at: datetime
    updated_at: datetime


class MealListResponse(MealResponse):
    """Meal in the listing, with how often it is planned."""

    planned_count: int = 0


class IngredientStockStatus(BaseModel):
    """How one ingredient compares with what is on hand."""

    name: str
    category: Category
    unit: str
    required: float
    on_hand: float
    needed: float
    in_stock: bool


class MealInventoryCheck(BaseModel):
    """Per-ingredient in-stock report for a meal."""

    meal_id: int
    meal_name: str
    all_in_stock: bool
    ingredients: list[IngredientStockStatus]

"""Recipe search schemas."""

from pydantic import BaseModel

from galley.models.enums import Category


class RecipeSearchResult(BaseModel):
    """Summary of a recipe returned by search."""

    id: int
    title: str
    image: str | None = None
    servings: int | None = None
    ready_in_minutes: int | None = None
    summary: str = ""


class RecipeIngredient(BaseModel):
    """Recipe ingredient normalized to the meal ingredient shape."""

    name: str
    category: Category
    quantity: float
    unit: str


class RecipeDetail(RecipeSearchResult):
    """Full recipe with normalized ingredients."""

    source_url: str | None = None
    ingredients: list[RecipeIngredient] = []


class RecipeSearchEnabled(BaseModel):
    """Whether recipe search is configured."""

    enabled: bool

"""Recipe search using the Spoonacular API."""

import logging
import re
from typing import Any

import httpx

from galley.config import get_settings
from galley.models.enums import Category
from galley.services.reconciliation import round2

logger = logging.getLogger(__name__)

# Spoonacular aisle fragments -> inventory category. First match wins.
AISLE_TO_CATEGORY: dict[str, Category] = {
    "produce": Category.FOOD,
    "meat": Category.FOOD,
    "seafood": Category.FOOD,
    "bakery/bread": Category.FOOD,
    "baking": Category.FOOD,
    "pasta and rice": Category.FOOD,
    "canned and jarred": Category.FOOD,
    "frozen": Category.FOOD,
    "dairy": Category.FOOD,
    "cheese": Category.FOOD,
    "eggs": Category.FOOD,
    "condiments": Category.FOOD,
    "spices and seasonings": Category.FOOD,
    "oil, vinegar, salad dressing": Category.FOOD,
    "nuts": Category.FOOD,
    "cereal": Category.FOOD,
    "sweet snacks": Category.FOOD,
    "savory snacks": Category.FOOD,
    "ethnic foods": Category.FOOD,
    "beverages": Category.BEVERAGES,
    "alcoholic beverages": Category.BEVERAGES,
    "tea and coffee": Category.BEVERAGES,
    "milk, eggs, other dairy": Category.FOOD,
    "health foods": Category.FOOD,
    "cleaning products": Category.CLEANING,
}

UNIT_MAP: dict[str, str] = {
    "": "pcs",
    "serving": "pcs",
    "servings": "pcs",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "Tbsp": "tbsp",
    "Tbsps": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "cup": "cups",
    "ounce": "oz",
    "ounces": "oz",
    "pound": "lbs",
    "pounds": "lbs",
    "lb": "lbs",
    "gallon": "gal",
    "gallons": "gal",
    "quart": "qt",
    "quarts": "qt",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    "fl. oz.": "fl oz",
    "clove": "pcs",
    "cloves": "pcs",
    "pinch": "pcs",
    "dash": "pcs",
    "large": "pcs",
    "medium": "pcs",
    "small": "pcs",
    "piece": "pcs",
    "pieces": "pcs",
    "slice": "pcs",
    "slices": "pcs",
    "can": "cans",
    "bottle": "bottles",
    "bunch": "pcs",
    "handful": "pcs",
    "stalk": "pcs",
    "stalks": "pcs",
    "sprig": "pcs",
    "sprigs": "pcs",
    "leaf": "pcs",
    "leaves": "pcs",
}

HTML_TAG = re.compile(r"<[^>]*>")


class RecipeSearchError(Exception):
    """Recipe search is not configured or the upstream call failed."""


def map_aisle_to_category(aisle: str | None) -> Category:
    """Map a Spoonacular aisle string onto an inventory category."""
    if not aisle:
        return Category.FOOD
    lower = aisle.lower()
    for fragment, category in AISLE_TO_CATEGORY.items():
        if fragment in lower:
            return category
    return Category.FOOD


def normalize_unit(unit: str | None) -> str:
    """Collapse Spoonacular unit spellings; short units pass through lowercased."""
    unit = unit or ""
    if unit in UNIT_MAP:
        return UNIT_MAP[unit]
    if unit.lower() in UNIT_MAP:
        return UNIT_MAP[unit.lower()]
    return unit.lower() or "pcs"


def strip_html(html: str | None) -> str:
    """Remove tags from a Spoonacular summary."""
    return HTML_TAG.sub("", html or "").strip()


class RecipeSearchService:
    """Thin client over Spoonacular's search and detail endpoints."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        settings = get_settings()
        self.api_key = settings.spoonacular_api_key
        self.base_url = settings.spoonacular_base_url
        self.timeout = settings.recipe_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if the Spoonacular API key is set."""
        return bool(self.api_key)

    async def search(self, query: str, number: int = 12) -> list[dict[str, Any]]:
        """Search recipes by free text."""
        data = await self._get(
            "/recipes/complexSearch",
            {"query": query, "number": number, "addRecipeInformation": "true"},
        )
        return [
            {
                "id": r["id"],
                "title": r["title"],
                "image": r.get("image"),
                "servings": r.get("servings"),
                "ready_in_minutes": r.get("readyInMinutes"),
                "summary": strip_html(r.get("summary"))[:300],
            }
            for r in data.get("results", [])
        ]

    async def get_detail(self, recipe_id: int) -> dict[str, Any]:
        """Fetch one recipe with its ingredients normalized to meal ingredients."""
        r = await self._get(f"/recipes/{recipe_id}/information", {})
        return {
            "id": r["id"],
            "title": r["title"],
            "image": r.get("image"),
            "servings": r.get("servings"),
            "ready_in_minutes": r.get("readyInMinutes"),
            "summary": strip_html(r.get("summary"))[:500],
            "source_url": r.get("sourceUrl"),
            "ingredients": [
                {
                    "name": ing["name"],
                    "quantity": round2(ing.get("amount") or 0),
                    "unit": normalize_unit(ing.get("unit")),
                    "category": map_aisle_to_category(ing.get("aisle")),
                }
                for ing in r.get("extendedIngredients", [])
            ],
        }

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.is_configured:
            raise RecipeSearchError("Spoonacular API key not configured")

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.get(path, params={**params, "apiKey": self.api_key})
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Spoonacular API error: {e.response.status_code} {e.response.text[:200]}"
                )
                raise RecipeSearchError(
                    f"Spoonacular API error: {e.response.status_code}"
                ) from e
            except httpx.HTTPError as e:
                logger.error(f"HTTP error calling Spoonacular: {e}")
                raise RecipeSearchError("Spoonacular request failed") from e
            return response.json()

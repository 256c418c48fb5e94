"""Meal service for checking ingredients against inventory."""

from typing import Any

from sqlalchemy.orm import Session

from galley.models.inventory import InventoryItem
from galley.models.meal import Meal
from galley.services.reconciliation import InventorySnapshot, aggregate_ingredients


class MealService:
    """Service for meal-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def check_inventory(self, meal: Meal) -> dict[str, Any]:
        """Compare a meal's ingredients with what is on hand.

        Ingredients match inventory by name regardless of case, plus exact
        category and unit.

        Returns:
            {
                "meal_id": int,
                "meal_name": str,
                "all_in_stock": bool,
                "ingredients": [
                    {"name", "category", "unit", "required", "on_hand", "needed", "in_stock"}
                ]
            }
        """
        items = self.db.query(InventoryItem).filter(InventoryItem.user_id == meal.user_id).all()
        snapshot = InventorySnapshot(items)

        results = []
        for need in aggregate_ingredients([meal], ignore_case=True).values():
            on_hand = snapshot.on_hand(need, ignore_case=True)
            needed = snapshot.shortfall_for(need, need.quantity, ignore_case=True)
            results.append(
                {
                    "name": need.name,
                    "category": need.category,
                    "unit": need.unit,
                    "required": need.quantity,
                    "on_hand": on_hand,
                    "needed": needed,
                    "in_stock": needed == 0,
                }
            )

        return {
            "meal_id": meal.id,
            "meal_name": meal.name,
            "all_in_stock": all(r["in_stock"] for r in results),
            "ingredients": results,
        }

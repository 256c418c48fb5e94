"""SQLAlchemy models."""

from galley.models.inventory import InventoryItem
from galley.models.meal import Meal, MealIngredient
from galley.models.meal_plan import MealPlan, PlannedMeal
from galley.models.provisioning import ProvisioningList, ProvisioningListItem
from galley.models.user import User

__all__ = [
    "User",
    "InventoryItem",
    "Meal",
    "MealIngredient",
    "MealPlan",
    "PlannedMeal",
    "ProvisioningList",
    "ProvisioningListItem",
]

"""Pydantic schemas for API requests and responses."""

from galley.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from galley.schemas.inventory import (
    DashboardStats,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryPage,
)
from galley.schemas.meal import MealCreate, MealIngredientCreate, MealResponse, MealUpdate
from galley.schemas.meal_plan import MealPlanCreate, MealPlanResponse, PlannedMealCreate
from galley.schemas.provisioning import (
    ListGenerationResult,
    ProvisioningListCreate,
    ProvisioningListItemCreate,
    ProvisioningListResponse,
    ProvisioningListUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemResponse",
    "InventoryPage",
    "DashboardStats",
    "MealCreate",
    "MealUpdate",
    "MealIngredientCreate",
    "MealResponse",
    "MealPlanCreate",
    "PlannedMealCreate",
    "MealPlanResponse",
    "ProvisioningListCreate",
    "ProvisioningListUpdate",
    "ProvisioningListItemCreate",
    "ProvisioningListResponse",
    "ListGenerationResult",
]

"""Inventory schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from galley.models.enums import Category
from galley.schemas.provisioning import ProvisioningListResponse

INVENTORY_SORT_FIELDS = (
    "name",
    "category",
    "quantity",
    "target_quantity",
    "unit",
    "expiry_date",
    "created_at",
)


class InventoryItemCreate(BaseModel):
    """Create an inventory item."""

    name: str = Field(..., min_length=1, max_length=200)
    category: Category
    quantity: float = Field(..., ge=0)
    target_quantity: float = Field(0, ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    expiry_date: date | None = None
    reorder_threshold: float = Field(0, ge=0)
    notes: str | None = Field(None, max_length=2000)


class InventoryItemUpdate(BaseModel):
    """Update an inventory item. Only fields that are sent are applied."""

    name: str | None = Field(None, min_length=1, max_length=200)
    category: Category | None = None
    quantity: float | None = Field(None, ge=0)
    target_quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    expiry_date: date | None = None
    reorder_threshold: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=2000)


class InventoryItemResponse(BaseModel):
    """Inventory item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    category: Category
    quantity: float
    target_quantity: float
    unit: str
    expiry_date: date | None
    reorder_threshold: float
    notes: str | None
    is_below_target: bool
    created_at: datetime
    updated_at: datetime


class InventoryQuery(BaseModel):
    """Filters for the paginated inventory listing."""

    search: str | None = Field(None, max_length=200)
    category: Category | None = None
    sort: str = "name"
    order: Literal["asc", "desc"] = "asc"
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)


class InventoryPage(BaseModel):
    """One page of inventory items."""

    data: list[InventoryItemResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class DashboardStats(BaseModel):
    """Summary rollup over inventory, lists and meals."""

    total_items: int
    inventory_pct: int
    low_stock_count: int
    items_needed: float
    low_stock_items: list[InventoryItemResponse]
    expiring_soon: list[InventoryItemResponse]
    active_lists: int
    meals_stocked: int
    total_meals: int
    recent_lists: list[ProvisioningListResponse]


class GenerateShoppingListRequest(BaseModel):
    """Optional name for a generated restock list."""

    name: str | None = Field(None, min_length=1, max_length=200)

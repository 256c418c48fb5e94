"""Provisioning list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from galley.models.enums import Category, ItemType, ListStatus


class ProvisioningListCreate(BaseModel):
    """Create a new provisioning list."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)


class ProvisioningListUpdate(BaseModel):
    """Update a provisioning list."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: ListStatus | None = None


class ProvisioningListItemCreate(BaseModel):
    """Add a line to a list."""

    name: str = Field(..., min_length=1, max_length=200)
    category: Category
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    item_type: ItemType = ItemType.TRIP


class ProvisioningListItemUpdate(BaseModel):
    """Update a list line."""

    name: str | None = Field(None, min_length=1, max_length=200)
    category: Category | None = None
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    item_type: ItemType | None = None


class ProvisioningListItemResponse(BaseModel):
    """List line response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    list_id: int
    name: str
    category: Category
    quantity: float
    unit: str
    item_type: ItemType
    purchased: bool
    purchased_at: datetime | None
    created_at: datetime


class ProvisioningListResponse(BaseModel):
    """Provisioning list with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    description: str | None
    status: ListStatus
    created_at: datetime
    updated_at: datetime
    items: list[ProvisioningListItemResponse] = []


class AddMealItemsRequest(BaseModel):
    """Meal whose missing ingredients should be added to a list."""

    meal_id: int


class ListGenerationResult(BaseModel):
    """Outcome of a generator run. ``list`` is None when nothing was generated."""

    added: int
    list: ProvisioningListResponse | None = None


class MealItemsResult(ListGenerationResult):
    """Outcome of adding a meal's missing ingredients."""

    meal_name: str

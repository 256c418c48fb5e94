"""Inventory API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from galley.api.dependencies import (
    get_current_user,
    get_inventory_service,
    get_provisioning_service,
)
from galley.database import get_db
from galley.models.inventory import InventoryItem
from galley.models.user import User
from galley.schemas.inventory import (
    DashboardStats,
    GenerateShoppingListRequest,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryPage,
    InventoryQuery,
)
from galley.schemas.provisioning import ListGenerationResult, ProvisioningListResponse
from galley.services.inventory_service import InventoryService
from galley.services.provisioning_service import ProvisioningService

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

# Columns that must never be set to NULL through a partial update
NON_NULLABLE_FIELDS = {
    "name",
    "category",
    "quantity",
    "target_quantity",
    "unit",
    "reorder_threshold",
}


def get_user_inventory_item(db: Session, item_id: int, user: User) -> InventoryItem:
    """Get an inventory item that belongs to the user."""
    item = (
        db.query(InventoryItem)
        .filter(InventoryItem.id == item_id, InventoryItem.user_id == user.id)
        .first()
    )
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


# --- Static routes first (before /{item_id}) ---


@router.get("/dashboard-stats", response_model=DashboardStats)
def get_dashboard_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Summary rollup over inventory, lists and meals."""
    return service.dashboard_stats(current_user.id)


@router.get("/low-stock", response_model=list[InventoryItemResponse])
def get_low_stock(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """Items below their target quantity."""
    return service.low_stock(current_user.id)


@router.post("/generate-shopping-list", response_model=ListGenerationResult)
def generate_shopping_list(
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
    body: GenerateShoppingListRequest | None = None,
):
    """Create a restock list from every inventory shortfall.

    Answers 201 with the new list, or 200 with ``added = 0`` when nothing is
    below target.
    """
    lst = service.generate_restock_list(current_user.id, body.name if body else None)
    if lst is None:
        return ListGenerationResult(added=0, list=None)

    response.status_code = status.HTTP_201_CREATED
    return ListGenerationResult(
        added=len(lst.items), list=ProvisioningListResponse.model_validate(lst)
    )


@router.get("", response_model=InventoryPage)
def list_inventory_items(
    query: Annotated[InventoryQuery, Query()],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[InventoryService, Depends(get_inventory_service)],
):
    """List inventory items with search, category filter, sorting and pagination."""
    return service.list_items(current_user.id, query)


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item_data: InventoryItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an item to the inventory."""
    item = InventoryItem(user_id=current_user.id, **item_data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.get("/{item_id}", response_model=InventoryItemResponse)
def get_inventory_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific inventory item."""
    return get_user_inventory_item(db, item_id, current_user)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
def update_inventory_item(
    item_id: int,
    item_data: InventoryItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an inventory item. Quantity and target change independently."""
    item = get_user_inventory_item(db, item_id, current_user)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        if value is None and field in NON_NULLABLE_FIELDS:
            continue
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from the inventory."""
    item = get_user_inventory_item(db, item_id, current_user)
    db.delete(item)
    db.commit()

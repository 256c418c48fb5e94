"""Provisioning list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session, selectinload

from galley.api.dependencies import get_current_user, get_provisioning_service
from galley.database import get_db
from galley.models.provisioning import ProvisioningList, ProvisioningListItem
from galley.models.user import User
from galley.schemas.provisioning import (
    AddMealItemsRequest,
    ListGenerationResult,
    MealItemsResult,
    ProvisioningListCreate,
    ProvisioningListItemCreate,
    ProvisioningListItemResponse,
    ProvisioningListItemUpdate,
    ProvisioningListResponse,
    ProvisioningListUpdate,
)
from galley.services.provisioning_service import ProvisioningService

router = APIRouter(prefix="/api/provisioning-lists", tags=["provisioning-lists"])


def get_list_item(db: Session, lst: ProvisioningList, item_id: int) -> ProvisioningListItem:
    """Get an item that belongs to the given list."""
    item = (
        db.query(ProvisioningListItem)
        .filter(ProvisioningListItem.id == item_id, ProvisioningListItem.list_id == lst.id)
        .first()
    )
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.get("", response_model=list[ProvisioningListResponse])
def get_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all of the user's lists, most recently updated first."""
    return (
        db.query(ProvisioningList)
        .options(selectinload(ProvisioningList.items))
        .filter(ProvisioningList.user_id == current_user.id)
        .order_by(ProvisioningList.updated_at.desc(), ProvisioningList.id.desc())
        .all()
    )


@router.post("", response_model=ProvisioningListResponse, status_code=status.HTTP_201_CREATED)
def create_list(
    list_data: ProvisioningListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an empty list."""
    lst = ProvisioningList(
        user_id=current_user.id,
        name=list_data.name,
        description=list_data.description,
    )
    db.add(lst)
    db.commit()
    db.refresh(lst)
    return lst


@router.get("/{list_id}", response_model=ProvisioningListResponse)
def get_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Get a list with its items."""
    return service.get_list(list_id, current_user.id)


@router.get("/{list_id}/export")
def export_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Download a list as CSV."""
    csv_text = service.export_csv(list_id, current_user.id)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="provisioning-list.csv"'},
    )


@router.patch("/{list_id}", response_model=ProvisioningListResponse)
def update_list(
    list_id: int,
    list_data: ProvisioningListUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Update name, description or status. Any status may follow any other."""
    lst = service.get_list(list_id, current_user.id)

    if list_data.name is not None:
        lst.name = list_data.name
    if list_data.description is not None:
        lst.description = list_data.description
    if list_data.status is not None:
        lst.status = list_data.status

    db.commit()
    db.refresh(lst)
    return lst


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Delete a list and its items."""
    lst = service.get_list(list_id, current_user.id)
    db.delete(lst)
    db.commit()


# --- Generators ---


@router.post("/{list_id}/add-restock-items", response_model=ListGenerationResult)
def add_restock_items(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Add a restock line for every inventory shortfall not already on the list."""
    added, lst = service.add_restock_items(list_id, current_user.id)
    return ListGenerationResult(added=added, list=ProvisioningListResponse.model_validate(lst))


@router.post("/{list_id}/add-meal-items", response_model=MealItemsResult)
def add_meal_items(
    list_id: int,
    request: AddMealItemsRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Add the ingredients a meal needs beyond what is on hand."""
    added, meal_name, lst = service.add_meal_items(list_id, request.meal_id, current_user.id)
    return MealItemsResult(
        added=added,
        meal_name=meal_name,
        list=ProvisioningListResponse.model_validate(lst),
    )


# --- Items ---


@router.post(
    "/{list_id}/items",
    response_model=ProvisioningListItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    list_id: int,
    item_data: ProvisioningListItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Add a line to a list by hand."""
    lst = service.get_list(list_id, current_user.id)
    item = ProvisioningListItem(list_id=lst.id, **item_data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/{list_id}/items/{item_id}", response_model=ProvisioningListItemResponse)
def update_item(
    list_id: int,
    item_id: int,
    item_data: ProvisioningListItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Update a line."""
    lst = service.get_list(list_id, current_user.id)
    item = get_list_item(db, lst, item_id)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return item


@router.delete("/{list_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    list_id: int,
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Remove a line from a list."""
    lst = service.get_list(list_id, current_user.id)
    item = get_list_item(db, lst, item_id)
    db.delete(item)
    db.commit()


@router.post("/{list_id}/items/{item_id}/purchase", response_model=ProvisioningListItemResponse)
def purchase_item(
    list_id: int,
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Mark a line purchased and add its quantity to inventory.

    Purchasing a line twice is rejected with 404 and changes nothing.
    """
    return service.purchase_item(list_id, item_id, current_user.id)

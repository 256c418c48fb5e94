"""Meal plan API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from galley.api.dependencies import get_current_user, get_provisioning_service
from galley.api.meals import get_user_meal
from galley.database import get_db
from galley.models.meal_plan import MealPlan, PlannedMeal
from galley.models.user import User
from galley.schemas.meal_plan import (
    MealPlanCreate,
    MealPlanResponse,
    MealPlanUpdate,
    PlannedMealCreate,
    PlannedMealResponse,
)
from galley.schemas.provisioning import ListGenerationResult, ProvisioningListResponse
from galley.services.provisioning_service import ProvisioningService

router = APIRouter(prefix="/api/meal-plans", tags=["meal-plans"])


def get_user_meal_plan(db: Session, plan_id: int, user: User) -> MealPlan:
    """Get a meal plan that belongs to the user."""
    plan = db.query(MealPlan).filter(MealPlan.id == plan_id, MealPlan.user_id == user.id).first()
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")
    return plan


@router.get("", response_model=list[MealPlanResponse])
def list_meal_plans(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the user's meal plans, latest start date first."""
    return (
        db.query(MealPlan)
        .filter(MealPlan.user_id == current_user.id)
        .order_by(MealPlan.start_date.desc(), MealPlan.id.desc())
        .all()
    )


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    plan_data: MealPlanCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create an empty meal plan for a date range."""
    plan = MealPlan(
        user_id=current_user.id,
        name=plan_data.name,
        start_date=plan_data.start_date,
        end_date=plan_data.end_date,
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


@router.get("/{plan_id}", response_model=MealPlanResponse)
def get_meal_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a meal plan with its planned meals."""
    return get_user_meal_plan(db, plan_id, current_user)


@router.patch("/{plan_id}", response_model=MealPlanResponse)
def update_meal_plan(
    plan_id: int,
    plan_data: MealPlanUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a plan or move its dates."""
    plan = get_user_meal_plan(db, plan_id, current_user)

    if plan_data.name is not None:
        plan.name = plan_data.name
    if plan_data.start_date is not None:
        plan.start_date = plan_data.start_date
    if plan_data.end_date is not None:
        plan.end_date = plan_data.end_date

    db.commit()
    db.refresh(plan)
    return plan


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(
    plan_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a plan and its planned meals. The meals themselves are kept."""
    plan = get_user_meal_plan(db, plan_id, current_user)
    db.delete(plan)
    db.commit()


@router.post(
    "/{plan_id}/meals", response_model=PlannedMealResponse, status_code=status.HTTP_201_CREATED
)
def add_planned_meal(
    plan_id: int,
    planned_data: PlannedMealCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Put one of the user's meals on a date and slot."""
    plan = get_user_meal_plan(db, plan_id, current_user)
    meal = get_user_meal(db, planned_data.meal_id, current_user)

    planned = PlannedMeal(
        meal_plan_id=plan.id,
        meal_id=meal.id,
        date=planned_data.date,
        slot=planned_data.slot,
    )
    db.add(planned)
    db.commit()
    db.refresh(planned)
    return planned


@router.delete("/{plan_id}/meals/{planned_meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_planned_meal(
    plan_id: int,
    planned_meal_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Take a meal off the plan."""
    plan = get_user_meal_plan(db, plan_id, current_user)
    planned = (
        db.query(PlannedMeal)
        .filter(PlannedMeal.id == planned_meal_id, PlannedMeal.meal_plan_id == plan.id)
        .first()
    )
    if not planned:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Planned meal not found")

    db.delete(planned)
    db.commit()


@router.post("/{plan_id}/generate-list", response_model=ListGenerationResult)
def generate_list(
    plan_id: int,
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[ProvisioningService, Depends(get_provisioning_service)],
):
    """Create a list of what the plan needs beyond current inventory.

    Answers 201 with the new list, or 200 with ``added = 0`` when the plan has
    no ingredients or inventory already covers it.
    """
    lst = service.generate_plan_list(plan_id, current_user.id)
    if lst is None:
        return ListGenerationResult(added=0, list=None)

    response.status_code = status.HTTP_201_CREATED
    return ListGenerationResult(
        added=len(lst.items), list=ProvisioningListResponse.model_validate(lst)
    )

"""Meal API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from galley.api.dependencies import get_current_user, get_meal_service
from galley.database import get_db
from galley.models.meal import Meal, MealIngredient
from galley.models.meal_plan import PlannedMeal
from galley.models.user import User
from galley.schemas.meal import (
    MealCreate,
    MealIngredientCreate,
    MealIngredientResponse,
    MealIngredientUpdate,
    MealInventoryCheck,
    MealListResponse,
    MealResponse,
    MealUpdate,
)
from galley.services.meal_service import MealService

router = APIRouter(prefix="/api/meals", tags=["meals"])


def get_user_meal(db: Session, meal_id: int, user: User) -> Meal:
    """Get a meal that belongs to the user."""
    meal = db.query(Meal).filter(Meal.id == meal_id, Meal.user_id == user.id).first()
    if not meal:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found")
    return meal


def get_meal_ingredient(db: Session, meal: Meal, ingredient_id: int) -> MealIngredient:
    """Get an ingredient of the given meal."""
    ingredient = (
        db.query(MealIngredient)
        .filter(MealIngredient.id == ingredient_id, MealIngredient.meal_id == meal.id)
        .first()
    )
    if not ingredient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.get("", response_model=list[MealListResponse])
def list_meals(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the user's meals with how many times each is planned."""
    meals = (
        db.query(Meal)
        .options(selectinload(Meal.ingredients))
        .filter(Meal.user_id == current_user.id)
        .order_by(Meal.updated_at.desc(), Meal.id.desc())
        .all()
    )

    # Planned counts for all meals in one query
    meal_ids = [meal.id for meal in meals]
    planned_counts = {}
    if meal_ids:
        counts = (
            db.query(PlannedMeal.meal_id, func.count(PlannedMeal.id))
            .filter(PlannedMeal.meal_id.in_(meal_ids))
            .group_by(PlannedMeal.meal_id)
            .all()
        )
        planned_counts = dict(counts)

    result = []
    for meal in meals:
        meal_response = MealListResponse.model_validate(meal)
        meal_response.planned_count = planned_counts.get(meal.id, 0)
        result.append(meal_response)
    return result


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    meal_data: MealCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a meal with an optional initial ingredient list."""
    meal = Meal(
        user_id=current_user.id,
        name=meal_data.name,
        description=meal_data.description,
        servings=meal_data.servings,
    )
    for ingredient in meal_data.ingredients:
        meal.ingredients.append(MealIngredient(**ingredient.model_dump()))

    db.add(meal)
    db.commit()
    db.refresh(meal)
    return meal


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a meal with its ingredients."""
    return get_user_meal(db, meal_id, current_user)


@router.patch("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: int,
    meal_data: MealUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update meal metadata."""
    meal = get_user_meal(db, meal_id, current_user)

    if meal_data.name is not None:
        meal.name = meal_data.name
    if meal_data.description is not None:
        meal.description = meal_data.description
    if meal_data.servings is not None:
        meal.servings = meal_data.servings

    db.commit()
    db.refresh(meal)
    return meal


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a meal, its ingredients and every planned occurrence."""
    meal = get_user_meal(db, meal_id, current_user)
    db.delete(meal)
    db.commit()


@router.get("/{meal_id}/check-inventory", response_model=MealInventoryCheck)
def check_inventory(
    meal_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[MealService, Depends(get_meal_service)],
):
    """Report which ingredients are in stock and how much is missing."""
    meal = get_user_meal(db, meal_id, current_user)
    return service.check_inventory(meal)


# --- Ingredients ---


@router.post(
    "/{meal_id}/ingredients",
    response_model=MealIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_ingredient(
    meal_id: int,
    ingredient_data: MealIngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to a meal."""
    meal = get_user_meal(db, meal_id, current_user)
    ingredient = MealIngredient(meal_id=meal.id, **ingredient_data.model_dump())
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.patch("/{meal_id}/ingredients/{ingredient_id}", response_model=MealIngredientResponse)
def update_ingredient(
    meal_id: int,
    ingredient_id: int,
    ingredient_data: MealIngredientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an ingredient."""
    meal = get_user_meal(db, meal_id, current_user)
    ingredient = get_meal_ingredient(db, meal, ingredient_id)

    for field, value in ingredient_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(ingredient, field, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.delete("/{meal_id}/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    meal_id: int,
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an ingredient from a meal."""
    meal = get_user_meal(db, meal_id, current_user)
    ingredient = get_meal_ingredient(db, meal, ingredient_id)
    db.delete(ingredient)
    db.commit()

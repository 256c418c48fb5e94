"""Recipe search API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from galley.api.dependencies import get_current_user, get_recipe_search_service
from galley.models.user import User
from galley.schemas.recipe import RecipeDetail, RecipeSearchEnabled, RecipeSearchResult
from galley.services.recipe_search import RecipeSearchService

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


# --- Static routes first (before /{recipe_id}) ---


@router.get("/enabled", response_model=RecipeSearchEnabled)
async def recipe_search_enabled(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeSearchService, Depends(get_recipe_search_service)],
):
    """Check whether recipe search is configured."""
    return RecipeSearchEnabled(enabled=service.is_configured)


@router.get("/search", response_model=list[RecipeSearchResult])
async def search_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeSearchService, Depends(get_recipe_search_service)],
    q: str = Query(default="", max_length=200, description="Free-text recipe query"),
):
    """Search recipes by name or ingredient."""
    if not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    return await service.search(q.strip())


@router.get("/{recipe_id}", response_model=RecipeDetail)
async def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[RecipeSearchService, Depends(get_recipe_search_service)],
):
    """Get a recipe with ingredients shaped like meal ingredients."""
    return await service.get_detail(recipe_id)

"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from galley.database import get_db
from galley.models.user import User
from galley.services.auth import decode_access_token
from galley.services.inventory_service import InventoryService
from galley.services.meal_service import MealService
from galley.services.provisioning_service import ProvisioningService
from galley.services.recipe_search import RecipeSearchService

security = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_inventory_service(
    db: Annotated[Session, Depends(get_db)],
) -> InventoryService:
    """Get inventory service with dependencies."""
    return InventoryService(db)


def get_provisioning_service(
    db: Annotated[Session, Depends(get_db)],
) -> ProvisioningService:
    """Get provisioning service with dependencies."""
    return ProvisioningService(db)


def get_meal_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealService:
    """Get meal service with dependencies."""
    return MealService(db)


def get_recipe_search_service() -> RecipeSearchService:
    """Get recipe search service instance."""
    return RecipeSearchService()


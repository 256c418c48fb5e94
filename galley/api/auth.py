"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from galley.api.dependencies import get_current_user
from galley.database import get_db
from galley.models.user import User
from galley.schemas.auth import AuthResponse, OkResponse, UserLogin, UserRegister, UserResponse
from galley.services.auth import (
    authenticate_user,
    create_access_token,
    get_user_by_email,
    register_user,
)
from galley.services.seed_user import clear_seed_data

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = register_user(db, user_data.email, user_data.password, user_data.name)
    return AuthResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/onboarding-seen", response_model=OkResponse)
def mark_onboarding_seen(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Record that the user has dismissed the getting-started guide."""
    current_user.has_seen_onboarding = True
    db.commit()
    return OkResponse()


@router.post("/clear-seed-data", response_model=OkResponse)
def clear_demo_data(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove the user's inventory and provisioning lists."""
    clear_seed_data(db, current_user.id)
    return OkResponse()


@router.post("/logout", response_model=OkResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return OkResponse()

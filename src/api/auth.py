"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.exceptions import UnauthenticatedError
from src.schemas.auth import AuthResponse, UserResponse, UserSignin, UserSignup
from src.services.auth import (
    TokenClaims,
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_id,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and return a session token."""
    user = create_user(db, user_data.username, user_data.email, user_data.password)

    return AuthResponse(
        message="User created successfully",
        token=create_access_token(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.post("/signin", response_model=AuthResponse)
def signin(
    credentials: UserSignin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id, user.username),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    user = get_user_by_id(db, current_user.user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user

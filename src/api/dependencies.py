"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.exceptions import UnauthenticatedError
from src.services.auth import TokenClaims, get_user_by_id, verify_access_token
from src.services.blob_storage import BlobStorage, get_blob_storage
from src.services.post_service import PostService
from src.services.support_service import SupportService
from src.services.theme_service import ThemeService

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> TokenClaims:
    """Get the caller's identity from the bearer token.

    Token claims are trusted for the token's lifetime. With
    ``AUTH_REFETCH_USER`` enabled the user row is re-read and the username
    taken from it.
    """
    claims = verify_access_token(credentials.credentials if credentials else None)

    if get_settings().auth_refetch_user:
        user = get_user_by_id(db, claims.user_id)
        if user is None:
            raise UnauthenticatedError("User not found")
        claims = TokenClaims(user_id=user.id, username=user.username)

    return claims


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
) -> PostService:
    """Get post service with dependencies."""
    return PostService(db)


def get_theme_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[BlobStorage, Depends(get_blob_storage)],
) -> ThemeService:
    """Get theme service with dependencies."""
    return ThemeService(db, storage)


def get_support_service(
    db: Annotated[Session, Depends(get_db)],
) -> SupportService:
    """Get support service with dependencies."""
    return SupportService(db)

"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserResponse, UserSignin, UserSignup
from src.schemas.post import PostCreate, PostCreateResponse, PostResponse
from src.schemas.support import (
    SupportTicketCreate,
    SupportTicketCreateResponse,
    SupportTicketResponse,
)
from src.schemas.theme import ThemeImageCreateResponse, ThemeImageResponse

__all__ = [
    "UserSignup",
    "UserSignin",
    "UserResponse",
    "AuthResponse",
    "PostCreate",
    "PostResponse",
    "PostCreateResponse",
    "ThemeImageResponse",
    "ThemeImageCreateResponse",
    "SupportTicketCreate",
    "SupportTicketResponse",
    "SupportTicketCreateResponse",
]

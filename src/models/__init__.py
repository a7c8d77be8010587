"""SQLAlchemy models."""

from src.models.post import Post
from src.models.support_ticket import SupportTicket
from src.models.theme_image import ThemeImage
from src.models.user import User

__all__ = [
    "User",
    "Post",
    "ThemeImage",
    "SupportTicket",
]

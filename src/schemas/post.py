"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Create a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author_id: int
    author_name: str
    created_at: datetime
    updated_at: datetime


class PostCreateResponse(BaseModel):
    """Response when creating a post."""

    message: str
    post: PostResponse

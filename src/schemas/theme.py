"""Theme image schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ThemeImageResponse(BaseModel):
    """Theme image response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    image_url: str
    uploaded_by: int
    created_at: datetime


class ThemeImageCreateResponse(BaseModel):
    """Response when uploading a theme image."""

    message: str
    theme_image: ThemeImageResponse

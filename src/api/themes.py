"""Theme image API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from src.api.dependencies import get_current_user, get_theme_service
from src.exceptions import BadRequestError
from src.schemas.theme import ThemeImageCreateResponse, ThemeImageResponse
from src.services.auth import TokenClaims
from src.services.theme_service import ThemeService, validate_image_upload

router = APIRouter(prefix="/api/themes", tags=["themes"])


@router.get("", response_model=list[ThemeImageResponse])
def list_themes(
    service: Annotated[ThemeService, Depends(get_theme_service)],
):
    """Get all theme images, newest first."""
    return service.list_themes()


@router.post("", response_model=ThemeImageCreateResponse, status_code=status.HTTP_201_CREATED)
async def upload_theme(
    title: Annotated[str, Form(min_length=1, max_length=255)],
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[ThemeService, Depends(get_theme_service)],
    description: Annotated[str | None, Form(max_length=2000)] = None,
    image: Annotated[UploadFile | None, File(description="Image (JPEG, PNG, GIF, or WebP)")] = None,
):
    """Upload a theme image.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    if image is None or not image.filename:
        raise BadRequestError("No image uploaded")

    # Reject on name and type before reading the body
    validate_image_upload(image.filename, image.content_type, 0, service.max_upload_bytes)

    # At most one byte past the limit; enough to tell the file is too large
    data = await image.read(service.max_upload_bytes + 1)

    theme_image = service.create_theme(
        current_user,
        title,
        description,
        image.filename,
        image.content_type,
        data,
    )
    return ThemeImageCreateResponse(
        message="Theme image uploaded successfully",
        theme_image=ThemeImageResponse.model_validate(theme_image),
    )

"""Theme image service: upload validation, blob storage and persistence."""

import logging
from pathlib import PurePath

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import (
    BadRequestError,
    InternalError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)
from src.models.theme_image import ThemeImage
from src.services.auth import TokenClaims
from src.services.blob_storage import BlobStorage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


def validate_image_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    max_bytes: int,
) -> str:
    """Check an upload's name, declared type and size.

    Both the file extension and the content type must name an allowed image
    format. Returns the normalized extension.

    Raises:
        BadRequestError: no file was attached
        UnsupportedMediaTypeError: extension or content type not allowed
        PayloadTooLargeError: file exceeds ``max_bytes``
    """
    if not filename:
        raise BadRequestError("No image uploaded")

    extension = PurePath(filename).suffix.lower()
    media_type = (content_type or "").split(";")[0].strip().lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS or media_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedMediaTypeError("Only image files are allowed!")

    if size > max_bytes:
        raise PayloadTooLargeError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")

    return extension


class ThemeService:
    """Service for theme image operations."""

    def __init__(self, db: Session, storage: BlobStorage):
        self.db = db
        self.storage = storage
        self.max_upload_bytes = get_settings().max_upload_bytes

    def list_themes(self) -> list[ThemeImage]:
        """Return every theme image, newest first."""
        return (
            self.db.query(ThemeImage)
            .order_by(ThemeImage.created_at.desc(), ThemeImage.id.desc())
            .all()
        )

    def create_theme(
        self,
        caller: TokenClaims,
        title: str,
        description: str | None,
        filename: str | None,
        content_type: str | None,
        data: bytes,
    ) -> ThemeImage:
        """Validate and store an uploaded image, then record it.

        Nothing is written until validation passes. If the row cannot be
        saved the stored file is removed again.
        """
        extension = validate_image_upload(filename, content_type, len(data), self.max_upload_bytes)

        blob = self.storage.save(data, extension)

        theme_image = ThemeImage(
            title=title,
            description=description or "",
            image_url=blob.url,
            uploaded_by=caller.user_id,
        )
        self.db.add(theme_image)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Theme upload error: {e}")
            # Delete the uploaded file since the record was not saved
            self.storage.delete(blob.filename)
            raise InternalError("Server error") from e

        self.db.refresh(theme_image)
        return theme_image

"""Local blob storage for uploaded files served under /uploads."""

import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from src.config import get_settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class StoredBlob:
    """A file written to blob storage."""

    filename: str
    path: Path

    @property
    def url(self) -> str:
        return f"{UPLOADS_URL_PREFIX}/{self.filename}"


class BlobStorage:
    """Append-only directory of uploaded files, keyed by generated filename."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def ensure_dir(self) -> None:
        """Create the storage directory if it does not exist."""
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_filename(extension: str) -> str:
        """Build a name from the current epoch millis plus a random suffix.

        ``extension`` includes the leading dot, e.g. ``.png``.
        """
        return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension.lower()}"

    def save(self, data: bytes, extension: str) -> StoredBlob:
        """Write ``data`` under a freshly generated name."""
        self.ensure_dir()
        filename = self.generate_filename(extension)
        path = self.base_dir / filename
        # "xb" refuses to clobber an existing file
        with path.open("xb") as f:
            f.write(data)
        logger.info(f"Stored upload {filename} ({len(data)} bytes)")
        return StoredBlob(filename=filename, path=path)

    def delete(self, filename: str) -> bool:
        """Best-effort removal of a stored file.

        Returns True if the file was removed. Failures are logged, not raised.
        """
        try:
            (self.base_dir / filename).unlink()
        except OSError as e:
            logger.error(f"Error deleting upload {filename}: {e}")
            return False
        logger.info(f"Deleted upload {filename}")
        return True


def get_blob_storage() -> BlobStorage:
    """Get blob storage rooted at the configured upload directory."""
    return BlobStorage(get_settings().upload_dir)

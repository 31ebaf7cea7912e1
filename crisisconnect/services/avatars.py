"""Profile picture storage: validate an uploaded image and write it under UPLOAD_DIR/avatars."""

import logging
import time
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crisisconnect.core.config import Settings

logger = logging.getLogger(__name__)

AVATAR_SUBDIR = "avatars"
AVATAR_URL_PREFIX = "/uploads/avatars"
ALLOWED_AVATAR_TYPES: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


class AvatarValidationError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def avatar_dir(settings: "Settings") -> Path:
    return Path(settings.UPLOAD_DIR) / AVATAR_SUBDIR


def validate_avatar(content_type: str | None, size: int, settings: "Settings") -> str:
    """Check type and size; return the file extension to store the image with."""
    normalized = (content_type or "").split(";")[0].strip().lower()
    extension = ALLOWED_AVATAR_TYPES.get(normalized)
    if extension is None:
        raise AvatarValidationError("Only .jpg, .png, .webp files are allowed.")
    if size == 0:
        raise AvatarValidationError("Uploaded file is empty.")
    if size > settings.AVATAR_MAX_BYTES:
        raise AvatarValidationError(
            f"File size must not exceed {settings.AVATAR_MAX_BYTES // 1024} KB."
        )
    return extension


def store_avatar(
    content: bytes,
    content_type: str | None,
    settings: "Settings",
) -> str:
    """Validate and persist image bytes; return the URL path the file is served at."""
    extension = validate_avatar(content_type, len(content), settings)
    directory = avatar_dir(settings)
    directory.mkdir(parents=True, exist_ok=True)
    filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"
    (directory / filename).write_bytes(content)
    logger.info("Avatar stored", extra={"avatar_file": filename, "size_bytes": len(content)})
    return f"{AVATAR_URL_PREFIX}/{filename}"

"""Service for storing uploaded dish images on local disk."""

import logging
import time
import uuid
from pathlib import Path

from restaurant_ordering_service.errors import ValidationError
from restaurant_ordering_service.models.api_models import UploadResult
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.observability.metrics import record_image_upload

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 2 * 1024 * 1024

EXTENSIONS_BY_MIME_TYPE: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def generate_filename(content_type: str) -> str:
    """Build a unique file name: epoch millis, random suffix, MIME-derived extension."""
    extension = EXTENSIONS_BY_MIME_TYPE.get(content_type, ".jpg")
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"


class ImageUploadService:
    """Validates image uploads and writes them under a public directory.

    Files are not scanned, deduplicated or content-addressed.
    """

    def __init__(
        self,
        upload_dir: Path,
        url_prefix: str = "/uploads",
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        """Initialize the service and make sure the upload directory exists.

        Args:
            upload_dir: Directory that receives the files
            url_prefix: Public URL prefix the directory is served under
            max_bytes: Largest accepted file size in bytes
        """
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @traced("upload.store", component="upload")
    async def store_image(self, content_type: str | None, data: bytes | None) -> UploadResult:
        """Validate and persist an uploaded image.

        Args:
            content_type: MIME type declared by the client (None if no file was sent)
            data: File contents (None if no file was sent); callers may pass at
                most ``max_bytes + 1`` bytes

        Returns:
            UploadResult with the public URL of the stored file

        Raises:
            ValidationError: If the file is missing, of a disallowed type, or too large
        """
        if data is None or content_type is None:
            record_image_upload("missing_file")
            raise ValidationError("Please choose an image file")

        if content_type not in EXTENSIONS_BY_MIME_TYPE:
            record_image_upload("unsupported_type")
            raise ValidationError("Only JPG/PNG/GIF/WebP images are supported")

        if len(data) > self.max_bytes:
            record_image_upload("too_large")
            raise ValidationError(f"Image must not exceed {self.max_bytes // (1024 * 1024)}MB")

        name = generate_filename(content_type)
        (self.upload_dir / name).write_bytes(data)

        record_image_upload("stored")
        logger.info(f"Stored upload {name} ({len(data)} bytes, {content_type})")
        return UploadResult(url=f"{self.url_prefix}/{name}")

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import aiofiles

from format_api.core.config import settings
from format_api.utils.exceptions import BadRequestError

logger = logging.getLogger(__name__)


@dataclass
class MediaUpload:
    """An attachment received with a request"""
    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class MediaStorage:
    """
    Accepts image attachments, writes them under the upload directory
    and hands back the public reference path that gets stored on the post
    """
    def __init__(
        self,
        upload_dir: str,
        url_prefix: str,
        max_bytes: int,
        allowed_extensions: Iterable[str],
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}

    def validate(self, upload: MediaUpload) -> None:
        """
        Reject disallowed extensions and oversized files before anything is written
        """
        extension = Path(upload.filename or "").suffix.lower()
        if extension not in self.allowed_extensions:
            allowed = ", ".join(sorted(ext.lstrip(".").upper() for ext in self.allowed_extensions))
            raise BadRequestError(f"Unsupported image format. Allowed: {allowed}.")
        if upload.size > self.max_bytes:
            raise BadRequestError(
                f"Image size must not exceed {self.max_bytes // (1024 * 1024)}MB."
            )

    async def save(self, upload: MediaUpload) -> str:
        """
        Write the file under a unique name and return its reference path
        """
        await asyncio.to_thread(self.upload_dir.mkdir, parents=True, exist_ok=True)
        safe_name = Path(upload.filename).name.replace(" ", "_")
        unique_name = f"{uuid.uuid4()}_{safe_name}"
        async with aiofiles.open(self.upload_dir / unique_name, "wb") as f:
            await f.write(upload.content)
        logger.info("Stored upload %s (%d bytes)", unique_name, upload.size)
        return f"{self.url_prefix}/{unique_name}"

    async def delete(self, reference: Optional[str]) -> None:
        """
        Remove a previously stored file; unknown references are ignored
        """
        if not reference or not reference.startswith(self.url_prefix + "/"):
            return
        path = self.upload_dir / reference[len(self.url_prefix) + 1:]
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Failed to remove upload %s: %s", path, e)


def get_media_storage() -> MediaStorage:
    """
    FastAPI dependency: storage configured from settings
    """
    return MediaStorage(
        upload_dir=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_bytes=settings.MAX_UPLOAD_BYTES,
        allowed_extensions=settings.ALLOWED_IMAGE_EXTENSIONS,
    )

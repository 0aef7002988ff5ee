"""Local storage for uploaded images and payment screenshots."""
import logging
import re
import time
import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from groundbook.core.config import settings
from groundbook.core.errors import UploadTooLarge

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


class UploadStorage:
    """Saves uploads to a directory served under ``/uploads``."""

    def __init__(self, directory: str, max_bytes: int):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def ensure_directory(self):
        self.directory.mkdir(parents=True, exist_ok=True)

    def _safe_name(self, filename: str) -> str:
        name = Path(filename or "upload").name
        name = re.sub(r"\s+", "-", name)
        name = re.sub(r"[^A-Za-z0-9._-]", "", name) or "upload"
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{name}"

    async def save(self, upload: UploadFile) -> str:
        """
        Store an uploaded file.

        Args:
            upload: File received in a multipart request

        Returns:
            Public reference, e.g. ``/uploads/1712345678901-3f9c2a1b-pitch.jpg``
        """
        data = await upload.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise UploadTooLarge(f"{upload.filename} exceeds {self.max_bytes} bytes")

        name = self._safe_name(upload.filename)
        target = self.directory / name

        self.ensure_directory()
        await run_in_threadpool(target.write_bytes, data)
        logger.info(f"Stored upload {upload.filename!r} as {target}")

        return f"{PUBLIC_PREFIX}/{name}"


# Singleton instance
upload_storage = UploadStorage(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)

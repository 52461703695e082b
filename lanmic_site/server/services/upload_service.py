"""
Image upload storage.

Uploaded images are written under the upload root in a directory chosen by
the ``type`` query parameter and served back from ``/uploads``.
"""

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile, status
from starlette.concurrency import run_in_threadpool

from lanmic_site.core.logging_config import get_logger
from lanmic_site.server.core.config import UploadConfig, settings
from lanmic_site.server.core.constant import UPLOADS_URL_PATH

from .errors import BadRequestError, ServiceError

logger = get_logger(__name__)

UPLOAD_DIRECTORIES = {
    "authorImage": "author-images",
    "blogImage": "blog-images",
    "teamImage": "team-images",
    "executiveImage": "executive-images",
    "testimonialImage": "testimonial-images",
}
DEFAULT_DIRECTORY = "images"

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


@dataclass
class StoredFile:
    filename: str
    original_name: str
    size: int
    url: str
    path: Path


def directory_for(upload_type: Optional[str]) -> str:
    return UPLOAD_DIRECTORIES.get(upload_type or "", DEFAULT_DIRECTORY)


class UploadService:
    def __init__(self, config: Optional[UploadConfig] = None) -> None:
        self.config = config or settings.upload

    @property
    def root(self) -> Path:
        return Path(self.config.directory)

    async def store_image(self, file: Optional[UploadFile], upload_type: Optional[str]) -> StoredFile:
        if file is None or not file.filename:
            raise BadRequestError("No file uploaded")
        if file.content_type not in ALLOWED_CONTENT_TYPES:
            raise BadRequestError("Only image files are allowed!")

        content = await file.read(self.config.max_size_bytes + 1)
        if len(content) > self.config.max_size_bytes:
            limit_mb = self.config.max_size_bytes // (1024 * 1024)
            raise ServiceError(
                f"File too large. Maximum size is {limit_mb}MB",
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )

        extension = Path(file.filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            extension = ALLOWED_CONTENT_TYPES[file.content_type]

        subdirectory = directory_for(upload_type)
        target_dir = self.root / subdirectory
        filename = f"{uuid.uuid4()}{extension}"
        target = target_dir / filename

        def _write() -> None:
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)

        await run_in_threadpool(_write)
        logger.info(f"Stored upload {file.filename!r} as {target} ({len(content)} bytes)")
        return StoredFile(
            filename=filename,
            original_name=file.filename,
            size=len(content),
            url=f"{UPLOADS_URL_PATH}/{subdirectory}/{filename}",
            path=target,
        )


def get_upload_service() -> UploadService:
    return UploadService()

"""
Image Resolver

Turns the draft's image source into the product URL stored on the record:
an uploaded file is written to storage and its public URL returned, while a
user-supplied URL passes through untouched.
"""

import time
import uuid
from pathlib import PurePath
from typing import Callable, Union

from app.core.exceptions import StorageError, UploadFailed
from app.core.logger import logger
from app.core.storage import StorageManager
from app.models.submission_models import FileSource, ImageFile, UrlSource


def build_object_name(filename: str, now: Callable[[], float] = time.time) -> str:
    """Prefix the file's base name with epoch millis and a random tag."""
    base_name = PurePath(filename.replace("\\", "/")).name or "image"
    return f"{int(now() * 1000)}-{uuid.uuid4().hex[:8]}-{base_name}"


class ImageResolver:
    """Resolves an ImageSource to a publicly fetchable address."""

    def __init__(self, storage: StorageManager):
        self.storage = storage

    async def resolve(self, source: Union[FileSource, UrlSource]) -> str:
        """
        Produce the product URL for a submission.

        Args:
            source: FileSource or UrlSource from the validated draft

        Returns:
            Public storage URL (file) or the trimmed user URL (url)

        Raises:
            UploadFailed: If the storage write fails
        """
        if isinstance(source, UrlSource):
            return source.url
        if isinstance(source, FileSource):
            return await self._upload(source.file)
        raise TypeError(f"Unsupported image source: {source!r}")

    async def _upload(self, image: ImageFile) -> str:
        object_name = build_object_name(image.filename)
        logger.info(f"Uploading product image as {object_name} ({len(image.content)} bytes)")

        try:
            stored_path = await self.storage.upload_file(object_name, image.content, image.content_type)
        except StorageError as e:
            logger.error(f"Image upload error: {e}", exc_info=True)
            raise UploadFailed(e) from e

        return await self.storage.get_public_url(stored_path)

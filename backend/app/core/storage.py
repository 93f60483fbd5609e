"""
Supabase Storage helper functions for file uploads.

Handles all interactions with the product image bucket
(mvp_bucket by default): writing uploaded product photos and
resolving their public URLs for the submission record.
"""

import io
from typing import Optional

import httpx
from PIL import Image, UnidentifiedImageError
from storage3.utils import StorageException
from supabase import AsyncClient

from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.logger import logger
from app.core.supabase_client import get_supabase


def guess_image_content_type(data: bytes) -> str:
    """
    Sniff the MIME type of an image from its bytes.

    Returns:
        "image/<format>" for anything Pillow recognizes,
        "application/octet-stream" otherwise
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError):
        return "application/octet-stream"

    if not image_format:
        return "application/octet-stream"
    return f"image/{image_format.lower()}"


class StorageManager:
    """Handles file uploads to a Supabase Storage bucket."""

    def __init__(self, bucket: str = settings.STORAGE_BUCKET, client: Optional[AsyncClient] = None):
        self.bucket = bucket
        self._client = client

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            self._client = await get_supabase()
        return self._client

    async def get_public_url(self, file_path: str) -> str:
        """
        Get the public URL for a file in storage.

        Args:
            file_path: File path within bucket

        Returns:
            Public URL to access the file
        """
        supabase = await self._get_client()
        return await supabase.storage.from_(self.bucket).get_public_url(file_path)

    async def upload_file(
        self,
        file_path: str,
        data: bytes,
        content_type: Optional[str] = None
    ) -> str:
        """
        Upload a file to Supabase Storage.

        Args:
            file_path: Destination path within bucket
            data: Raw file bytes
            content_type: MIME type of the file, sniffed from the bytes if omitted

        Returns:
            Stored path of the uploaded file within the bucket

        Raises:
            StorageError: If upload fails
        """
        supabase = await self._get_client()
        content_type = content_type or guess_image_content_type(data)

        try:
            response = await supabase.storage.from_(self.bucket).upload(
                path=file_path,
                file=data,
                file_options={"content-type": content_type}
            )
        except (StorageException, httpx.HTTPError) as e:
            logger.error(f"Failed to upload file to {self.bucket}/{file_path}: {str(e)}")
            raise StorageError(str(e)) from e

        logger.info(f"Uploaded file to {self.bucket}/{response.path}")
        return response.path

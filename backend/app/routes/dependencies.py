"""
FastAPI dependencies shared by the submission routers.

Overridable in tests through app.dependency_overrides.
"""

from fastapi import UploadFile

from app.core.database import DatabaseManager
from app.core.storage import StorageManager
from app.models.submission_models import ImageFile
from app.services.session_manager import SessionManager, session_manager


def get_storage_manager() -> StorageManager:
    return StorageManager()


def get_database_manager() -> DatabaseManager:
    return DatabaseManager()


def get_session_manager() -> SessionManager:
    return session_manager


async def read_image_file(upload: UploadFile) -> ImageFile:
    """Load an uploaded file into memory as an ImageFile."""
    content = await upload.read()
    return ImageFile(
        filename=upload.filename or "image",
        content=content,
        content_type=upload.content_type,
    )

import asyncio
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import StorageError
from app.main import app
from app.models.submission_models import ImageFile, SubmissionRecord
from app.routes.dependencies import get_database_manager, get_session_manager, get_storage_manager
from app.services.session_manager import SessionManager


class FakeStorage:
    """In-memory stand-in for StorageManager."""

    def __init__(self, public_url: Optional[str] = None, error: Optional[Exception] = None):
        self.public_url = public_url
        self.error = error
        self.uploads: List[Dict[str, Any]] = []
        self.resolved: List[str] = []
        self.public_url_error: Optional[Exception] = None

    async def upload_file(self, file_path: str, data: bytes, content_type: Optional[str] = None) -> str:
        self.uploads.append({"file_path": file_path, "data": data, "content_type": content_type})
        if self.error is not None:
            raise self.error
        return file_path

    async def get_public_url(self, file_path: str) -> str:
        self.resolved.append(file_path)
        if self.public_url_error is not None:
            raise self.public_url_error
        return self.public_url or f"https://storage.test/mvp_bucket/{file_path}"


class FakeDatabase:
    """In-memory stand-in for DatabaseManager; optionally blocks until released."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.records: List[SubmissionRecord] = []
        self.gate: Optional[asyncio.Event] = None

    async def insert_submission(self, record: SubmissionRecord) -> List[Dict[str, Any]]:
        self.records.append(record)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return [dict(record.model_dump(), id=len(self.records))]


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def image_file():
    return ImageFile(filename="dress.png", content=b"\x89PNG fake bytes", content_type="image/png")


@pytest.fixture
def failing_storage():
    return FakeStorage(error=StorageError("bucket not found"))


@pytest.fixture
def client(storage, database):
    sessions = SessionManager()
    app.dependency_overrides[get_storage_manager] = lambda: storage
    app.dependency_overrides[get_database_manager] = lambda: database
    app.dependency_overrides[get_session_manager] = lambda: sessions
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

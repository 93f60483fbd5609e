"""
Database helper functions for writing to Supabase tables.

Provides a clean interface for inserting submission records
and translating PostgREST failures into InsertFailed.
"""

from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.core.config import settings
from app.core.exceptions import InsertFailed
from app.core.logger import logger
from app.core.supabase_client import get_supabase
from app.models.submission_models import SubmissionRecord


class DatabaseManager:
    """Handles database operations for form submissions."""

    def __init__(self, table: str = settings.SUBMISSIONS_TABLE, client: Optional[AsyncClient] = None):
        self.table = table
        self._client = client

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            self._client = await get_supabase()
        return self._client

    async def insert_submission(self, record: SubmissionRecord) -> List[Dict[str, Any]]:
        """
        Insert a single submission record.

        Args:
            record: Fully normalized submission

        Returns:
            Inserted rows as returned by the store

        Raises:
            InsertFailed: With the Postgres error code when the store rejects the row
        """
        supabase = await self._get_client()

        try:
            response = await supabase.table(self.table).insert([record.model_dump()]).execute()
        except APIError as e:
            logger.error(f"Supabase insertion error (code={e.code}): {e.message}")
            raise InsertFailed(e.code, e.message or str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase insertion error: {str(e)}")
            raise InsertFailed(None, str(e)) from e

        logger.info(f"Inserted submission into {self.table}: {response.data}")
        return response.data

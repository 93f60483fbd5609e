"""
Supabase client initialization and configuration.

This module provides a singleton async Supabase client instance
for database and storage operations throughout the application.
"""

from typing import Optional

from supabase import AsyncClient, AsyncClientOptions, acreate_client

from app.core.config import settings
from app.core.logger import logger


class SupabaseClient:
    """Singleton wrapper for the async Supabase client."""

    _instance: Optional[AsyncClient] = None

    @classmethod
    async def get_client(cls) -> AsyncClient:
        """
        Get or create the Supabase client instance.

        Returns:
            Async Supabase client instance

        Raises:
            ValueError: If required environment variables are missing
        """
        if cls._instance is None:
            if not settings.SUPABASE_URL or not settings.SUPABASE_ANON_KEY:
                raise ValueError(
                    "Missing Supabase credentials. Please set SUPABASE_URL and "
                    "SUPABASE_ANON_KEY environment variables."
                )

            # Anonymous form submissions; no auth session is kept between calls.
            cls._instance = await acreate_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=AsyncClientOptions(persist_session=False, schema="public"),
            )
            logger.info("Supabase client initialized successfully")

        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the client instance (useful for testing)."""
        cls._instance = None


# Convenience function for getting the client
async def get_supabase() -> AsyncClient:
    """Get the Supabase client instance."""
    return await SupabaseClient.get_client()

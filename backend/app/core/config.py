"""
Application configuration settings.

Responsibilities:
- Load environment variables (and a local .env file if present)
- Name the storage bucket and table used by the submission pipeline
- Configure API settings (CORS origins, log level)
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = "DupeIt"
    SUPABASE_URL: Optional[str] = os.getenv("SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = os.getenv("SUPABASE_ANON_KEY")
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "mvp_bucket")
    SUBMISSIONS_TABLE: str = os.getenv("SUBMISSIONS_TABLE", "form_submissions")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SESSION_TTL_SECONDS: float = float(os.getenv("SESSION_TTL_SECONDS", "1800"))
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

settings = Settings()

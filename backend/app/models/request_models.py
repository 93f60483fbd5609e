"""
Pydantic models for API request validation.

Responsibilities:
- Define schemas for incoming JSON payloads
- Validate data types and required fields
"""

from typing import Dict

from pydantic import BaseModel

from app.models.submission_models import UploadMode


class FieldUpdateRequest(BaseModel):
    fields: Dict[str, str]

class ModeChangeRequest(BaseModel):
    mode: UploadMode

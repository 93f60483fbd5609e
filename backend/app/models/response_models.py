"""
Pydantic models for API response schemas.

Responsibilities:
- Define standard response structures
- Ensure consistent API output
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.models.submission_models import SubmissionDraft, SubmissionState, SubmissionStatus, UploadMode


class SubmissionResponse(BaseModel):
    status: SubmissionStatus
    message: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_state(cls, state: SubmissionState) -> "SubmissionResponse":
        return cls(status=state.status, message=state.message, reason=state.reason)


class DraftSummary(BaseModel):
    """Draft as shown back to the form; image bytes are omitted."""
    mode: UploadMode
    product_url: str
    budget: str
    material: str
    comments: str
    name: str
    phone: str
    image_filename: Optional[str] = None

    @classmethod
    def from_draft(cls, draft: SubmissionDraft) -> "DraftSummary":
        return cls(
            mode=draft.mode,
            product_url=draft.product_url,
            budget=draft.budget,
            material=draft.material,
            comments=draft.comments,
            name=draft.name,
            phone=draft.phone,
            image_filename=draft.image_file.filename if draft.image_file else None,
        )


class SessionResponse(BaseModel):
    session_id: str = Field(..., description="Identifier of the form session")
    state: SubmissionResponse
    draft: DraftSummary

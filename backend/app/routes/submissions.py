"""
Handles one-shot product dupe requests.

Responsibilities:
- Accept the whole form as multipart data (fields plus optional image)
- Run it through a fresh SubmissionOrchestrator
- Translate the settled state into an HTTP status
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from app.core.database import DatabaseManager
from app.core.storage import StorageManager
from app.models.response_models import SubmissionResponse
from app.models.submission_models import SubmissionState, SubmissionStatus, UploadMode
from app.routes.dependencies import get_database_manager, get_storage_manager, read_image_file
from app.services.submission_orchestrator import SubmissionOrchestrator

router = APIRouter(prefix="/submissions", tags=["Submissions"])


def status_code_for(state: SubmissionState) -> int:
    """201 on success, 400 for local validation failures, 502 for store failures."""
    if state.status == SubmissionStatus.SUCCESS:
        return status.HTTP_201_CREATED
    if state.reason is not None:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_502_BAD_GATEWAY


@router.post("/", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    response: Response,
    mode: UploadMode = Form(UploadMode.FILE),
    product_url: str = Form(""),
    budget: str = Form(""),
    material: str = Form(""),
    comments: str = Form(""),
    name: str = Form(""),
    phone: str = Form(""),
    image: Optional[UploadFile] = File(None),
    storage: StorageManager = Depends(get_storage_manager),
    database: DatabaseManager = Depends(get_database_manager),
):
    """
    Submits a complete dupe request in a single call.
    """
    orchestrator = SubmissionOrchestrator(storage, database)
    orchestrator.on_mode_change(mode)
    fields = {
        "product_url": product_url,
        "budget": budget,
        "material": material,
        "comments": comments,
        "name": name,
        "phone": phone,
    }
    for field_name, value in fields.items():
        orchestrator.on_field_change(field_name, value)
    if image is not None and image.filename:
        orchestrator.on_image_select(await read_image_file(image))

    state = await orchestrator.on_submit()
    response.status_code = status_code_for(state)
    return SubmissionResponse.from_state(state)

"""
Form session endpoints.

Mirror the form's event handlers one to one so a UI can keep its draft
server-side: field edits, image selection, mode switch and submit.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from app.core.database import DatabaseManager
from app.core.storage import StorageManager
from app.models.request_models import FieldUpdateRequest, ModeChangeRequest
from app.models.response_models import DraftSummary, SessionResponse, SubmissionResponse
from app.models.submission_models import TEXT_FIELDS
from app.routes.dependencies import (
    get_database_manager,
    get_session_manager,
    get_storage_manager,
    read_image_file,
)
from app.services.session_manager import SessionManager
from app.services.submission_orchestrator import SubmissionOrchestrator

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def _session_response(session_id: str, orchestrator: SubmissionOrchestrator) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        state=SubmissionResponse.from_state(orchestrator.state),
        draft=DraftSummary.from_draft(orchestrator.draft),
    )


def _get_or_404(sessions: SessionManager, session_id: str) -> SubmissionOrchestrator:
    orchestrator = sessions.get(session_id)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return orchestrator


@router.post("/", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def open_session(
    storage: StorageManager = Depends(get_storage_manager),
    database: DatabaseManager = Depends(get_database_manager),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Opens a new form session with an empty draft."""
    session_id, orchestrator = sessions.create(storage, database)
    return _session_response(session_id, orchestrator)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
    return _session_response(session_id, _get_or_404(sessions, session_id))


@router.patch("/{session_id}/fields", response_model=SessionResponse)
async def update_fields(
    session_id: str,
    request: FieldUpdateRequest,
    sessions: SessionManager = Depends(get_session_manager),
):
    orchestrator = _get_or_404(sessions, session_id)
    unknown = sorted(set(request.fields) - set(TEXT_FIELDS))
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown form field: {', '.join(unknown)}")
    for field_name, value in request.fields.items():
        orchestrator.on_field_change(field_name, value)
    return _session_response(session_id, orchestrator)


@router.put("/{session_id}/mode", response_model=SessionResponse)
async def change_mode(
    session_id: str,
    request: ModeChangeRequest,
    sessions: SessionManager = Depends(get_session_manager),
):
    orchestrator = _get_or_404(sessions, session_id)
    orchestrator.on_mode_change(request.mode)
    return _session_response(session_id, orchestrator)


@router.put("/{session_id}/image", response_model=SessionResponse)
async def select_image(
    session_id: str,
    image: UploadFile = File(...),
    sessions: SessionManager = Depends(get_session_manager),
):
    orchestrator = _get_or_404(sessions, session_id)
    orchestrator.on_image_select(await read_image_file(image))
    return _session_response(session_id, orchestrator)


@router.post("/{session_id}/submit", response_model=SessionResponse)
async def submit_session(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
    """
    Submits the session's draft.

    Returns the settled state; a submit arriving while another is in
    flight returns the SUBMITTING state untouched.
    """
    orchestrator = _get_or_404(sessions, session_id)
    await orchestrator.on_submit()
    return _session_response(session_id, orchestrator)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(session_id: str, sessions: SessionManager = Depends(get_session_manager)):
    if not sessions.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

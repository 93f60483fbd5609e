"""
Submission Orchestrator

Responsibilities:
- Own the form draft and apply field, image and mode edits to it
- Run validation, image resolution and the record insert strictly in order
- Map each failure to a single user-facing message
- Track the IDLE / SUBMITTING / SUCCESS / ERROR lifecycle and refuse
  overlapping submissions from the same session
"""

from typing import Callable, Optional, Union

from app.core.database import DatabaseManager
from app.core.exceptions import InsertFailed, SubmissionValidationError, UploadFailed
from app.core.logger import logger
from app.core.storage import StorageManager
from app.models.submission_models import (
    TEXT_FIELDS,
    ImageFile,
    SubmissionDraft,
    SubmissionRecord,
    SubmissionState,
    SubmissionStatus,
    UploadMode,
)
from app.services.field_validator import validate_draft
from app.services.image_resolver import ImageResolver

ACKNOWLEDGMENT = "Thank you! We will text you with our hand-selected dupes soon!"
GENERIC_ERROR = "There was an error submitting your request. Please try again."

# Postgres SQLSTATE codes reported by the record store
UNIQUE_VIOLATION = "23505"
UNDEFINED_TABLE = "42P01"
UNDEFINED_COLUMN = "42703"
NOT_NULL_VIOLATION = "23502"

INSERT_ERROR_MESSAGES = {
    UNIQUE_VIOLATION: "This submission already exists",
    UNDEFINED_TABLE: "Table not found. Please check your database setup",
    UNDEFINED_COLUMN: "Invalid column name. Please check the form fields",
    NOT_NULL_VIOLATION: "Required field missing",
}


def insert_error_message(error: InsertFailed) -> str:
    """User-facing text for a record store failure."""
    return INSERT_ERROR_MESSAGES.get(error.code, f"Database error: {error.message}")


class SubmissionOrchestrator:
    """
    One form session: a draft plus the state of its latest submit attempt.

    Not thread-safe; meant to be driven from a single event loop.
    """

    def __init__(
        self,
        storage: StorageManager,
        database: DatabaseManager,
        on_success: Optional[Callable[[str], None]] = None,
        draft: Optional[SubmissionDraft] = None,
    ):
        self.draft = draft if draft is not None else SubmissionDraft()
        self.state = SubmissionState()
        self._resolver = ImageResolver(storage)
        self._database = database
        self._on_success = on_success
        self._submitting = False

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def on_field_change(self, field_name: str, value: str):
        if field_name not in TEXT_FIELDS:
            raise ValueError(f"Unknown form field: {field_name}")
        setattr(self.draft, field_name, value)

    def on_image_select(self, image_file: Optional[ImageFile]):
        self.draft.image_file = image_file

    def on_mode_change(self, mode: Union[UploadMode, str]):
        self.draft.mode = UploadMode(mode)

    async def on_submit(self) -> SubmissionState:
        """
        Run one submission attempt.

        A call made while another attempt is in flight does nothing and
        returns the current (SUBMITTING) state.

        Returns:
            The settled state: SUCCESS or ERROR
        """
        if self._submitting:
            logger.warning("Submit ignored: a submission is already in progress")
            return self.state

        self._submitting = True
        self.state = SubmissionState(status=SubmissionStatus.SUBMITTING)
        try:
            self.state = await self._submit_draft()
        except Exception as e:
            logger.error(f"Error submitting form: {e}", exc_info=True)
            self.state = SubmissionState(status=SubmissionStatus.ERROR, message=GENERIC_ERROR)
        finally:
            self._submitting = False

        return self.state

    async def _submit_draft(self) -> SubmissionState:
        try:
            fields = validate_draft(self.draft)
        except SubmissionValidationError as e:
            logger.info(f"Submission rejected: {e.reason}")
            return SubmissionState(status=SubmissionStatus.ERROR, message=e.message, reason=e.reason)

        try:
            product_url = await self._resolver.resolve(fields.image_source)
            record = SubmissionRecord.from_fields(fields, product_url)
            await self._database.insert_submission(record)
        except UploadFailed as e:
            return SubmissionState(status=SubmissionStatus.ERROR, message=e.message)
        except InsertFailed as e:
            return SubmissionState(status=SubmissionStatus.ERROR, message=insert_error_message(e))

        self._reset_draft()
        if self._on_success is not None:
            self._on_success(ACKNOWLEDGMENT)
        return SubmissionState(status=SubmissionStatus.SUCCESS, message=ACKNOWLEDGMENT)

    def _reset_draft(self):
        # The selected mode is a UI preference and stays as it was
        self.draft = SubmissionDraft(mode=self.draft.mode)

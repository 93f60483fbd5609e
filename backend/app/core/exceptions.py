"""
Exceptions raised along the submission pipeline.

Every failure a user can recover from by editing the form and resubmitting
derives from SubmissionError, so the orchestrator can end the attempt in the
ERROR state with a single human-readable message.
"""

from typing import Optional


class SubmissionError(Exception):
    """Base class for recoverable submission failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SubmissionValidationError(SubmissionError):
    """A draft field failed local validation; nothing was sent anywhere."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class StorageError(Exception):
    """The object store rejected an upload."""


class UploadFailed(SubmissionError):
    """The product image could not be written to storage."""

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__("Failed to upload image")
        self.cause = cause


class InsertFailed(SubmissionError):
    """The record store refused the submission row."""

    def __init__(self, code: Optional[str], message: str):
        super().__init__(message)
        self.code = code

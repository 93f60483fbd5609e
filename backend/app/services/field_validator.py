"""
Field Validation Service

Responsibilities:
- Check a submission draft in a fixed order, stopping at the first failure
- Parse the budget into a finite number
- Normalize optional text (empty -> None) and pick the image source

Pure: no storage or network access happens here.
"""

import math
from typing import Optional

from app.core.exceptions import SubmissionValidationError
from app.models.submission_models import (
    FileSource,
    NormalizedFields,
    SubmissionDraft,
    UploadMode,
    UrlSource,
)

MISSING_IMAGE = "missing image"
MISSING_PRODUCT_URL = "missing product URL"
MISSING_BUDGET = "missing budget"
MISSING_NAME = "missing name"
MISSING_PHONE = "missing phone"
INVALID_BUDGET = "invalid budget"

REASON_MESSAGES = {
    MISSING_IMAGE: "Please upload a product image",
    MISSING_PRODUCT_URL: "Please enter a product URL",
    MISSING_BUDGET: "Please enter your budget",
    MISSING_NAME: "Please enter your name",
    MISSING_PHONE: "Please enter your phone number",
    INVALID_BUDGET: "Please enter a valid budget amount",
}


def _fail(reason: str):
    raise SubmissionValidationError(reason, REASON_MESSAGES[reason])


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def parse_budget(raw: str) -> Optional[float]:
    """Return the budget as a float, or None if it is not a finite decimal."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def validate_draft(draft: SubmissionDraft) -> NormalizedFields:
    """
    Validate a draft and normalize it for persistence.

    Args:
        draft: Current form state

    Returns:
        NormalizedFields with the image source chosen by the draft mode

    Raises:
        SubmissionValidationError: First failing check, in form order
    """
    if draft.mode == UploadMode.FILE and draft.image_file is None:
        _fail(MISSING_IMAGE)
    if draft.mode == UploadMode.URL and _blank(draft.product_url):
        _fail(MISSING_PRODUCT_URL)
    if _blank(draft.budget):
        _fail(MISSING_BUDGET)
    if _blank(draft.name):
        _fail(MISSING_NAME)
    if _blank(draft.phone):
        _fail(MISSING_PHONE)

    budget = parse_budget(draft.budget)
    if budget is None:
        _fail(INVALID_BUDGET)

    if draft.mode == UploadMode.FILE:
        image_source = FileSource(file=draft.image_file)
    else:
        image_source = UrlSource(url=draft.product_url.strip())

    return NormalizedFields(
        image_source=image_source,
        budget=budget,
        material=_optional(draft.material),
        comments=_optional(draft.comments),
        name=_optional(draft.name),
        phone=_optional(draft.phone),
    )

"""
Pydantic models for the submission pipeline.

Responsibilities:
- Hold the mutable form draft for one session
- Express the image source as a tagged variant (file upload or URL)
- Define the normalized fields and the persisted record
- Describe the lifecycle state of a submission attempt
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class UploadMode(str, Enum):
    FILE = "file"
    URL = "url"


class ImageFile(BaseModel):
    """An image picked by the user, held in memory until submission."""
    filename: str
    content: bytes = Field(..., repr=False)
    content_type: Optional[str] = None


class SubmissionDraft(BaseModel):
    """In-progress form state. Both image fields survive a mode switch."""
    model_config = ConfigDict(validate_assignment=True)

    mode: UploadMode = UploadMode.FILE
    product_url: str = ""
    budget: str = ""
    material: str = ""
    comments: str = ""
    name: str = ""
    phone: str = ""
    image_file: Optional[ImageFile] = None


# Fields editable through on_field_change
TEXT_FIELDS = ("product_url", "budget", "material", "comments", "name", "phone")


class FileSource(BaseModel):
    kind: Literal["file"] = "file"
    file: ImageFile


class UrlSource(BaseModel):
    kind: Literal["url"] = "url"
    url: str


ImageSource = Annotated[Union[FileSource, UrlSource], Field(discriminator="kind")]


class NormalizedFields(BaseModel):
    """Validated draft values, ready to be turned into a record."""
    image_source: ImageSource
    budget: float
    material: Optional[str] = None
    comments: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class SubmissionRecord(BaseModel):
    """Row written to the submissions table."""
    product_url: str
    budget: float
    material: Optional[str] = None
    extra_comments: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_fields(cls, fields: NormalizedFields, product_url: str) -> "SubmissionRecord":
        return cls(
            product_url=product_url,
            budget=fields.budget,
            material=fields.material,
            extra_comments=fields.comments,
            name=fields.name,
            phone_number=fields.phone,
        )


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SubmissionState(BaseModel):
    """Lifecycle state of the latest submission attempt."""
    model_config = ConfigDict(frozen=True)

    status: SubmissionStatus = SubmissionStatus.IDLE
    message: Optional[str] = Field(None, description="Error text or success acknowledgment")
    reason: Optional[str] = Field(None, description="Validator reason for local failures")

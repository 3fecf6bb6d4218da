"""
Pydantic models for inbound form submissions.

Models:
  UploadedFile        — a resume persisted to scratch storage for one request
  ContactSubmission   — contact form body (JSON)
  CareerSubmission    — job application form fields + stored resume
  SubmissionKind      — descriptor that parameterizes the pipeline per form
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """A binary blob received with a submission and written to scratch storage."""

    original_name: str
    mime_type: str
    size_bytes: int
    storage_path: Path


# ---------------------------------------------------------------------------
# Submissions
#
# Every field is optional at the boundary: a missing field is a pipeline
# rejection (400 "missing required fields"), not a framework-level 422.
# Unknown keys are ignored.
# ---------------------------------------------------------------------------

class ContactSubmission(BaseModel):
    """Body of POST /send-email."""
    model_config = {"extra": "ignore"}

    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


class CareerSubmission(BaseModel):
    """Fields of POST /send-career-email. ``resume`` is set once the upload is stored."""
    model_config = {"extra": "ignore", "populate_by_name": True}

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_role: Optional[str] = Field(None, alias="jobRole")
    experience: Optional[str] = None
    message: Optional[str] = None
    resume: Optional[UploadedFile] = None


Submission = Union[ContactSubmission, CareerSubmission]


@dataclass(frozen=True)
class SubmissionKind:
    """
    Everything that differs between the contact and career pipelines.

    ``subject`` and ``template`` are ``str.format`` templates rendered against
    the submission's fields (see services/composer.py). ``required_fields``
    uses Python attribute names; error messages report the wire names.
    """

    name: str
    recipient: str
    required_fields: Tuple[str, ...]
    subject: str
    template: str
    success_message: str
    failure_message: str
    requires_attachment: bool = False


def wire_name(submission: Submission, field_name: str) -> str:
    """Return the name a client uses for ``field_name`` (its alias, if any)."""
    info = type(submission).model_fields.get(field_name)
    if info is not None and info.alias:
        return info.alias
    return field_name

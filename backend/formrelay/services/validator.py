"""
Submission validation.

Checks presence only: no email, phone or experience format checks.
File acceptance is a pure predicate over (mime type, size) so it does not
depend on how the upload reached us.
"""

from dataclasses import dataclass
from typing import Optional

from formrelay.errors import ValidationError
from formrelay.models.submission import (
    CareerSubmission,
    Submission,
    SubmissionKind,
    wire_name,
)

ALLOWED_RESUME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

MAX_RESUME_BYTES = 5 * 1024 * 1024  # 5 MB

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only PDF, DOC, and DOCX files are allowed."
FILE_TOO_LARGE_MESSAGE = "File too large. Maximum size is 5MB."


@dataclass(frozen=True)
class UploadDecision:
    """Outcome of check_upload(). ``error_code``/``message`` are set only on rejection."""
    accepted: bool
    error_code: Optional[str] = None
    message: Optional[str] = None

    def raise_if_rejected(self) -> None:
        if not self.accepted:
            raise ValidationError(self.message, self.error_code)


def check_file_type(mime_type: Optional[str]) -> UploadDecision:
    """Type half of check_upload(), usable before any byte is written."""
    if mime_type not in ALLOWED_RESUME_TYPES:
        return UploadDecision(False, "invalid_file_type", INVALID_FILE_TYPE_MESSAGE)
    return UploadDecision(True)


def check_upload(mime_type: Optional[str], size_bytes: int) -> UploadDecision:
    """Decide whether an uploaded resume is acceptable. Type is checked before size."""
    decision = check_file_type(mime_type)
    if not decision.accepted:
        return decision
    if size_bytes > MAX_RESUME_BYTES:
        return UploadDecision(False, "file_too_large", FILE_TOO_LARGE_MESSAGE)
    return UploadDecision(True)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value == ""


def missing_fields(submission: Submission, kind: SubmissionKind) -> list[str]:
    """Return the wire names of required fields that are absent or empty, in order."""
    missing = [
        wire_name(submission, field_name)
        for field_name in kind.required_fields
        if _is_blank(getattr(submission, field_name, None))
    ]
    if kind.requires_attachment:
        if not isinstance(submission, CareerSubmission) or submission.resume is None:
            missing.append("resume")
    return missing


def validate(submission: Submission, kind: SubmissionKind) -> None:
    """
    Reject a submission that lacks any required field.

    Raises:
        ValidationError: error_code "missing_fields"
    """
    missing = missing_fields(submission, kind)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            "missing_fields",
        )

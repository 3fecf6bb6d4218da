"""
Submission pipeline.

One orchestrator for both forms, parameterized by SubmissionKind:

  check type -> store upload (capped) -> check upload -> validate -> read file -> compose -> dispatch

The first failing step ends the run. Whatever happens, a stored upload is
released exactly once in the ``finally`` block before the run returns.

The pipeline is synchronous (file I/O and the Resend SDK both block); the
router runs it in Starlette's threadpool.
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional, Protocol

from formrelay.config import Settings
from formrelay.errors import DispatchError, StorageError, ValidationError
from formrelay.models.email import DispatchResult, EmailMessage, Failed
from formrelay.models.submission import (
    ContactSubmission,
    Submission,
    SubmissionKind,
    UploadedFile,
)
from formrelay.services.composer import career_kind, compose, contact_kind
from formrelay.services.dispatch import ResendGateway
from formrelay.services.file_store import TransientFileStore
from formrelay.services.validator import (
    MAX_RESUME_BYTES,
    check_file_type,
    check_upload,
    validate,
)

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    def dispatch(self, message: EmailMessage) -> DispatchResult: ...


@dataclass
class IncomingUpload:
    """A file as received from the transport, before it is stored."""
    stream: BinaryIO
    filename: str
    content_type: str


class SubmissionPipeline:
    """Runs one submission from receipt to dispatch, releasing its upload on every path."""

    def __init__(
        self,
        store: TransientFileStore,
        gateway: Gateway,
        sender: str,
        contact: SubmissionKind,
        career: SubmissionKind,
    ):
        self.store = store
        self.gateway = gateway
        self.sender = sender
        self.contact = contact
        self.career = career

    def kind_for(self, submission: Submission) -> SubmissionKind:
        if isinstance(submission, ContactSubmission):
            return self.contact
        return self.career

    def submit(
        self,
        submission: Submission,
        upload: Optional[IncomingUpload] = None,
    ) -> str:
        """
        Validate, compose and send one submission.

        Args:
            submission: Typed submission parsed at the HTTP boundary
            upload: The resume as received, for career submissions

        Returns:
            The provider's message id

        Raises:
            ValidationError: Missing fields, invalid file type, file too large
            StorageError: The upload could not be written or read back
            DispatchError: The provider did not accept the message
        """
        kind = self.kind_for(submission)
        stored: Optional[UploadedFile] = None

        try:
            if upload is not None:
                check_file_type(upload.content_type).raise_if_rejected()
                stored = self._store(upload, kind)
                check_upload(stored.mime_type, stored.size_bytes).raise_if_rejected()
                submission = submission.model_copy(update={"resume": stored})

            validate(submission, kind)

            resume_bytes = self._read(stored, kind) if stored is not None else None
            message = compose(submission, kind, self.sender, resume_bytes)

            result = self.gateway.dispatch(message)
            if isinstance(result, Failed):
                raise DispatchError(kind.failure_message, "dispatch_failed")

            logger.info(
                f"{kind.name.capitalize()} email sent to {kind.recipient} "
                f"(id={result.provider_message_id})"
            )
            return result.provider_message_id

        except ValidationError as e:
            logger.info(f"Rejected {kind.name} submission: {e.message}")
            raise

        finally:
            if stored is not None:
                self.store.release(stored)

    def _store(self, upload: IncomingUpload, kind: SubmissionKind) -> UploadedFile:
        try:
            return self.store.store(
                upload.stream,
                upload.filename or "resume",
                upload.content_type or "",
                max_bytes=MAX_RESUME_BYTES,
            )
        except StorageError as e:
            logger.error(f"Could not store {kind.name} upload {upload.filename!r}: {e.message}")
            raise StorageError(kind.failure_message, e.error_code) from e

    def _read(self, stored: UploadedFile, kind: SubmissionKind) -> bytes:
        try:
            return self.store.read(stored)
        except OSError as e:
            logger.error(f"Could not read back {stored.storage_path}: {e}")
            raise StorageError(kind.failure_message, "storage_failed") from e


def build_pipeline(settings: Settings) -> SubmissionPipeline:
    """Wire the production pipeline from process settings."""
    return SubmissionPipeline(
        store=TransientFileStore(settings.upload_dir),
        gateway=ResendGateway(settings.resend_api_key or ""),
        sender=settings.sender,
        contact=contact_kind(settings.contact_recipient),
        career=career_kind(settings.careers_recipient),
    )

"""
Form submission router.

Endpoints:
  POST /send-email          — contact form (JSON body)
  POST /send-career-email   — job application (multipart, file field "resume")

Both parse the request into a typed submission and hand it to the shared
SubmissionPipeline. Failures are raised as SubmissionError subclasses and
rendered by the exception handler registered in main.py.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from formrelay.config import get_settings
from formrelay.errors import ConfigurationError
from formrelay.models.submission import CareerSubmission, ContactSubmission
from formrelay.services.pipeline import IncomingUpload, SubmissionPipeline, build_pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def _cached_pipeline() -> SubmissionPipeline:
    return build_pipeline(get_settings())


def get_pipeline() -> SubmissionPipeline:
    """
    FastAPI dependency returning the process-wide pipeline.

    Built on first use from get_settings(). Tests replace it through
    ``app.dependency_overrides[get_pipeline]``.

    Raises:
        ConfigurationError: 503 when RESEND_API_KEY is not configured
    """
    try:
        return _cached_pipeline()
    except ValueError as e:
        logger.error(f"Email pipeline unavailable: {e}")
        raise ConfigurationError("Email service is not configured.", "not_configured")


@router.post("/send-email")
async def send_contact_email(
    submission: Optional[ContactSubmission] = Body(None),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> dict:
    """Relay a contact form message to the contact inbox."""
    if submission is None:
        submission = ContactSubmission()

    await run_in_threadpool(pipeline.submit, submission)

    return {"success": True, "message": pipeline.contact.success_message}


@router.post("/send-career-email")
async def send_career_email(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    job_role: Optional[str] = Form(None, alias="jobRole"),
    experience: Optional[str] = Form(None),
    message: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    pipeline: SubmissionPipeline = Depends(get_pipeline),
) -> dict:
    """
    Relay a job application, with the resume attached, to the HR inbox.

    The resume is written to scratch storage for the duration of the request
    and deleted before the response is returned, whatever the outcome.
    """
    submission = CareerSubmission(
        name=name,
        email=email,
        phone=phone,
        job_role=job_role,
        experience=experience,
        message=message,
    )

    upload: Optional[IncomingUpload] = None
    if resume is not None:
        upload = IncomingUpload(
            stream=resume.file,
            filename=resume.filename or "",
            content_type=resume.content_type or "",
        )

    await run_in_threadpool(pipeline.submit, submission, upload)

    return {"success": True, "message": pipeline.career.success_message}

"""
Email composition for relayed form submissions.

Builds an EmailMessage from a validated submission and its SubmissionKind,
and converts EmailMessage into the payload shape Resend expects.

Field values are interpolated into the HTML without escaping, so markup in
a submitted name or message reaches the recipient's inbox as markup. This
matches the behaviour the forms have always had and is tracked as known debt.
"""

import base64
from typing import Optional

from formrelay.models.email import EmailAttachment, EmailMessage
from formrelay.models.submission import (
    CareerSubmission,
    ContactSubmission,
    Submission,
    SubmissionKind,
)

EXPERIENCE_PLACEHOLDER = "Not specified"
MESSAGE_PLACEHOLDER = "N/A"

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

CONTACT_SUBJECT = "New Contact Form Submission from {name}"

CONTACT_TEMPLATE = """
<h2>New Contact Form Message</h2>
<p><strong>Name:</strong> {name}</p>
<p><strong>Email:</strong> {email}</p>
<p><strong>Message:</strong></p>
<p>{message}</p>
"""

CAREER_SUBJECT = "New Job Application - Career Page"

CAREER_TEMPLATE = """
<h2>New Job Application - Career Page</h2>
<div style="font-family: Arial, sans-serif; line-height: 1.6;">
    <p><strong>Full Name:</strong> {name}</p>
    <p><strong>Email:</strong> {email}</p>
    <p><strong>Phone Number:</strong> {phone}</p>
    <p><strong>Applying For:</strong> {job_role}</p>
    <p><strong>Years of Experience:</strong> {experience}</p>
    <p><strong>Message / Cover Letter:</strong></p>
    <p style="white-space: pre-wrap;">{message}</p>
    <hr style="margin: 20px 0;">
    <p style="color: #666; font-size: 12px;">Resume is attached to this email.</p>
</div>
"""


def contact_kind(recipient: str) -> SubmissionKind:
    return SubmissionKind(
        name="contact",
        recipient=recipient,
        required_fields=("name", "email", "message"),
        subject=CONTACT_SUBJECT,
        template=CONTACT_TEMPLATE,
        success_message="Email sent successfully!",
        failure_message="Failed to send email.",
    )


def career_kind(recipient: str) -> SubmissionKind:
    return SubmissionKind(
        name="career",
        recipient=recipient,
        required_fields=("name", "email", "phone", "job_role"),
        subject=CAREER_SUBJECT,
        template=CAREER_TEMPLATE,
        success_message="Application submitted successfully!",
        failure_message="Failed to submit application. Please try again.",
        requires_attachment=True,
    )


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def _template_values(submission: Submission) -> dict[str, str]:
    """Field values to interpolate, with placeholders for optional career fields."""
    if isinstance(submission, ContactSubmission):
        return submission.model_dump()

    values = submission.model_dump(exclude={"resume"})
    values["experience"] = submission.experience or EXPERIENCE_PLACEHOLDER
    values["message"] = submission.message or MESSAGE_PLACEHOLDER
    return values


def compose(
    submission: Submission,
    kind: SubmissionKind,
    sender: str,
    resume_bytes: Optional[bytes] = None,
) -> EmailMessage:
    """
    Build the outbound message for a validated submission.

    Args:
        submission: A submission that already passed validate()
        kind: Descriptor supplying recipient, subject and template
        sender: The From address
        resume_bytes: Contents of the stored resume (career submissions)

    Returns:
        EmailMessage with one attachment for career submissions, none otherwise

    Raises:
        ValueError: If the kind needs an attachment and none was supplied
    """
    values = _template_values(submission)

    attachments: list[EmailAttachment] = []
    if kind.requires_attachment:
        if not isinstance(submission, CareerSubmission) or submission.resume is None or resume_bytes is None:
            raise ValueError(f"{kind.name} submissions need the resume contents to compose")
        attachments.append(
            EmailAttachment(filename=submission.resume.original_name, content=resume_bytes)
        )

    return EmailMessage(
        sender=sender,
        to=kind.recipient,
        subject=kind.subject.format(**values),
        html=kind.template.format(**values),
        attachments=attachments,
    )


def to_resend_params(message: EmailMessage) -> dict:
    """
    Convert an EmailMessage into the dict passed to ``resend.Emails.send``.

    Resend takes attachment content as a base64 string.
    """
    params: dict = {
        "from": message.sender,
        "to": [message.to],
        "subject": message.subject,
        "html": message.html,
    }
    if message.attachments:
        params["attachments"] = [
            {
                "filename": attachment.filename,
                "content": base64.b64encode(attachment.content).decode("ascii"),
            }
            for attachment in message.attachments
        ]
    return params

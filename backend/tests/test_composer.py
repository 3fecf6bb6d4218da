"""
Unit tests for email composition and the Resend payload conversion.
"""

import base64
import pytest
from pathlib import Path

from formrelay.models.email import EmailAttachment, EmailMessage
from formrelay.models.submission import CareerSubmission, ContactSubmission, UploadedFile
from formrelay.services.composer import (
    EXPERIENCE_PLACEHOLDER,
    MESSAGE_PLACEHOLDER,
    career_kind,
    compose,
    contact_kind,
    to_resend_params,
)

SENDER = "NBTech <no-reply@updates.example.com>"
CONTACT = contact_kind("contact@example.com")
CAREER = career_kind("hr@example.com")


def _career(**overrides) -> CareerSubmission:
    values = {
        "name": "Grace Hopper",
        "email": "grace@example.com",
        "phone": "555-0100",
        "job_role": "Compiler Engineer",
        "experience": "12",
        "message": "I wrote the first compiler.",
        "resume": UploadedFile(
            original_name="Grace Hopper CV.pdf",
            mime_type="application/pdf",
            size_bytes=4,
            storage_path=Path("/tmp/uploads/abc-Grace_Hopper_CV.pdf"),
        ),
    }
    values.update(overrides)
    return CareerSubmission(**values)


class TestComposeContact:
    """Contact messages go to the contact inbox with the sender's name in the subject."""

    def test_addresses_and_subject(self):
        message = compose(ContactSubmission(name="Ada", email="a@x.com", message="Hi"), CONTACT, SENDER)

        assert message.sender == SENDER
        assert message.to == "contact@example.com"
        assert message.subject == "New Contact Form Submission from Ada"
        assert message.attachments == []

    def test_body_contains_every_field(self):
        message = compose(
            ContactSubmission(name="Ada", email="a@x.com", message="Hello there"),
            CONTACT,
            SENDER,
        )

        assert "<strong>Name:</strong> Ada" in message.html
        assert "<strong>Email:</strong> a@x.com" in message.html
        assert "Hello there" in message.html

    def test_fields_are_interpolated_without_escaping(self):
        """Markup in a field is passed through as-is (known limitation)."""
        message = compose(
            ContactSubmission(name="<b>Ada</b>", email="a@x.com", message="<script>x</script>"),
            CONTACT,
            SENDER,
        )

        assert "<b>Ada</b>" in message.html
        assert "<script>x</script>" in message.html

    def test_braces_in_fields_are_not_reformatted(self):
        message = compose(
            ContactSubmission(name="{email}", email="a@x.com", message="{0}"),
            CONTACT,
            SENDER,
        )

        assert message.subject == "New Contact Form Submission from {email}"
        assert "<p>{0}</p>" in message.html


class TestComposeCareer:
    """Career messages go to HR with the resume attached."""

    def test_attachment_uses_original_filename_and_raw_bytes(self):
        message = compose(_career(), CAREER, SENDER, resume_bytes=b"%PDF")

        assert message.to == "hr@example.com"
        assert message.subject == "New Job Application - Career Page"
        assert len(message.attachments) == 1
        assert message.attachments[0].filename == "Grace Hopper CV.pdf"
        assert message.attachments[0].content == b"%PDF"

    def test_body_contains_every_field(self):
        html = compose(_career(), CAREER, SENDER, resume_bytes=b"%PDF").html

        for value in ["Grace Hopper", "grace@example.com", "555-0100", "Compiler Engineer", "12",
                      "I wrote the first compiler."]:
            assert value in html

    @pytest.mark.parametrize("absent", [None, ""])
    def test_absent_optional_fields_render_placeholders(self, absent):
        html = compose(_career(experience=absent, message=absent), CAREER, SENDER, resume_bytes=b"%PDF").html

        assert f"<strong>Years of Experience:</strong> {EXPERIENCE_PLACEHOLDER}" in html
        assert f">{MESSAGE_PLACEHOLDER}</p>" in html
        assert "Message / Cover Letter" in html

    def test_missing_resume_bytes_raises(self):
        with pytest.raises(ValueError):
            compose(_career(), CAREER, SENDER)


class TestToResendParams:
    """Test conversion to the Resend send payload."""

    def test_plain_message(self):
        params = to_resend_params(
            EmailMessage(sender=SENDER, to="contact@example.com", subject="S", html="<p>H</p>")
        )

        assert params == {
            "from": SENDER,
            "to": ["contact@example.com"],
            "subject": "S",
            "html": "<p>H</p>",
        }

    def test_attachment_content_is_base64(self):
        raw = bytes(range(256))
        params = to_resend_params(
            EmailMessage(
                sender=SENDER,
                to="hr@example.com",
                subject="S",
                html="H",
                attachments=[EmailAttachment(filename="cv.pdf", content=raw)],
            )
        )

        assert params["attachments"][0]["filename"] == "cv.pdf"
        assert base64.b64decode(params["attachments"][0]["content"]) == raw

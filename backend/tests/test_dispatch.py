"""
Unit tests for the Resend dispatch gateway.
The Resend SDK is mocked; no network calls are made.
"""

import base64
import pytest
from unittest.mock import patch

from formrelay.models.email import EmailAttachment, EmailMessage, Failed, Sent
from formrelay.services.dispatch import ResendGateway


class _FakeResendError(Exception):
    """Stands in for resend.exceptions.ResendError in except clauses."""


def _message(**overrides) -> EmailMessage:
    values = {
        "sender": "NBTech <no-reply@updates.example.com>",
        "to": "hr@example.com",
        "subject": "New Job Application - Career Page",
        "html": "<p>hi</p>",
        "attachments": [EmailAttachment(filename="cv.pdf", content=b"%PDF-1.4")],
    }
    values.update(overrides)
    return EmailMessage(**values)


class TestGatewayInit:

    def test_missing_api_key_raises(self):
        with pytest.raises(ValueError):
            ResendGateway("")

    def test_api_key_configured_on_sdk(self):
        with patch("formrelay.services.dispatch.resend") as mock_resend:
            ResendGateway("re_test_123")

        assert mock_resend.api_key == "re_test_123"


class TestDispatch:
    """Test outcome classification."""

    def test_success_returns_sent_with_provider_id(self):
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.resend.Emails.send", return_value={"id": "msg-123"}) as mock_send:
            result = gateway.dispatch(_message())

        assert result == Sent(provider_message_id="msg-123")
        mock_send.assert_called_once()

    def test_sdk_receives_base64_attachment_and_recipient_list(self):
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.resend.Emails.send", return_value={"id": "m"}) as mock_send:
            gateway.dispatch(_message())

        params = mock_send.call_args[0][0]
        assert params["to"] == ["hr@example.com"]
        assert params["from"] == "NBTech <no-reply@updates.example.com>"
        assert params["attachments"] == [
            {"filename": "cv.pdf", "content": base64.b64encode(b"%PDF-1.4").decode()}
        ]

    def test_provider_error_returns_failed(self):
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.ResendError", _FakeResendError), \
             patch("formrelay.services.dispatch.resend.Emails.send",
                   side_effect=_FakeResendError("domain not verified")):
            result = gateway.dispatch(_message())

        assert isinstance(result, Failed)
        assert "domain not verified" in result.cause

    def test_transport_error_returns_failed(self):
        """Network failures are classified the same way as provider rejections."""
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.resend.Emails.send", side_effect=ConnectionError("timed out")):
            result = gateway.dispatch(_message())

        assert isinstance(result, Failed)
        assert "timed out" in result.cause

    def test_response_without_id_returns_failed(self):
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.resend.Emails.send", return_value={}):
            result = gateway.dispatch(_message())

        assert isinstance(result, Failed)

    def test_no_retry_on_failure(self):
        gateway = ResendGateway("re_test")

        with patch("formrelay.services.dispatch.resend.Emails.send", side_effect=ConnectionError("x")) as mock_send:
            gateway.dispatch(_message())

        assert mock_send.call_count == 1

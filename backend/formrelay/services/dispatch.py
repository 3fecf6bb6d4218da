"""
Resend dispatch gateway.

One blocking ``resend.Emails.send`` call per message. No retry: the browser
form that triggered the request is free to resubmit.
"""

import logging

import resend
from resend.exceptions import ResendError

from formrelay.models.email import DispatchResult, EmailMessage, Failed, Sent
from formrelay.services.composer import to_resend_params

logger = logging.getLogger(__name__)


class ResendGateway:
    """Sends composed messages through the Resend API."""

    def __init__(self, api_key: str):
        if not api_key:
            raise ValueError("RESEND_API_KEY is required to send email")
        # The SDK reads its key from module state; set it once per process.
        resend.api_key = api_key

    def dispatch(self, message: EmailMessage) -> DispatchResult:
        """
        Hand a message to Resend and classify the outcome.

        Never raises: any SDK or transport error becomes Failed(cause).
        """
        try:
            response = resend.Emails.send(to_resend_params(message))
        except ResendError as e:
            logger.error(f"Resend rejected message to {message.to}: {e}")
            return Failed(cause=str(e))
        except Exception as e:
            logger.error(f"Resend request to {message.to} failed: {e!r}")
            return Failed(cause=repr(e))

        message_id = (response or {}).get("id")
        if not message_id:
            logger.error(f"Resend returned no message id: {response!r}")
            return Failed(cause="No message id returned from provider")

        return Sent(provider_message_id=message_id)

"""
Outbound email models.

EmailMessage is provider-agnostic; only services/composer.py knows how to
turn it into a Resend payload.
"""

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel


class EmailAttachment(BaseModel):
    """A single file attachment as raw bytes (encoded only at dispatch time)."""

    filename: str
    content: bytes


class EmailMessage(BaseModel):
    """A fully composed message, ready to hand to the provider."""

    sender: str
    to: str
    subject: str
    html: str
    attachments: list[EmailAttachment] = []


@dataclass(frozen=True)
class Sent:
    """The provider accepted the message."""
    provider_message_id: str


@dataclass(frozen=True)
class Failed:
    """The provider call failed; ``cause`` is for logs only."""
    cause: str


DispatchResult = Union[Sent, Failed]

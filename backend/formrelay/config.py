"""
Process-wide configuration.

Values are read once from the environment (after loading a ``.env`` file if
present) and never change for the lifetime of the process.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SENDER = "NBTech <no-reply@updates.navabharathtechnologies.com>"
DEFAULT_CONTACT_RECIPIENT = "contact@navabharathtechnologies.com"
DEFAULT_CAREERS_RECIPIENT = "hr@navabharathtechnologies.com"
DEFAULT_PORT = 3000


def _parse_origins(raw: str) -> List[str]:
    """Split a comma-separated CORS_ORIGINS value, dropping blanks and duplicates."""
    seen: set = set()
    origins: List[str] = []
    for origin in raw.split(","):
        origin = origin.strip()
        if origin and origin not in seen:
            seen.add(origin)
            origins.append(origin)
    return origins


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings for the relay."""

    resend_api_key: Optional[str]
    port: int = DEFAULT_PORT
    upload_dir: Path = Path("uploads")
    sender: str = DEFAULT_SENDER
    contact_recipient: str = DEFAULT_CONTACT_RECIPIENT
    careers_recipient: str = DEFAULT_CAREERS_RECIPIENT
    cors_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        RESEND_API_KEY    Resend secret (no default; sending fails without it)
        PORT              Listen port (default 3000)
        UPLOAD_DIR        Scratch directory for resumes (default "uploads")
        EMAIL_FROM        Sender address shown on relayed mail
        CONTACT_EMAIL_TO  Recipient for contact messages
        CAREERS_EMAIL_TO  Recipient for job applications
        CORS_ORIGINS      Comma-separated allowed origins; empty allows all
        """
        port_raw = os.getenv("PORT", "").strip()
        try:
            port = int(port_raw) if port_raw else DEFAULT_PORT
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port_raw!r}")

        return cls(
            resend_api_key=os.getenv("RESEND_API_KEY") or None,
            port=port,
            upload_dir=Path(os.getenv("UPLOAD_DIR") or "uploads"),
            sender=os.getenv("EMAIL_FROM") or DEFAULT_SENDER,
            contact_recipient=os.getenv("CONTACT_EMAIL_TO") or DEFAULT_CONTACT_RECIPIENT,
            careers_recipient=os.getenv("CAREERS_EMAIL_TO") or DEFAULT_CAREERS_RECIPIENT,
            cors_origins=_parse_origins(os.getenv("CORS_ORIGINS", "")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the settings for this process, reading the environment on first use."""
    return Settings.from_env()

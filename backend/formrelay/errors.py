"""
Submission pipeline errors.

Each error carries a human-readable message, a machine-readable error_code
and the HTTP status it maps to. The app-level exception handler in main.py
turns them into the ``{success, message}`` response envelope.
"""


class SubmissionError(Exception):
    """Base class for every failure the submission pipeline reports."""

    status_code = 500

    def __init__(self, message: str, error_code: str):
        super().__init__(message)
        self.error_code = error_code
        self.message = message


class ValidationError(SubmissionError):
    """Caller-correctable problem: missing fields, bad file type, oversized file."""

    status_code = 400


class StorageError(SubmissionError):
    """Writing or reading a transient upload failed."""


class DispatchError(SubmissionError):
    """The email provider rejected the message or could not be reached."""


class ConfigurationError(SubmissionError):
    """The relay cannot send mail because it is not configured (e.g. no API key)."""

    status_code = 503

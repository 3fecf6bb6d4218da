"""
Transient on-disk storage for uploaded resumes.

Handles store, read, and release. A stored file lives only for the request
that stored it; the pipeline releases it on every exit path.
"""

import logging
import re
from pathlib import Path
from typing import BinaryIO, Optional
from uuid import uuid4

from formrelay.errors import StorageError
from formrelay.models.submission import UploadedFile

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def sanitize_filename(filename: str) -> str:
    """Replace spaces, path separators and other special chars with underscores."""
    return re.sub(r'[^\w\-.]', '_', filename) or "upload"


def _copy_stream(stream: BinaryIO, out: BinaryIO, limit: Optional[int]) -> None:
    """Copy in chunks, stopping once `limit` bytes are written (None copies everything)."""
    written = 0
    while limit is None or written < limit:
        size = _CHUNK_SIZE if limit is None else min(_CHUNK_SIZE, limit - written)
        chunk = stream.read(size)
        if not chunk:
            break
        out.write(chunk)
        written += len(chunk)


class TransientFileStore:
    """Scratch directory for uploads, one uniquely named file per upload."""

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def store(
        self,
        stream: BinaryIO,
        original_name: str,
        mime_type: str,
        max_bytes: Optional[int] = None,
    ) -> UploadedFile:
        """
        Write an uploaded stream to the scratch directory.

        Storage path: {upload_dir}/{uuid4 hex}-{sanitized original name}
        The uuid prefix keeps concurrent uploads with the same name apart.

        Args:
            stream: Readable binary file object (e.g. UploadFile.file)
            original_name: Filename supplied by the client
            mime_type: Content type supplied by the client
            max_bytes: When set, writing stops after max_bytes + 1 bytes, so an
                oversized upload is never written in full but its size still
                reads as over the limit

        Returns:
            The stored UploadedFile

        Raises:
            StorageError: If the directory or file cannot be written. Any
                partially written file is removed before raising.
        """
        storage_path = self.upload_dir / f"{uuid4().hex}-{sanitize_filename(original_name)}"

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with storage_path.open("xb") as out:
                _copy_stream(stream, out, None if max_bytes is None else max_bytes + 1)
            size_bytes = storage_path.stat().st_size
        except OSError as e:
            storage_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to store upload: {e}", "storage_failed") from e

        logger.debug(f"Stored upload {original_name!r} at {storage_path} ({size_bytes} bytes)")
        return UploadedFile(
            original_name=original_name,
            mime_type=mime_type,
            size_bytes=size_bytes,
            storage_path=storage_path,
        )

    def read(self, file: UploadedFile) -> bytes:
        """
        Return the stored bytes.

        Raises:
            OSError: If the file is gone (already released) or unreadable
        """
        return Path(file.storage_path).read_bytes()

    def release(self, file: UploadedFile) -> None:
        """
        Delete a stored file. Safe to call more than once.

        Failures are logged, never raised.
        """
        path = Path(file.storage_path)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not delete temporary file {path}: {e}")
            return
        logger.info(f"Temporary file deleted: {path}")

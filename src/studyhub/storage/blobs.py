"""Blob storage for uploaded PDFs.

Local backend writes files under a directory; the hosted backend lives in
studyhub.storage.firebase.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)

# Default uploads location
DEFAULT_UPLOADS_DIR = Path("data/uploads")


class UploadError(Exception):
    """Raised when a file could not be stored."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"File upload failed for '{path}': {reason}")


class BlobStore(Protocol):
    """Operations the admin service needs from object storage."""

    def upload_blob(self, data: bytes, path: str, content_type: str = "application/pdf") -> str: ...

    def delete_blob(self, path: str) -> bool: ...

    def exists(self, path: str) -> bool: ...


class LocalBlobStore:
    """Blob store on the local filesystem."""

    def __init__(self, root: Path | None = None, public_base_url: str | None = None):
        self.root = (root or DEFAULT_UPLOADS_DIR).resolve()
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    def _target(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise UploadError(path, "path escapes the uploads directory")
        return target

    def public_url(self, path: str) -> str:
        """URL under which a stored blob is served."""
        if self.public_base_url:
            return f"{self.public_base_url}/{path}"
        return self._target(path).as_uri()

    def upload_blob(self, data: bytes, path: str, content_type: str = "application/pdf") -> str:
        """Write bytes to <root>/<path> and return the public URL.

        An existing file at the same path is overwritten.
        """
        target = self._target(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise UploadError(path, str(e)) from e

        url = self.public_url(path)
        logger.info("blobs.uploaded", path=path, size=len(data), url=url)
        return url

    def exists(self, path: str) -> bool:
        """Whether a file is stored at path."""
        return self._target(path).is_file()

    def delete_blob(self, path: str) -> bool:
        """Remove a stored file. Returns False if it was not there."""
        target = self._target(path)
        if not target.exists():
            return False
        target.unlink()
        logger.info("blobs.deleted", path=path)
        return True

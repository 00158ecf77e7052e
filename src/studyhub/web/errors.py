"""Mapping of admin service errors to HTTP responses.

- Form problems (missing fields, bad PDF, read-only field): 400
- Unknown document: 404
- Backend rejected the write or upload: 502
"""

import structlog
from fastapi import HTTPException, status

from studyhub.core.admin import DocumentNotFoundError
from studyhub.core.models import UnknownFieldError
from studyhub.core.pdf_inspector import PdfInspectionError
from studyhub.db.store import StoreError
from studyhub.storage.blobs import UploadError
from studyhub.utils.validators import MissingFieldsError

logger = structlog.get_logger(__name__)

ADMIN_ERRORS = (
    MissingFieldsError,
    UnknownFieldError,
    PdfInspectionError,
    DocumentNotFoundError,
    UploadError,
    StoreError,
)


def to_http_error(error: Exception) -> HTTPException:
    """Convert an admin service error to an HTTPException."""
    if isinstance(error, DocumentNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (UploadError, StoreError)):
        code = status.HTTP_502_BAD_GATEWAY
        logger.error("backend_failure", error=str(error))
    else:
        code = status.HTTP_400_BAD_REQUEST

    return HTTPException(status_code=code, detail=str(error))

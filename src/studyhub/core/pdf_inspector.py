"""PDF inspection for uploaded study material.

Responsibilities:
- Reject files that are not readable PDFs
- Reject password-protected PDFs (students could not open them)
- Enforce the configured upload size limit
- Report the page count stored on the document

Dependencies:
- pymupdf (fitz)
"""

from __future__ import annotations

from dataclasses import dataclass

import fitz
import structlog

logger = structlog.get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_MAX_UPLOAD_MB = 25


@dataclass
class PdfInfo:
    """Facts about an uploaded PDF."""

    page_count: int
    size_bytes: int


class PdfInspectionError(Exception):
    """Base exception for rejected uploads."""

    pass


class InvalidPdfError(PdfInspectionError):
    """Raised when the file is not a readable PDF."""

    def __init__(self, file_name: str, reason: str = ""):
        self.file_name = file_name
        detail = f": {reason}" if reason else ""
        super().__init__(f"'{file_name}' is not a valid PDF{detail}")


class ProtectedPdfError(PdfInspectionError):
    """Raised when the PDF is password-protected."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"'{file_name}' is password-protected")


class FileTooLargeError(PdfInspectionError):
    """Raised when the upload exceeds the size limit."""

    def __init__(self, file_name: str, size_bytes: int, max_mb: int):
        self.file_name = file_name
        self.size_bytes = size_bytes
        self.max_mb = max_mb
        super().__init__(
            f"'{file_name}' is {size_bytes / 1_048_576:.1f} MB, limit is {max_mb} MB"
        )


def inspect_pdf(
    data: bytes,
    file_name: str = "upload.pdf",
    max_mb: int = DEFAULT_MAX_UPLOAD_MB,
) -> PdfInfo:
    """Open PDF bytes and return their page count.

    Args:
        data: Raw file contents
        file_name: Original file name, for messages
        max_mb: Upload size limit in megabytes

    Returns:
        PdfInfo with page count and size

    Raises:
        FileTooLargeError: If data exceeds max_mb
        InvalidPdfError: If PyMuPDF cannot open the data as a PDF
        ProtectedPdfError: If the PDF needs a password
    """
    size = len(data)
    if size > max_mb * 1_048_576:
        raise FileTooLargeError(file_name, size, max_mb)

    if not data:
        raise InvalidPdfError(file_name, "file is empty")

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise InvalidPdfError(file_name, str(e)) from e

    try:
        if doc.needs_pass:
            raise ProtectedPdfError(file_name)

        page_count = doc.page_count
        if page_count == 0:
            raise InvalidPdfError(file_name, "document has no pages")
    finally:
        doc.close()

    logger.debug("pdf_inspector.ok", file=file_name, pages=page_count, size=size)
    return PdfInfo(page_count=page_count, size_bytes=size)

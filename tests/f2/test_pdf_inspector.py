"""Tests for PDF upload checks."""

from dataclasses import fields

import fitz
import pytest

from studyhub.core.pdf_inspector import (
    FileTooLargeError,
    InvalidPdfError,
    ProtectedPdfError,
    inspect_pdf,
)


class TestInspectPdf:
    """Tests for inspect_pdf."""

    def test_valid_pdf(self, pdf_bytes):
        info = inspect_pdf(pdf_bytes, "Linear Algebra.pdf")
        assert info.page_count == 3
        assert info.size_bytes == len(pdf_bytes)

    def test_reports_only_size_facts(self, pdf_bytes):
        info = inspect_pdf(pdf_bytes, "Linear Algebra.pdf")
        assert [f.name for f in fields(info)] == ["page_count", "size_bytes"]

    def test_not_a_pdf(self):
        with pytest.raises(InvalidPdfError) as exc:
            inspect_pdf(b"this is plain text, not a pdf", "notes.pdf")
        assert "notes.pdf" in str(exc.value)

    def test_empty_file(self):
        with pytest.raises(InvalidPdfError) as exc:
            inspect_pdf(b"", "empty.pdf")
        assert "empty" in str(exc.value)

    def test_password_protected(self, pdf_factory):
        data = pdf_factory(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            owner_pw="owner",
            user_pw="user",
        )
        with pytest.raises(ProtectedPdfError):
            inspect_pdf(data, "locked.pdf")

    def test_too_large(self, pdf_bytes):
        with pytest.raises(FileTooLargeError) as exc:
            inspect_pdf(pdf_bytes, "big.pdf", max_mb=0)
        assert exc.value.max_mb == 0
        assert exc.value.size_bytes == len(pdf_bytes)

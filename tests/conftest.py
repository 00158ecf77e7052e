"""Pytest configuration for phased testing.

Tests are organized by phase (f1, f2, ..., f5):
- f1: records, validators, uploads aggregator
- f2: document stores, blob stores, PDF checks
- f3: admin service and configuration
- f4: web API
- f5: CLI

Future phase tests are automatically skipped.
"""

import fitz
import pytest

# Current implementation phase
CURRENT_PHASE = 5


def pytest_collection_modifyitems(config, items):
    """Skip tests from phases that haven't been implemented yet."""
    for item in items:
        # Extract phase from path (tests/f2/... -> 2)
        parts = item.fspath.strpath.split("/")
        for part in parts:
            if part.startswith("f") and part[1:].isdigit():
                test_phase = int(part[1:])
                if test_phase > CURRENT_PHASE:
                    item.add_marker(
                        pytest.mark.skip(
                            reason=f"Phase F{test_phase} not yet implemented (current: F{CURRENT_PHASE})"
                        )
                    )
                break


def make_pdf(pages: int = 1, text: str = "Lecture notes", **save_options) -> bytes:
    """Build a small PDF in memory."""
    doc = fitz.open()
    for i in range(pages):
        page = doc.new_page()
        page.insert_text((72, 72), f"{text} - page {i + 1}")
    data = doc.tobytes(**save_options)
    doc.close()
    return data


@pytest.fixture
def pdf_bytes() -> bytes:
    """A valid three-page PDF."""
    return make_pdf(pages=3)


@pytest.fixture
def pdf_factory():
    """Factory for PDFs with custom page count or save options."""
    return make_pdf

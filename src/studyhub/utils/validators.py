"""Data validation helpers.

Conventions for stored documents:
- Required form fields must be present and non-blank before a write
- Blob names: whitespace replaced by "_" ("Linear Algebra.pdf" -> "Linear_Algebra.pdf")
- Timestamps: native datetimes or ISO-8601 strings, naive values are UTC

Functions:
- missing_fields(values, required) -> list[str]: Labels of blank required fields
- safe_file_name(name) -> str: Blob-safe file name
- blob_path(folder, name) -> str: "<folder>/<safe name>"
- parse_timestamp(value) -> datetime | None: Normalize stored timestamps
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

WHITESPACE_PATTERN = re.compile(r"\s")


class MissingFieldsError(Exception):
    """Raised when required form fields are blank or absent."""

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(
            "Please fill in all required fields: " + ", ".join(self.fields)
        )


def missing_fields(values: Mapping[str, Any], required: Mapping[str, str]) -> list[str]:
    """Return labels of required fields that are missing or blank.

    Args:
        values: Attribute name -> submitted value
        required: Attribute name -> human label, in form order

    Returns:
        List of labels (empty when the form is complete)
    """
    missing = []
    for attr, label in required.items():
        value = values.get(attr)
        if value is None:
            missing.append(label)
        elif isinstance(value, str) and not value.strip():
            missing.append(label)
    return missing


def require_fields(values: Mapping[str, Any], required: Mapping[str, str]) -> None:
    """Raise MissingFieldsError if any required field is blank."""
    missing = missing_fields(values, required)
    if missing:
        raise MissingFieldsError(missing)


def safe_file_name(name: str) -> str:
    """Replace whitespace in a file name so it is usable as a blob name.

    Examples:
        "Data Structures.pdf" -> "Data_Structures.pdf"
        "lec 01\tintro.pdf" -> "lec_01_intro.pdf"
    """
    return WHITESPACE_PATTERN.sub("_", name.strip())


def blob_path(folder: str, name: str) -> str:
    """Build the storage path for an uploaded file."""
    return f"{folder}/{safe_file_name(name)}"


def parse_timestamp(value: Any) -> datetime | None:
    """Normalize a stored creation timestamp to an aware UTC datetime.

    Accepts datetimes (including the hosted store's nanosecond subclass)
    and ISO-8601 strings such as "2026-01-02T10:00:00.000Z".

    Returns:
        Aware datetime, or None if the value is missing or unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

"""Tests for validation helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from studyhub.utils.validators import (
    MissingFieldsError,
    blob_path,
    missing_fields,
    parse_timestamp,
    require_fields,
    safe_file_name,
)

REQUIRED = {"title": "Title", "semester": "Semester", "subject": "Subject"}


class TestMissingFields:
    """Tests for required form fields."""

    def test_complete(self):
        values = {"title": "Algebra", "semester": "1st", "subject": "MATH"}
        assert missing_fields(values, REQUIRED) == []

    def test_blank_and_absent_in_form_order(self):
        values = {"subject": "MATH", "title": "   "}
        assert missing_fields(values, REQUIRED) == ["Title", "Semester"]

    def test_non_string_values_count_as_present(self):
        assert missing_fields({"pages": 0}, {"pages": "Pages"}) == []

    def test_require_fields_message(self):
        with pytest.raises(MissingFieldsError) as exc:
            require_fields({"title": "Algebra"}, REQUIRED)
        assert str(exc.value) == "Please fill in all required fields: Semester, Subject"


class TestFileNames:
    """Tests for blob naming."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Linear Algebra.pdf", "Linear_Algebra.pdf"),
            ("lec 01\tintro.pdf", "lec_01_intro.pdf"),
            ("  padded.pdf  ", "padded.pdf"),
            ("plain.pdf", "plain.pdf"),
        ],
    )
    def test_safe_file_name(self, name, expected):
        assert safe_file_name(name) == expected

    def test_blob_path(self):
        assert blob_path("books", "Data Structures.pdf") == "books/Data_Structures.pdf"


class TestParseTimestamp:
    """Tests for timestamp normalization."""

    def test_aware_datetime_unchanged(self):
        value = datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)
        assert parse_timestamp(value) == value

    def test_naive_datetime_is_utc(self):
        parsed = parse_timestamp(datetime(2026, 1, 2, 10, 0))
        assert parsed.tzinfo == timezone.utc

    def test_iso_string_with_z(self):
        parsed = parse_timestamp("2026-01-02T10:00:00.000Z")
        assert parsed == datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)

    def test_iso_string_with_offset(self):
        parsed = parse_timestamp("2026-01-02T16:00:00+06:00")
        assert parsed == datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(hours=6)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12345])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None

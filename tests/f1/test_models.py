"""Tests for record types and the collection registry."""

from datetime import datetime, timezone

import pytest

from studyhub.core.models import (
    COLLECTION_NAMES,
    UPLOAD_COLLECTIONS,
    Assignment,
    Exam,
    Note,
    Notice,
    UnknownCollectionError,
    UnknownFieldError,
    changes_to_fields,
    collection_for,
    editable_fields,
    from_document,
    get_collection,
    to_fields,
    validate_record,
)
from studyhub.db.store import StoredDocument
from studyhub.utils.validators import MissingFieldsError

CREATED = datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)


class TestRegistry:
    """Tests for collection lookup."""

    def test_all_collections_registered(self):
        assert set(COLLECTION_NAMES) == {"books", "notes", "assignments", "notices", "exams"}

    def test_exams_not_in_uploads_feed(self):
        assert UPLOAD_COLLECTIONS == ("books", "notes", "assignments", "notices")

    def test_unknown_collection(self):
        with pytest.raises(UnknownCollectionError) as exc:
            get_collection("students")
        assert "books" in str(exc.value)

    def test_collection_for_record(self):
        assert collection_for(Notice("t", "d", "x")).name == "notices"
        assert collection_for(Exam("s", "d", "t", "3rd")).kind == "Exam"

    def test_editable_fields_exclude_upload_fields(self):
        assert editable_fields(get_collection("books")) == ["title", "semester", "subject"]
        assert "lecture_no" in editable_fields(get_collection("notes"))


class TestSerialization:
    """Tests for stored field names."""

    def test_notice_description_stored_as_desc(self):
        notice = Notice(title="Holiday", description="Campus closed", date="Jan 5", created_at=CREATED)
        fields = to_fields(notice)
        assert fields["desc"] == "Campus closed"
        assert "description" not in fields
        assert fields["createdAt"] == CREATED

    def test_camel_case_wire_names(self):
        note = Note("Intro", "3rd", "CSE", "01", file_url="https://x/y.pdf", pages=4)
        fields = to_fields(note)
        assert fields["lectureNo"] == "01"
        assert fields["fileUrl"] == "https://x/y.pdf"
        assert "createdAt" not in fields

    def test_assignment_due_date(self):
        fields = to_fields(Assignment("Lab 1", "CSE", "Jan 20, 2026"))
        assert fields["dueDate"] == "Jan 20, 2026"
        assert fields["description"] == ""

    def test_from_document(self):
        doc = StoredDocument.from_fields(
            "abc",
            {"title": "Holiday", "desc": "Campus closed", "date": "Jan 5", "createdAt": CREATED},
        )
        notice = from_document("notices", doc)
        assert isinstance(notice, Notice)
        assert notice.id == "abc"
        assert notice.description == "Campus closed"
        assert notice.created_at == CREATED

    def test_from_document_missing_fields_default_blank(self):
        doc = StoredDocument.from_fields("b1", {"title": "Only Title"})
        book = from_document("books", doc)
        assert book.semester == ""
        assert book.file_url == ""
        assert book.pages is None
        assert book.created_at is None

    def test_from_document_iso_timestamp(self):
        doc = StoredDocument.from_fields(
            "b1", {"title": "Old", "createdAt": "2026-01-02T10:00:00.000Z"}
        )
        assert from_document("books", doc).created_at == CREATED


class TestValidation:
    """Tests for required-field checks."""

    def test_complete_record_passes(self):
        validate_record(Assignment("Lab 1", "CSE", "Jan 20"))

    def test_blank_required_fields_listed(self):
        with pytest.raises(MissingFieldsError) as exc:
            validate_record(Exam(subject="OS", date="", time="  ", semester="5th"))
        assert exc.value.fields == ["Date", "Time"]

    def test_optional_fields_may_be_blank(self):
        validate_record(Exam(subject="OS", date="12 March", time="10 AM", semester="5th"))
        validate_record(Assignment("Lab", "CSE", "Jan 20", description=""))

    def test_room_display(self):
        assert Exam("OS", "12 March", "10 AM", "5th").room_display == "TBA"
        assert Exam("OS", "12 March", "10 AM", "5th", room="301").room_display == "301"


class TestChangesToFields:
    """Tests for edit form mapping."""

    def test_maps_to_wire_names(self):
        fields = changes_to_fields(get_collection("notices"), {"description": "New text"})
        assert fields == {"desc": "New text"}

    def test_rejects_read_only(self):
        with pytest.raises(UnknownFieldError) as exc:
            changes_to_fields(get_collection("books"), {"file_url": "x", "title": "y"})
        assert exc.value.names == ["file_url"]

    def test_rejects_unknown(self):
        with pytest.raises(UnknownFieldError):
            changes_to_fields(get_collection("exams"), {"invigilator": "Dr. X"})

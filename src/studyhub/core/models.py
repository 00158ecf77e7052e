"""Study hub record types and the collection registry.

Collections (stored name -> record type):
- books: Book
- notes: Note
- assignments: Assignment
- notices: Notice
- exams: Exam

Attributes are snake_case; the stored documents keep the field names the
mobile clients already read (fileUrl, lectureNo, dueDate, desc, createdAt).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from studyhub.db.store import CREATED_AT_FIELD, StoredDocument
from studyhub.utils.validators import parse_timestamp, require_fields


class UnknownCollectionError(Exception):
    """Raised when a collection name is not one of the managed collections."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Unknown collection '{name}'. Expected one of: {', '.join(COLLECTION_NAMES)}"
        )


class UnknownFieldError(Exception):
    """Raised when an edit names a field that can't be changed."""

    def __init__(self, collection: str, names: list[str]):
        self.collection = collection
        self.names = names
        super().__init__(
            f"Fields not editable on {collection}: {', '.join(names)}"
        )


@dataclass
class Book:
    """A PDF textbook."""

    title: str
    semester: str
    subject: str
    file_url: str = ""
    pages: int | None = None
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class Note:
    """Lecture notes uploaded as a PDF."""

    title: str
    semester: str
    subject: str
    lecture_no: str
    file_url: str = ""
    pages: int | None = None
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class Assignment:
    """A posted assignment."""

    title: str
    subject: str
    due_date: str
    description: str = ""
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class Notice:
    """A notice board entry."""

    title: str
    description: str
    date: str
    id: str | None = None
    created_at: datetime | None = None


@dataclass
class Exam:
    """An exam routine entry."""

    subject: str
    date: str
    time: str
    semester: str
    room: str = ""
    id: str | None = None
    created_at: datetime | None = None

    @property
    def room_display(self) -> str:
        """Room shown on the routine, TBA until assigned."""
        return self.room or "TBA"


Record = Union[Book, Note, Assignment, Notice, Exam]


@dataclass(frozen=True)
class CollectionInfo:
    """How one record type is stored."""

    name: str
    kind: str
    record_type: type
    # attribute -> stored field name
    wire_names: dict[str, str]
    # attribute -> form label, in form order
    required: dict[str, str]
    has_file: bool = False
    # attributes set by uploads, never by edits
    readonly: tuple[str, ...] = ()


COLLECTIONS: dict[str, CollectionInfo] = {
    "books": CollectionInfo(
        name="books",
        kind="Book",
        record_type=Book,
        wire_names={
            "title": "title",
            "semester": "semester",
            "subject": "subject",
            "file_url": "fileUrl",
            "pages": "pages",
        },
        required={"title": "Title", "semester": "Semester", "subject": "Subject"},
        has_file=True,
        readonly=("file_url", "pages"),
    ),
    "notes": CollectionInfo(
        name="notes",
        kind="Note",
        record_type=Note,
        wire_names={
            "title": "title",
            "semester": "semester",
            "subject": "subject",
            "lecture_no": "lectureNo",
            "file_url": "fileUrl",
            "pages": "pages",
        },
        required={
            "title": "Title",
            "semester": "Semester",
            "subject": "Subject",
            "lecture_no": "Lecture No",
        },
        has_file=True,
        readonly=("file_url", "pages"),
    ),
    "assignments": CollectionInfo(
        name="assignments",
        kind="Assignment",
        record_type=Assignment,
        wire_names={
            "title": "title",
            "subject": "subject",
            "due_date": "dueDate",
            "description": "description",
        },
        required={"title": "Title", "subject": "Subject", "due_date": "Due Date"},
    ),
    "notices": CollectionInfo(
        name="notices",
        kind="Notice",
        record_type=Notice,
        wire_names={"title": "title", "description": "desc", "date": "date"},
        required={"title": "Title", "description": "Description", "date": "Date"},
    ),
    "exams": CollectionInfo(
        name="exams",
        kind="Exam",
        record_type=Exam,
        wire_names={
            "subject": "subject",
            "date": "date",
            "time": "time",
            "semester": "semester",
            "room": "room",
        },
        required={
            "subject": "Subject",
            "date": "Date",
            "time": "Time",
            "semester": "Semester",
        },
    ),
}

COLLECTION_NAMES = tuple(COLLECTIONS)

# Collections merged into the recent uploads feed, in merge order
UPLOAD_COLLECTIONS = ("books", "notes", "assignments", "notices")


def get_collection(name: str) -> CollectionInfo:
    """Look up a collection by stored name."""
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise UnknownCollectionError(name) from None


def collection_for(record: Record) -> CollectionInfo:
    """Find the collection a record belongs to."""
    for info in COLLECTIONS.values():
        if isinstance(record, info.record_type):
            return info
    raise UnknownCollectionError(type(record).__name__)


def editable_fields(info: CollectionInfo) -> list[str]:
    """Attributes an edit form may change."""
    return [a for a in info.wire_names if a not in info.readonly]


def validate_record(record: Record) -> None:
    """Raise MissingFieldsError if a required field is blank."""
    info = collection_for(record)
    values = {attr: getattr(record, attr) for attr in info.required}
    require_fields(values, info.required)


def to_fields(record: Record) -> dict[str, Any]:
    """Serialize a record to stored fields (without its ID)."""
    info = collection_for(record)
    result = {wire: getattr(record, attr) for attr, wire in info.wire_names.items()}
    if record.created_at is not None:
        result[CREATED_AT_FIELD] = record.created_at
    return result


def changes_to_fields(info: CollectionInfo, changes: dict[str, Any]) -> dict[str, Any]:
    """Map edited attributes to stored field names.

    Raises:
        UnknownFieldError: If a change names a read-only or unknown attribute
    """
    allowed = editable_fields(info)
    bad = [name for name in changes if name not in allowed]
    if bad:
        raise UnknownFieldError(info.name, bad)
    return {info.wire_names[attr]: value for attr, value in changes.items()}


def from_document(collection: str, doc: StoredDocument) -> Record:
    """Build a typed record from a stored document.

    Missing text fields become empty strings so old documents still load.
    """
    info = get_collection(collection)

    kwargs: dict[str, Any] = {}
    for attr, wire in info.wire_names.items():
        value = doc.fields.get(wire)
        if value is None and attr != "pages":
            value = ""
        kwargs[attr] = value

    return info.record_type(
        id=doc.id,
        created_at=doc.created_at or parse_timestamp(doc.fields.get(CREATED_AT_FIELD)),
        **kwargs,
    )


def utc_now() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)

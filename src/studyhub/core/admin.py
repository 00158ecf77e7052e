"""Admin service: the operations behind every console screen.

Responsibilities:
- List, fetch, create, edit and delete records in every collection
- Upload PDFs for books and notes before writing their documents
- Dashboard summary (collection counts + most recent uploads)
- Uploads feed for the global search

Both the web API and the CLI call StudyHubAdmin; nothing else talks to
the document or blob stores.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from studyhub.config.app_config import AppConfig, ConfigError, load_app_config
from studyhub.core.aggregator import UploadItem, UploadsFeed, aggregate_uploads
from studyhub.core.models import (
    UPLOAD_COLLECTIONS,
    Assignment,
    Book,
    Exam,
    Note,
    Notice,
    Record,
    changes_to_fields,
    collection_for,
    from_document,
    get_collection,
    to_fields,
    utc_now,
    validate_record,
)
from studyhub.core.pdf_inspector import PDF_CONTENT_TYPE, inspect_pdf
from studyhub.db.store import DocumentStore, SqliteDocumentStore, StoreError
from studyhub.storage.blobs import BlobStore, LocalBlobStore
from studyhub.utils.validators import blob_path, require_fields

logger = structlog.get_logger(__name__)

FILE_FIELD_LABEL = "PDF file"


class DocumentNotFoundError(Exception):
    """Raised when a document ID doesn't exist in its collection."""

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"No document '{doc_id}' in {collection}")


@dataclass
class UploadedFile:
    """A file picked in an upload form."""

    name: str
    data: bytes
    content_type: str = PDF_CONTENT_TYPE

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        """Read a file from disk."""
        return cls(name=path.name, data=path.read_bytes())


@dataclass
class DashboardSummary:
    """Counts per upload collection and the latest uploads."""

    stats: dict[str, int] = field(default_factory=dict)
    recent: list[UploadItem] = field(default_factory=list)


class StudyHubAdmin:
    """CRUD over the study hub collections."""

    def __init__(
        self,
        store: DocumentStore,
        blobs: BlobStore,
        recent_limit: int = 5,
        max_upload_mb: int = 25,
    ):
        self.store = store
        self.blobs = blobs
        self.recent_limit = recent_limit
        self.max_upload_mb = max_upload_mb

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_records(self, collection: str) -> list[Record]:
        """List every record of a collection, newest first.

        Records without a creation time go last; ties keep store order.
        """
        get_collection(collection)
        docs = self.store.list_documents(collection)
        logger.info("admin.listed", collection=collection, count=len(docs))
        records = [from_document(collection, d) for d in docs]
        dated = sorted(
            (r for r in records if r.created_at is not None),
            key=lambda r: r.created_at,
            reverse=True,
        )
        return dated + [r for r in records if r.created_at is None]

    def get_record(self, collection: str, doc_id: str) -> Record:
        """Fetch one record.

        Raises:
            DocumentNotFoundError: If the ID doesn't exist
        """
        get_collection(collection)
        doc = self.store.get_document(collection, doc_id)
        if doc is None:
            raise DocumentNotFoundError(collection, doc_id)
        return from_document(collection, doc)

    # -------------------------------------------------------------------------
    # Creates
    # -------------------------------------------------------------------------

    def _insert(self, record: Record) -> Record:
        """Validate, stamp createdAt and write a new record."""
        validate_record(record)
        info = collection_for(record)
        record.created_at = utc_now()
        record.id = self.store.create_document(info.name, to_fields(record))
        logger.info("admin.created", collection=info.name, doc_id=record.id)
        return record

    def _insert_with_file(self, record: Book | Note, file: UploadedFile | None) -> Book | Note:
        """Upload the PDF, then write the document pointing at it.

        Nothing is written if the upload fails. If the document write fails,
        the blob is removed again unless it was already stored before this
        call (another record may point at it).
        """
        info = collection_for(record)
        required = {**info.required, "file": FILE_FIELD_LABEL}
        values: dict[str, Any] = {attr: getattr(record, attr) for attr in info.required}
        values["file"] = file
        require_fields(values, required)

        pdf = inspect_pdf(file.data, file.name, max_mb=self.max_upload_mb)
        path = blob_path(info.name, file.name)
        replaced = self.blobs.exists(path)
        record.file_url = self.blobs.upload_blob(file.data, path, PDF_CONTENT_TYPE)
        record.pages = pdf.page_count

        try:
            return self._insert(record)
        except StoreError:
            if replaced:
                logger.warning("admin.upload_kept", collection=info.name, path=path)
            else:
                logger.warning("admin.rollback_upload", collection=info.name, path=path)
                self.blobs.delete_blob(path)
            raise

    def create_book(
        self,
        title: str,
        semester: str,
        subject: str,
        file: UploadedFile | None,
    ) -> Book:
        """Upload a book PDF and save the book."""
        book = Book(title=title, semester=semester, subject=subject)
        return self._insert_with_file(book, file)

    def create_note(
        self,
        title: str,
        semester: str,
        subject: str,
        lecture_no: str,
        file: UploadedFile | None,
    ) -> Note:
        """Upload lecture notes and save them."""
        note = Note(title=title, semester=semester, subject=subject, lecture_no=lecture_no)
        return self._insert_with_file(note, file)

    def create_assignment(
        self, title: str, subject: str, due_date: str, description: str = ""
    ) -> Assignment:
        """Post a new assignment."""
        return self._insert(
            Assignment(title=title, subject=subject, due_date=due_date, description=description)
        )

    def create_notice(self, title: str, description: str, date: str) -> Notice:
        """Publish a notice."""
        return self._insert(Notice(title=title, description=description, date=date))

    def create_exam(
        self, subject: str, date: str, time: str, semester: str, room: str = ""
    ) -> Exam:
        """Schedule an exam."""
        return self._insert(
            Exam(subject=subject, date=date, time=time, semester=semester, room=room)
        )

    # -------------------------------------------------------------------------
    # Edits and deletes
    # -------------------------------------------------------------------------

    def update_record(self, collection: str, doc_id: str, changes: dict[str, Any]) -> Record:
        """Apply an edit form to an existing record.

        Only the changed fields are written; createdAt is kept.

        Raises:
            UnknownFieldError: If a change names a read-only or unknown field
            MissingFieldsError: If the edit blanks a required field
            DocumentNotFoundError: If the ID doesn't exist
        """
        info = get_collection(collection)
        fields = changes_to_fields(info, changes)
        existing = self.get_record(collection, doc_id)

        updated = dataclasses.replace(existing, **changes)
        validate_record(updated)

        if not fields:
            return existing

        if not self.store.update_document(collection, doc_id, fields):
            raise DocumentNotFoundError(collection, doc_id)

        logger.info("admin.updated", collection=collection, doc_id=doc_id, fields=sorted(fields))
        return updated

    def delete_record(self, collection: str, doc_id: str) -> None:
        """Delete a record.

        Raises:
            DocumentNotFoundError: If the ID doesn't exist
        """
        get_collection(collection)
        if not self.store.delete_document(collection, doc_id):
            raise DocumentNotFoundError(collection, doc_id)
        logger.info("admin.deleted", collection=collection, doc_id=doc_id)

    # -------------------------------------------------------------------------
    # Dashboard and uploads feed
    # -------------------------------------------------------------------------

    def _upload_documents(self) -> dict[str, list]:
        return {name: self.store.list_documents(name) for name in UPLOAD_COLLECTIONS}

    def dashboard(self, limit: int | None = None) -> DashboardSummary:
        """Counts per upload collection plus the most recent uploads."""
        docs = self._upload_documents()
        recent = aggregate_uploads(
            docs["books"],
            docs["notes"],
            docs["assignments"],
            docs["notices"],
            limit=self.recent_limit if limit is None else limit,
        )
        stats = {name: len(items) for name, items in docs.items()}
        logger.info("admin.dashboard", **stats)
        return DashboardSummary(stats=stats, recent=recent)

    def uploads_feed(self, search: str | None = None) -> UploadsFeed:
        """Every upload, newest first, optionally pre-filtered."""
        docs = self._upload_documents()
        items = aggregate_uploads(
            docs["books"], docs["notes"], docs["assignments"], docs["notices"]
        )
        return UploadsFeed(items=items, query=search or "")


# =============================================================================
# SERVICE CONSTRUCTION
# =============================================================================


def build_admin(config: AppConfig | None = None) -> StudyHubAdmin:
    """Create the admin service for the configured backend.

    Raises:
        ConfigError: If the firebase backend is missing its bucket
    """
    config = config or load_app_config()

    if config.backend == "firebase":
        from studyhub.db.firestore_store import FirestoreDocumentStore
        from studyhub.storage.firebase import FirebaseBlobStore

        if not config.firebase.storage_bucket:
            raise ConfigError("firebase.storage_bucket is required for the firebase backend")

        credentials = config.firebase.get_credentials_path()
        store: DocumentStore = FirestoreDocumentStore(
            project_id=config.firebase.project_id,
            credentials_path=credentials,
        )
        blobs: BlobStore = FirebaseBlobStore(
            bucket_name=config.firebase.storage_bucket,
            project_id=config.firebase.project_id,
            credentials_path=credentials,
        )
    else:
        store = SqliteDocumentStore(Path(config.local.db_path))
        blobs = LocalBlobStore(
            Path(config.local.uploads_dir),
            public_base_url=config.local.public_base_url,
        )

    logger.info("admin.ready", backend=config.backend)
    return StudyHubAdmin(
        store,
        blobs,
        recent_limit=config.dashboard.recent_limit,
        max_upload_mb=config.dashboard.max_upload_mb,
    )


# Module-level instance shared by the web API and CLI
_admin: StudyHubAdmin | None = None


def get_admin() -> StudyHubAdmin:
    """Get the shared admin service, building it on first use."""
    global _admin
    if _admin is None:
        _admin = build_admin()
    return _admin


def reset_admin() -> None:
    """Drop the shared admin service (e.g. after changing config)."""
    global _admin
    _admin = None

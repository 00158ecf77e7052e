"""Document store interface and the local SQLite implementation.

Every collection (books, notes, assignments, notices, exams) is read and
written through the same five calls, whichever backend is configured.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import structlog

from studyhub.db.database import get_db, init_db
from studyhub.utils.validators import parse_timestamp

logger = structlog.get_logger(__name__)

CREATED_AT_FIELD = "createdAt"


class StoreError(Exception):
    """Raised when the backend rejects a read or write."""

    def __init__(self, operation: str, collection: str, reason: str):
        self.operation = operation
        self.collection = collection
        self.reason = reason
        super().__init__(f"Document store {operation} on '{collection}' failed: {reason}")


@dataclass
class StoredDocument:
    """A document as returned by the store."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @classmethod
    def from_fields(cls, doc_id: str, fields: dict[str, Any]) -> "StoredDocument":
        """Build a StoredDocument, reading created_at from the fields."""
        return cls(
            id=doc_id,
            fields=fields,
            created_at=parse_timestamp(fields.get(CREATED_AT_FIELD)),
        )


class DocumentStore(Protocol):
    """Operations the admin service needs from a document database."""

    def list_documents(self, collection: str) -> list[StoredDocument]: ...

    def get_document(self, collection: str, doc_id: str) -> StoredDocument | None: ...

    def create_document(self, collection: str, fields: dict[str, Any]) -> str: ...

    def update_document(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool: ...

    def delete_document(self, collection: str, doc_id: str) -> bool: ...


def _json_default(value: Any) -> Any:
    """Serialize datetimes as ISO-8601 strings."""
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class SqliteDocumentStore:
    """Local document store on a single SQLite file."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = init_db(db_path)

    def list_documents(self, collection: str) -> list[StoredDocument]:
        """List documents of a collection in insertion order."""
        try:
            with get_db(self.db_path) as conn:
                rows = conn.execute(
                    "SELECT doc_id, fields FROM documents WHERE collection = ? ORDER BY seq",
                    (collection,),
                ).fetchall()
        except sqlite3.Error as e:
            raise StoreError("list", collection, str(e)) from e

        logger.debug("store.listed", collection=collection, count=len(rows))
        return [_row_to_document(row) for row in rows]

    def get_document(self, collection: str, doc_id: str) -> StoredDocument | None:
        """Get a document by ID, or None if absent."""
        try:
            with get_db(self.db_path) as conn:
                row = conn.execute(
                    "SELECT doc_id, fields FROM documents WHERE collection = ? AND doc_id = ?",
                    (collection, doc_id),
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError("get", collection, str(e)) from e

        if row is None:
            return None
        return _row_to_document(row)

    def create_document(self, collection: str, fields: dict[str, Any]) -> str:
        """Insert a document and return its generated ID."""
        doc_id = uuid.uuid4().hex[:20]
        try:
            with get_db(self.db_path) as conn:
                conn.execute(
                    "INSERT INTO documents (collection, doc_id, fields) VALUES (?, ?, ?)",
                    (collection, doc_id, json.dumps(fields, default=_json_default)),
                )
        except (sqlite3.Error, TypeError) as e:
            raise StoreError("create", collection, str(e)) from e

        logger.debug("store.created", collection=collection, doc_id=doc_id)
        return doc_id

    def update_document(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        """Merge fields into an existing document.

        Returns:
            True if updated, False if the document doesn't exist
        """
        try:
            with get_db(self.db_path) as conn:
                row = conn.execute(
                    "SELECT fields FROM documents WHERE collection = ? AND doc_id = ?",
                    (collection, doc_id),
                ).fetchone()
                if row is None:
                    return False

                merged = json.loads(row["fields"])
                merged.update(fields)
                conn.execute(
                    "UPDATE documents SET fields = ? WHERE collection = ? AND doc_id = ?",
                    (json.dumps(merged, default=_json_default), collection, doc_id),
                )
        except (sqlite3.Error, TypeError) as e:
            raise StoreError("update", collection, str(e)) from e

        logger.debug("store.updated", collection=collection, doc_id=doc_id)
        return True

    def delete_document(self, collection: str, doc_id: str) -> bool:
        """Delete a document.

        Returns:
            True if deleted, False if not found
        """
        try:
            with get_db(self.db_path) as conn:
                cursor = conn.execute(
                    "DELETE FROM documents WHERE collection = ? AND doc_id = ?",
                    (collection, doc_id),
                )
        except sqlite3.Error as e:
            raise StoreError("delete", collection, str(e)) from e

        deleted = cursor.rowcount > 0
        if deleted:
            logger.debug("store.deleted", collection=collection, doc_id=doc_id)

        return deleted


def _row_to_document(row) -> StoredDocument:
    """Convert database row to StoredDocument."""
    return StoredDocument.from_fields(row["doc_id"], json.loads(row["fields"]))

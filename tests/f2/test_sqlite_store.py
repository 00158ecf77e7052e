"""Tests for the local SQLite document store."""

from datetime import datetime, timezone
from unittest.mock import patch
import sqlite3

import pytest

from studyhub.db.database import get_db, init_db
from studyhub.db.store import SqliteDocumentStore, StoreError


@pytest.fixture
def store(tmp_path):
    """Store on a temporary database file."""
    return SqliteDocumentStore(tmp_path / "db" / "studyhub.db")


class TestInitDb:
    """Tests for database setup."""

    def test_creates_parent_and_table(self, tmp_path):
        db_path = init_db(tmp_path / "nested" / "studyhub.db")
        assert db_path.exists()

        with get_db(db_path) as conn:
            tables = [r["name"] for r in conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )]
        assert "documents" in tables

    def test_idempotent(self, tmp_path):
        db_path = tmp_path / "studyhub.db"
        init_db(db_path)
        init_db(db_path)
        assert db_path.exists()


class TestSqliteDocumentStore:
    """Tests for CRUD operations."""

    def test_create_and_get(self, store):
        created = datetime(2026, 1, 2, 10, 0, tzinfo=timezone.utc)
        doc_id = store.create_document("books", {"title": "Algebra", "createdAt": created})

        doc = store.get_document("books", doc_id)
        assert doc is not None
        assert doc.id == doc_id
        assert doc.fields["title"] == "Algebra"
        assert doc.created_at == created

    def test_ids_are_unique(self, store):
        ids = {store.create_document("notes", {"title": f"N{i}"}) for i in range(5)}
        assert len(ids) == 5

    def test_get_missing(self, store):
        assert store.get_document("books", "nope") is None

    def test_list_in_insertion_order(self, store):
        for title in ["First", "Second", "Third"]:
            store.create_document("notices", {"title": title})

        titles = [d.fields["title"] for d in store.list_documents("notices")]
        assert titles == ["First", "Second", "Third"]

    def test_collections_are_separate(self, store):
        store.create_document("books", {"title": "Book"})
        assert store.list_documents("notes") == []

    def test_same_id_lookup_is_per_collection(self, store):
        doc_id = store.create_document("books", {"title": "Book"})
        assert store.get_document("notes", doc_id) is None

    def test_update_merges_fields(self, store):
        doc_id = store.create_document("exams", {"subject": "OS", "room": ""})

        assert store.update_document("exams", doc_id, {"room": "301"}) is True

        doc = store.get_document("exams", doc_id)
        assert doc.fields == {"subject": "OS", "room": "301"}

    def test_update_missing(self, store):
        assert store.update_document("exams", "nope", {"room": "301"}) is False

    def test_delete(self, store):
        doc_id = store.create_document("assignments", {"title": "Lab"})

        assert store.delete_document("assignments", doc_id) is True
        assert store.get_document("assignments", doc_id) is None
        assert store.delete_document("assignments", doc_id) is False

    def test_unserializable_value_raises_store_error(self, store):
        with pytest.raises(StoreError) as exc:
            store.create_document("books", {"title": object()})
        assert exc.value.operation == "create"
        assert exc.value.collection == "books"

    def test_database_error_wrapped(self, store):
        with patch("studyhub.db.store.get_db", side_effect=sqlite3.OperationalError("disk I/O error")):
            with pytest.raises(StoreError) as exc:
                store.list_documents("books")
        assert "disk I/O error" in str(exc.value)

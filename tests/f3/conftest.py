"""Fixtures for F3 tests - admin service and configuration."""

from datetime import datetime, timedelta, timezone

import pytest

from studyhub.core.admin import StudyHubAdmin
from studyhub.db.store import SqliteDocumentStore
from studyhub.storage.blobs import LocalBlobStore


@pytest.fixture
def clock(monkeypatch):
    """Make each created record one minute newer than the previous one."""
    start = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))

    def fake_now():
        return start + timedelta(minutes=next(ticks))

    monkeypatch.setattr("studyhub.core.admin.utc_now", fake_now)
    return start


@pytest.fixture
def admin(tmp_path, clock) -> StudyHubAdmin:
    """Admin service over a temporary SQLite file and uploads directory."""
    store = SqliteDocumentStore(tmp_path / "db" / "studyhub.db")
    blobs = LocalBlobStore(tmp_path / "uploads")
    return StudyHubAdmin(store, blobs, recent_limit=5, max_upload_mb=5)

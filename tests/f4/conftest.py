"""Fixtures for F4 tests - web API."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from studyhub.core.admin import StudyHubAdmin, get_admin
from studyhub.db.store import SqliteDocumentStore
from studyhub.storage.blobs import LocalBlobStore
from studyhub.web.api import create_app


@pytest.fixture
def admin(tmp_path, monkeypatch) -> StudyHubAdmin:
    """Admin service on temp storage with a ticking clock."""
    start = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(
        "studyhub.core.admin.utc_now",
        lambda: start + timedelta(minutes=next(ticks)),
    )
    return StudyHubAdmin(
        SqliteDocumentStore(tmp_path / "db" / "studyhub.db"),
        LocalBlobStore(tmp_path / "uploads", public_base_url="http://testserver/files"),
    )


@pytest.fixture
def client(admin):
    """Test client with the admin dependency pointed at temp storage."""
    app = create_app()
    app.dependency_overrides[get_admin] = lambda: admin
    return TestClient(app)

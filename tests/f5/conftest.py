"""Fixtures for F5 tests - CLI."""

from datetime import datetime, timedelta, timezone

import pytest

from studyhub.config.app_config import BACKEND_ENV, clear_config_cache
from studyhub.core.admin import StudyHubAdmin, get_admin, reset_admin


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the CLI inside a temp project dir with default local config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(BACKEND_ENV, raising=False)
    start = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(
        "studyhub.core.admin.utc_now",
        lambda: start + timedelta(minutes=next(ticks)),
    )
    clear_config_cache()
    reset_admin()
    yield tmp_path
    clear_config_cache()
    reset_admin()


@pytest.fixture
def admin(workdir) -> StudyHubAdmin:
    """The same admin instance the CLI commands will use."""
    return get_admin()


@pytest.fixture
def pdf_path(workdir, pdf_bytes):
    """A PDF on disk with a space in its name."""
    path = workdir / "Linear Algebra.pdf"
    path.write_bytes(pdf_bytes)
    return path

"""Tests for app configuration and service construction (F3).

Tests the configuration loading, backend selection, and fallbacks.
"""

from dataclasses import fields
from unittest.mock import patch

import pytest

from studyhub.config.app_config import (
    BACKEND_ENV,
    AppConfig,
    ConfigError,
    clear_config_cache,
    load_app_config,
)
from studyhub.core import admin as admin_module
from studyhub.core.admin import StudyHubAdmin, build_admin, get_admin, reset_admin
from studyhub.db.firestore_store import FirestoreDocumentStore
from studyhub.db.store import SqliteDocumentStore
from studyhub.storage.blobs import LocalBlobStore
from studyhub.storage.firebase import FirebaseBlobStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the loader at a temp config file and clear caches around each test."""
    config_file = tmp_path / "config" / "studyhub_config_v1.yaml"
    monkeypatch.setattr("studyhub.config.app_config.CONFIG_FILE", config_file)
    monkeypatch.delenv(BACKEND_ENV, raising=False)
    clear_config_cache()
    reset_admin()
    yield config_file
    clear_config_cache()
    reset_admin()


def write_config(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_defaults_without_file(self):
        """Falls back to the local backend."""
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert config.backend == "local"
        assert config.local.db_path == "db/studyhub.db"
        assert config.dashboard.recent_limit == 5
        assert config.dashboard.max_upload_mb == 25

    def test_only_used_sections(self):
        assert [f.name for f in fields(AppConfig)] == ["backend", "firebase", "local", "dashboard"]

    def test_load_from_yaml(self, isolated_config):
        write_config(
            isolated_config,
            """
backend: firebase
firebase:
  project_id: studyhub-demo
  storage_bucket: studyhub-demo.appspot.com
dashboard:
  recent_limit: 8
""",
        )
        config = load_app_config()

        assert config.backend == "firebase"
        assert config.firebase.project_id == "studyhub-demo"
        assert config.firebase.storage_bucket == "studyhub-demo.appspot.com"
        assert config.dashboard.recent_limit == 8
        assert config.dashboard.max_upload_mb == 25
        assert config.local.uploads_dir == "data/uploads"

    def test_empty_file_uses_defaults(self, isolated_config):
        write_config(isolated_config, "")
        assert load_app_config().backend == "local"

    def test_cached(self, isolated_config):
        first = load_app_config()
        write_config(isolated_config, "backend: firebase\n")
        assert load_app_config() is first
        assert load_app_config(force_reload=True).backend == "firebase"

    def test_env_overrides_backend(self, monkeypatch):
        monkeypatch.setenv(BACKEND_ENV, "firebase")
        assert load_app_config().backend == "firebase"

    def test_unknown_backend(self, isolated_config):
        write_config(isolated_config, "backend: mongodb\n")
        with pytest.raises(ConfigError) as exc:
            load_app_config()
        assert "mongodb" in str(exc.value)

    def test_credentials_path_from_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/secrets/sa.json")
        config = load_app_config()
        assert config.firebase.get_credentials_path() == "/secrets/sa.json"


class TestBuildAdmin:
    """Tests for backend selection."""

    def test_local_backend(self, tmp_path):
        config = AppConfig()
        config.local.db_path = str(tmp_path / "db" / "studyhub.db")
        config.local.uploads_dir = str(tmp_path / "uploads")
        config.dashboard.recent_limit = 3

        admin = build_admin(config)

        assert isinstance(admin, StudyHubAdmin)
        assert isinstance(admin.store, SqliteDocumentStore)
        assert isinstance(admin.blobs, LocalBlobStore)
        assert admin.recent_limit == 3
        assert (tmp_path / "db" / "studyhub.db").exists()

    def test_firebase_requires_bucket(self):
        config = AppConfig(backend="firebase")
        with pytest.raises(ConfigError):
            build_admin(config)

    def test_firebase_backend(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
        config = AppConfig(backend="firebase")
        config.firebase.project_id = "studyhub-demo"
        config.firebase.storage_bucket = "studyhub-demo.appspot.com"

        with patch("studyhub.db.firestore_store.firestore.Client") as fs_client, \
                patch("studyhub.storage.firebase.storage.Client") as gcs_client:
            admin = build_admin(config)

        assert isinstance(admin.store, FirestoreDocumentStore)
        assert isinstance(admin.blobs, FirebaseBlobStore)
        fs_client.assert_called_once_with(project="studyhub-demo")
        gcs_client.assert_called_once_with(project="studyhub-demo")
        gcs_client.return_value.bucket.assert_called_once_with("studyhub-demo.appspot.com")

    def test_firebase_service_account(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "/secrets/sa.json")
        config = AppConfig(backend="firebase")
        config.firebase.storage_bucket = "bucket"

        with patch("studyhub.db.firestore_store.firestore.Client") as fs_client, \
                patch("studyhub.storage.firebase.storage.Client") as gcs_client:
            build_admin(config)

        fs_client.from_service_account_json.assert_called_once_with(
            "/secrets/sa.json", project=None
        )
        gcs_client.from_service_account_json.assert_called_once_with(
            "/secrets/sa.json", project=None
        )


class TestGetAdmin:
    """Tests for the shared instance."""

    def test_shared_until_reset(self, monkeypatch, tmp_path):
        built = []

        def fake_build(config=None):
            built.append(config)
            return object()

        monkeypatch.setattr(admin_module, "build_admin", fake_build)

        first = get_admin()
        assert get_admin() is first
        reset_admin()
        assert get_admin() is not first
        assert len(built) == 2

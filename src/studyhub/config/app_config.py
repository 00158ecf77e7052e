"""Application configuration loader.

Loads centralized configuration from data/config/studyhub_config_v1.yaml,
falling back to built-in defaults (local SQLite + local uploads directory).

Usage:
    from studyhub.config.app_config import load_app_config

    config = load_app_config()
    if config.backend == "firebase":
        bucket = config.firebase.storage_bucket
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/studyhub_config_v1.yaml")

# Overrides the configured backend when set
BACKEND_ENV = "STUDYHUB_BACKEND"

BACKENDS = ("local", "firebase")


class ConfigError(Exception):
    """Raised when the configuration can't be used."""

    pass


@dataclass
class FirebaseConfig:
    """Hosted backend settings."""

    project_id: str | None = None
    storage_bucket: str | None = None
    credentials_env: str | None = "GOOGLE_APPLICATION_CREDENTIALS"

    def get_credentials_path(self) -> str | None:
        """Get service account file path from environment variable."""
        if self.credentials_env:
            return os.environ.get(self.credentials_env)
        return None


@dataclass
class LocalConfig:
    """Local backend settings."""

    db_path: str = "db/studyhub.db"
    uploads_dir: str = "data/uploads"
    public_base_url: str | None = None


@dataclass
class DashboardConfig:
    """Dashboard and upload defaults."""

    recent_limit: int = 5
    max_upload_mb: int = 25


@dataclass
class AppConfig:
    """Application-wide configuration."""

    backend: str = "local"
    firebase: FirebaseConfig = field(default_factory=FirebaseConfig)
    local: LocalConfig = field(default_factory=LocalConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "backend": "local",
        "firebase": {
            "project_id": None,
            "storage_bucket": None,
            "credentials_env": "GOOGLE_APPLICATION_CREDENTIALS",
        },
        "local": {
            "db_path": "db/studyhub.db",
            "uploads_dir": "data/uploads",
            "public_base_url": None,
        },
        "dashboard": {
            "recent_limit": 5,
            "max_upload_mb": 25,
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    fb = data.get("firebase") or {}
    firebase = FirebaseConfig(
        project_id=fb.get("project_id"),
        storage_bucket=fb.get("storage_bucket"),
        credentials_env=fb.get("credentials_env", "GOOGLE_APPLICATION_CREDENTIALS"),
    )

    lc = data.get("local") or {}
    local = LocalConfig(
        db_path=lc.get("db_path", "db/studyhub.db"),
        uploads_dir=lc.get("uploads_dir", "data/uploads"),
        public_base_url=lc.get("public_base_url"),
    )

    db = data.get("dashboard") or {}
    dashboard = DashboardConfig(
        recent_limit=int(db.get("recent_limit", 5)),
        max_upload_mb=int(db.get("max_upload_mb", 25)),
    )

    backend = os.environ.get(BACKEND_ENV) or data.get("backend", "local")
    if backend not in BACKENDS:
        raise ConfigError(
            f"Unknown backend '{backend}'. Expected one of: {', '.join(BACKENDS)}"
        )

    return AppConfig(
        backend=backend,
        firebase=firebase,
        local=local,
        dashboard=dashboard,
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, or defaults if no file exists.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.

    Raises:
        ConfigError: If the backend name is not recognized
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None

"""Configuration package for the study hub admin."""

from studyhub.config.app_config import (
    AppConfig,
    ConfigError,
    DashboardConfig,
    FirebaseConfig,
    LocalConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "ConfigError",
    "DashboardConfig",
    "FirebaseConfig",
    "LocalConfig",
    "clear_config_cache",
    "load_app_config",
]

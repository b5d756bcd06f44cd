"""Configuration package for the student system."""

from studentsystem.config.app_config import (
    AppConfig,
    ConfigurationError,
    DatabaseConfig,
    LoggingConfig,
    clear_config_cache,
    load_app_config,
    resolve_db_path,
)
from studentsystem.config.logging_config import configure_logging

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "LoggingConfig",
    "clear_config_cache",
    "configure_logging",
    "load_app_config",
    "resolve_db_path",
]

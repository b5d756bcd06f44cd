"""Application configuration loader.

Loads configuration from config/app_config.yaml (or the file named by
STUDENTSYSTEM_CONFIG), then applies environment overrides.

Usage:
    from studentsystem.config.app_config import load_app_config, resolve_db_path

    config = load_app_config()
    db_path = resolve_db_path(config.database.url)
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
CONFIG_FILE = Path("config/app_config.yaml")

# Environment variables
CONFIG_ENV = "STUDENTSYSTEM_CONFIG"
DATABASE_URL_ENV = "STUDENTSYSTEM_DATABASE_URL"
LOG_LEVEL_ENV = "STUDENTSYSTEM_LOG_LEVEL"

DEFAULT_DATABASE_URL = "sqlite:///db/studentsystem.db"
SQLITE_PREFIX = "sqlite:///"


class ConfigurationError(Exception):
    """Configuration cannot be loaded or names an unusable database."""

    pass


@dataclass
class DatabaseConfig:
    """Database connection settings."""

    url: str = DEFAULT_DATABASE_URL


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {"url": DEFAULT_DATABASE_URL},
        "logging": {"level": "INFO"},
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    database_data = data.get("database") or {}
    logging_data = data.get("logging") or {}

    return AppConfig(
        database=DatabaseConfig(
            url=database_data.get("url", DEFAULT_DATABASE_URL),
        ),
        logging=LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
        ),
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Precedence: environment variables, then the config file, then defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.

    Raises:
        ConfigurationError: If the config file exists but cannot be parsed,
            or STUDENTSYSTEM_CONFIG names a missing file.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    explicit = os.environ.get(CONFIG_ENV)
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        logger.debug("loading_app_config", source=str(path))
        data = _read_config_file(path)
    elif CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = _read_config_file(CONFIG_FILE)
    else:
        logger.debug("using_default_config")
        data = _get_defaults()

    config = _parse_config(data)

    if url := os.environ.get(DATABASE_URL_ENV):
        config.database.url = url
    if level := os.environ.get(LOG_LEVEL_ENV):
        config.logging.level = level.upper()

    _cached_config = config
    return _cached_config


def resolve_db_path(url: str) -> Path:
    """Turn a connection string into a SQLite file path.

    Accepts "sqlite:///relative/path.db", "sqlite:////absolute/path.db"
    or a bare filesystem path.

    Raises:
        ConfigurationError: For other schemes or an empty path
    """
    url = url.strip()

    if url.startswith(SQLITE_PREFIX):
        path = url[len(SQLITE_PREFIX):]
    elif "://" in url:
        scheme = url.split("://", 1)[0]
        raise ConfigurationError(
            f"Unsupported database scheme '{scheme}' (only sqlite is supported)"
        )
    else:
        path = url

    if not path or path == ":memory:":
        raise ConfigurationError(f"Database URL must name a file: '{url}'")

    return Path(path)


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None

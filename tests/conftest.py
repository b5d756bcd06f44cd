"""Pytest configuration for phased testing.

Tests are organized by phase (f1 schema, f2 seeding, f3 queries and
reports, f4 CLI and configuration). Future phase tests are skipped.

Shared fixtures create throwaway databases under tmp_path; no test may
touch ./db.
"""

import hashlib
from datetime import datetime
from pathlib import Path

import pytest

from studentsystem.config.app_config import (
    CONFIG_ENV,
    DATABASE_URL_ENV,
    LOG_LEVEL_ENV,
    clear_config_cache,
)
from studentsystem.core.seed_loader import seed_database
from studentsystem.db.database import init_db

# Current implementation phase
CURRENT_PHASE = 4

# Reference time used for seeding in tests (naive, taken as UTC)
FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0)


# Default database directory that tests must never touch
PRODUCTION_DB_DIR = Path("db")

DB_DIR_STATE_KEY = pytest.StashKey[dict]()


def directory_state(path: Path) -> dict:
    """Snapshot a directory: whether it exists and a digest of its files.

    The digest covers relative paths, sizes and contents.
    """
    if not path.exists():
        return {"exists": False, "digest": None}

    hasher = hashlib.sha256()
    for file_path in sorted(p for p in path.rglob("*") if p.is_file()):
        hasher.update(str(file_path.relative_to(path)).encode())
        hasher.update(file_path.read_bytes())

    return {"exists": True, "digest": hasher.hexdigest()}


def pytest_sessionstart(session):
    """Record ./db before any test runs."""
    session.config.stash[DB_DIR_STATE_KEY] = directory_state(PRODUCTION_DB_DIR)


@pytest.fixture(scope="session")
def db_dir_state_before(request) -> dict:
    """State of ./db captured at session start."""
    return request.config.stash[DB_DIR_STATE_KEY]


@pytest.fixture(name="directory_state")
def directory_state_fixture():
    return directory_state


def pytest_collection_modifyitems(config, items):
    """Skip tests from phases that haven't been implemented yet."""
    for item in items:
        # Extract phase from path (tests/f2/... -> 2)
        parts = item.fspath.strpath.split("/")
        for part in parts:
            if part.startswith("f") and part[1:].isdigit():
                test_phase = int(part[1:])
                if test_phase > CURRENT_PHASE:
                    item.add_marker(
                        pytest.mark.skip(
                            reason=f"Phase F{test_phase} not yet implemented (current: F{CURRENT_PHASE})"
                        )
                    )
                break


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep environment and cached config from leaking between tests."""
    for name in (CONFIG_ENV, DATABASE_URL_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def test_db(tmp_path, monkeypatch):
    """Initialize an empty database in a temp directory."""
    monkeypatch.setattr("studentsystem.db.database._db_path", None)
    db_path = tmp_path / "db" / "studentsystem.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def seeded_db(test_db, fixed_now):
    """Database seeded once with the sample data at FIXED_NOW."""
    seed_database(now=fixed_now)
    return test_db

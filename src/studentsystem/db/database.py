"""SQLite database connection and schema management.

Provides connection management and schema initialization for the student system.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/studentsystem.db")

# Tables in parent-before-child order
TABLES = ("students", "courses", "resources", "homeworks", "student_courses")

# Current connection (module-level for simplicity in CLI context)
_db_path: Path | None = None


def init_db(db_path: Path | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/studentsystem.db
    """
    global _db_path
    _db_path = db_path or DEFAULT_DB_PATH

    # Ensure directory exists
    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


def get_db_path() -> Path:
    """Path of the database used by get_db()."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Commits when the block succeeds, rolls back and re-raises otherwise.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM students").fetchall()
    """
    db_path = get_db_path()

    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def count_rows(table: str) -> int:
    """Count rows in one of the known tables.

    Raises:
        ValueError: If table is not part of the schema
    """
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")

    with get_db() as conn:
        row = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()

    return row[0]


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency. SQLite ignores declared lengths,
    so max lengths and ASCII-only columns are CHECK constraints.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS students (
            student_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK(length(name) <= 100),
            phone_number TEXT CHECK(
                phone_number IS NULL
                OR (length(phone_number) <= 10 AND phone_number NOT GLOB '*[^ -~]*')
            ),
            registered_on TEXT NOT NULL,
            birthday TEXT
        );

        CREATE TABLE IF NOT EXISTS courses (
            course_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK(length(name) <= 80),
            description TEXT,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            price_cents INTEGER NOT NULL
        );

        CREATE TABLE IF NOT EXISTS resources (
            resource_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK(length(name) <= 50),
            url TEXT NOT NULL CHECK(url NOT GLOB '*[^ -~]*'),
            resource_type TEXT NOT NULL
                CHECK(resource_type IN ('Video', 'Presentation', 'Document', 'Other')),
            course_id INTEGER NOT NULL REFERENCES courses(course_id)
        );

        CREATE TABLE IF NOT EXISTS homeworks (
            homework_id INTEGER PRIMARY KEY AUTOINCREMENT,
            content TEXT NOT NULL CHECK(content NOT GLOB '*[^ -~]*'),
            content_type TEXT NOT NULL
                CHECK(content_type IN ('Application', 'Pdf', 'Zip')),
            submission_time TEXT NOT NULL,
            student_id INTEGER NOT NULL REFERENCES students(student_id),
            course_id INTEGER NOT NULL REFERENCES courses(course_id)
        );

        -- Enrollment: one row per (student, course) pair
        CREATE TABLE IF NOT EXISTS student_courses (
            student_id INTEGER NOT NULL REFERENCES students(student_id),
            course_id INTEGER NOT NULL REFERENCES courses(course_id),
            PRIMARY KEY (student_id, course_id)
        );

        CREATE INDEX IF NOT EXISTS idx_resources_course ON resources(course_id);
        CREATE INDEX IF NOT EXISTS idx_homeworks_student ON homeworks(student_id);
        CREATE INDEX IF NOT EXISTS idx_homeworks_course ON homeworks(course_id);
        CREATE INDEX IF NOT EXISTS idx_student_courses_course ON student_courses(course_id);
        """
    )

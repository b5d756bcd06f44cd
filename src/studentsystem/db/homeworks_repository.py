"""Repository functions for homeworks table."""

from __future__ import annotations

import structlog

from studentsystem.db.database import get_db
from studentsystem.db.models import (
    ContentType,
    HomeworkRecord,
    from_db_timestamp,
    to_db_timestamp,
)

logger = structlog.get_logger(__name__)


def insert_homeworks(homeworks: list[HomeworkRecord]) -> list[int]:
    """Insert a batch of homeworks in a single transaction.

    Args:
        homeworks: Records to insert (homework_id is ignored)

    Returns:
        Generated homework ids, in input order

    Raises:
        ValueError: If a content_type is not a ContentType
        sqlite3.IntegrityError: If student_id or course_id does not exist
    """
    ids: list[int] = []
    with get_db() as conn:
        for homework in homeworks:
            cursor = conn.execute(
                """
                INSERT INTO homeworks (
                    content, content_type, submission_time, student_id, course_id
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    homework.content,
                    ContentType(homework.content_type).value,
                    to_db_timestamp(homework.submission_time),
                    homework.student_id,
                    homework.course_id,
                ),
            )
            ids.append(cursor.lastrowid)

    logger.debug("homeworks.inserted", count=len(ids))
    return ids


def get_all_homeworks() -> list[HomeworkRecord]:
    """Get all homeworks ordered by homework_id."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM homeworks ORDER BY homework_id"
        ).fetchall()

    return [
        HomeworkRecord(
            homework_id=row["homework_id"],
            content=row["content"],
            content_type=ContentType(row["content_type"]),
            submission_time=from_db_timestamp(row["submission_time"]),
            student_id=row["student_id"],
            course_id=row["course_id"],
        )
        for row in rows
    ]

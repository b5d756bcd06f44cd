"""Repository functions for students and student_courses tables."""

from __future__ import annotations

import structlog

from studentsystem.db.database import get_db
from studentsystem.db.models import (
    EnrollmentRecord,
    StudentRecord,
    from_db_date,
    from_db_timestamp,
    to_db_date,
    to_db_timestamp,
)

logger = structlog.get_logger(__name__)


def insert_students(students: list[StudentRecord]) -> list[int]:
    """Insert a batch of students in a single transaction.

    The student_id of each record is ignored; the database assigns it.

    Args:
        students: Records to insert

    Returns:
        Generated student ids, in input order

    Raises:
        sqlite3.IntegrityError: If any row violates a constraint (nothing is stored)
    """
    ids: list[int] = []
    with get_db() as conn:
        for student in students:
            cursor = conn.execute(
                """
                INSERT INTO students (name, phone_number, registered_on, birthday)
                VALUES (?, ?, ?, ?)
                """,
                (
                    student.name,
                    student.phone_number,
                    to_db_timestamp(student.registered_on),
                    to_db_date(student.birthday),
                ),
            )
            ids.append(cursor.lastrowid)

    logger.debug("students.inserted", count=len(ids))
    return ids


def get_all_students() -> list[StudentRecord]:
    """Get all students ordered by student_id."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM students ORDER BY student_id"
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def find_student_ids_by_name(names: list[str]) -> dict[str, int]:
    """Map each name to the lowest student_id carrying it.

    Names with no matching student are absent from the result.
    """
    if not names:
        return {}

    placeholders = ", ".join("?" for _ in names)
    with get_db() as conn:
        rows = conn.execute(
            f"""
            SELECT name, MIN(student_id) AS student_id
            FROM students
            WHERE name IN ({placeholders})
            GROUP BY name
            """,
            tuple(names),
        ).fetchall()

    return {row["name"]: row["student_id"] for row in rows}


def insert_enrollments(enrollments: list[EnrollmentRecord]) -> None:
    """Insert a batch of enrollments in a single transaction.

    Raises:
        sqlite3.IntegrityError: On a duplicate pair or unknown student/course
    """
    with get_db() as conn:
        conn.executemany(
            "INSERT INTO student_courses (student_id, course_id) VALUES (?, ?)",
            [(e.student_id, e.course_id) for e in enrollments],
        )

    logger.debug("student_courses.inserted", count=len(enrollments))


def get_all_enrollments() -> list[EnrollmentRecord]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT student_id, course_id FROM student_courses "
            "ORDER BY student_id, course_id"
        ).fetchall()

    return [
        EnrollmentRecord(student_id=row["student_id"], course_id=row["course_id"])
        for row in rows
    ]


def _row_to_record(row) -> StudentRecord:
    """Convert database row to StudentRecord."""
    return StudentRecord(
        student_id=row["student_id"],
        name=row["name"],
        phone_number=row["phone_number"],
        registered_on=from_db_timestamp(row["registered_on"]),
        birthday=from_db_date(row["birthday"]),
    )

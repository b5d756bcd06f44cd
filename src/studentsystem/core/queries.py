"""Read-only aggregate queries over the student system tables.

Each function opens its own connection, runs its joins and returns plain
dataclasses. None of them write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from studentsystem.db.database import get_db
from studentsystem.db.models import from_db_timestamp

logger = structlog.get_logger(__name__)


@dataclass
class StudentCourseCount:
    """A student with the number of courses they are enrolled in."""

    student_id: int
    name: str
    registered_on: datetime
    courses_count: int


@dataclass
class CourseResourceCount:
    course_id: int
    name: str
    resources_count: int


@dataclass
class HomeworkSubmission:
    """A homework as seen from its student."""

    course_name: str
    content: str
    submission_time: datetime


@dataclass
class StudentHomeworks:
    student_id: int
    name: str
    homeworks: list[HomeworkSubmission] = field(default_factory=list)


@dataclass
class LateHomework:
    """A homework submitted after its course ended."""

    content: str
    submission_time: datetime
    student_name: str


@dataclass
class CourseLateHomework:
    course_id: int
    name: str
    start_date: datetime
    end_date: datetime
    late_homeworks: list[LateHomework] = field(default_factory=list)


_STUDENT_COUNTS_SQL = """
    SELECT s.student_id, s.name, s.registered_on,
           COUNT(sc.course_id) AS courses_count
    FROM students s
    LEFT JOIN student_courses sc ON sc.student_id = s.student_id
    GROUP BY s.student_id
"""


def _to_student_count(row) -> StudentCourseCount:
    return StudentCourseCount(
        student_id=row["student_id"],
        name=row["name"],
        registered_on=from_db_timestamp(row["registered_on"]),
        courses_count=row["courses_count"],
    )


def list_students_with_course_counts() -> list[StudentCourseCount]:
    """List every student with registration date and enrollment count.

    Returns:
        One entry per student, in student_id order
    """
    with get_db() as conn:
        rows = conn.execute(
            _STUDENT_COUNTS_SQL + " ORDER BY s.student_id"
        ).fetchall()

    logger.debug("queries.executed", query="students_with_course_counts", rows=len(rows))
    return [_to_student_count(row) for row in rows]


def list_courses_with_resource_counts() -> list[CourseResourceCount]:
    """List every course with its number of resources, in course_id order."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT c.course_id, c.name, COUNT(r.resource_id) AS resources_count
            FROM courses c
            LEFT JOIN resources r ON r.course_id = c.course_id
            GROUP BY c.course_id
            ORDER BY c.course_id
            """
        ).fetchall()

    logger.debug("queries.executed", query="courses_with_resource_counts", rows=len(rows))
    return [
        CourseResourceCount(
            course_id=row["course_id"],
            name=row["name"],
            resources_count=row["resources_count"],
        )
        for row in rows
    ]


def get_student_homeworks(student_name: str) -> StudentHomeworks | None:
    """Get all homework submissions of the first student with this exact name.

    Args:
        student_name: Full student name (e.g., "Alice Smith")

    Returns:
        StudentHomeworks with submissions in homework_id order,
        or None if no student has that name
    """
    with get_db() as conn:
        student = conn.execute(
            """
            SELECT student_id, name FROM students
            WHERE name = ?
            ORDER BY student_id
            LIMIT 1
            """,
            (student_name,),
        ).fetchone()

        if student is None:
            logger.debug("queries.student_not_found", name=student_name)
            return None

        rows = conn.execute(
            """
            SELECT c.name AS course_name, h.content, h.submission_time
            FROM homeworks h
            JOIN courses c ON c.course_id = h.course_id
            WHERE h.student_id = ?
            ORDER BY h.homework_id
            """,
            (student["student_id"],),
        ).fetchall()

    logger.debug("queries.executed", query="student_homeworks", rows=len(rows))
    return StudentHomeworks(
        student_id=student["student_id"],
        name=student["name"],
        homeworks=[
            HomeworkSubmission(
                course_name=row["course_name"],
                content=row["content"],
                submission_time=from_db_timestamp(row["submission_time"]),
            )
            for row in rows
        ],
    )


def list_students_by_course_count() -> list[StudentCourseCount]:
    """List students by enrollment count, highest first.

    Equal counts are ordered by student_id so the result is stable.
    """
    with get_db() as conn:
        rows = conn.execute(
            _STUDENT_COUNTS_SQL + " ORDER BY courses_count DESC, s.student_id ASC"
        ).fetchall()

    logger.debug("queries.executed", query="students_by_course_count", rows=len(rows))
    return [_to_student_count(row) for row in rows]


def list_courses_with_late_homework() -> list[CourseLateHomework]:
    """List courses having homework submitted after the course end date.

    Courses without late homework are left out. Courses come in course_id
    order, their late homeworks in homework_id order.
    """
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT c.course_id, c.name, c.start_date, c.end_date,
                   h.content, h.submission_time, s.name AS student_name
            FROM courses c
            JOIN homeworks h
                ON h.course_id = c.course_id
                AND h.submission_time > c.end_date
            JOIN students s ON s.student_id = h.student_id
            ORDER BY c.course_id, h.homework_id
            """
        ).fetchall()

    courses: dict[int, CourseLateHomework] = {}
    for row in rows:
        course = courses.get(row["course_id"])
        if course is None:
            course = CourseLateHomework(
                course_id=row["course_id"],
                name=row["name"],
                start_date=from_db_timestamp(row["start_date"]),
                end_date=from_db_timestamp(row["end_date"]),
            )
            courses[row["course_id"]] = course

        course.late_homeworks.append(
            LateHomework(
                content=row["content"],
                submission_time=from_db_timestamp(row["submission_time"]),
                student_name=row["student_name"],
            )
        )

    logger.debug("queries.executed", query="courses_with_late_homework", rows=len(courses))
    return list(courses.values())

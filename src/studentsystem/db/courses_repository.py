"""Repository functions for courses and resources tables."""

from __future__ import annotations

import structlog

from studentsystem.db.database import get_db
from studentsystem.db.models import (
    CourseRecord,
    ResourceRecord,
    ResourceType,
    from_cents,
    from_db_timestamp,
    to_cents,
    to_db_timestamp,
)

logger = structlog.get_logger(__name__)


def insert_courses(courses: list[CourseRecord]) -> list[int]:
    """Insert a batch of courses in a single transaction.

    Args:
        courses: Records to insert (course_id is ignored)

    Returns:
        Generated course ids, in input order

    Raises:
        sqlite3.IntegrityError: If any row violates a constraint (nothing is stored)
    """
    ids: list[int] = []
    with get_db() as conn:
        for course in courses:
            cursor = conn.execute(
                """
                INSERT INTO courses (
                    name, description, start_date, end_date, price_cents
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    course.name,
                    course.description,
                    to_db_timestamp(course.start_date),
                    to_db_timestamp(course.end_date),
                    to_cents(course.price),
                ),
            )
            ids.append(cursor.lastrowid)

    logger.debug("courses.inserted", count=len(ids))
    return ids


def get_all_courses() -> list[CourseRecord]:
    """Get all courses ordered by course_id."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM courses ORDER BY course_id").fetchall()

    return [
        CourseRecord(
            course_id=row["course_id"],
            name=row["name"],
            description=row["description"],
            start_date=from_db_timestamp(row["start_date"]),
            end_date=from_db_timestamp(row["end_date"]),
            price=from_cents(row["price_cents"]),
        )
        for row in rows
    ]


def find_course_ids_by_name(names: list[str]) -> dict[str, int]:
    """Map each name to the lowest course_id carrying it."""
    if not names:
        return {}

    placeholders = ", ".join("?" for _ in names)
    with get_db() as conn:
        rows = conn.execute(
            f"""
            SELECT name, MIN(course_id) AS course_id
            FROM courses
            WHERE name IN ({placeholders})
            GROUP BY name
            """,
            tuple(names),
        ).fetchall()

    return {row["name"]: row["course_id"] for row in rows}


def insert_resources(resources: list[ResourceRecord]) -> list[int]:
    """Insert a batch of resources in a single transaction.

    Raises:
        ValueError: If a resource_type is not a ResourceType
        sqlite3.IntegrityError: If course_id does not exist
    """
    ids: list[int] = []
    with get_db() as conn:
        for resource in resources:
            cursor = conn.execute(
                """
                INSERT INTO resources (name, url, resource_type, course_id)
                VALUES (?, ?, ?, ?)
                """,
                (
                    resource.name,
                    resource.url,
                    ResourceType(resource.resource_type).value,
                    resource.course_id,
                ),
            )
            ids.append(cursor.lastrowid)

    logger.debug("resources.inserted", count=len(ids))
    return ids


def get_all_resources() -> list[ResourceRecord]:
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM resources ORDER BY resource_id"
        ).fetchall()

    return [
        ResourceRecord(
            resource_id=row["resource_id"],
            name=row["name"],
            url=row["url"],
            resource_type=ResourceType(row["resource_type"]),
            course_id=row["course_id"],
        )
        for row in rows
    ]

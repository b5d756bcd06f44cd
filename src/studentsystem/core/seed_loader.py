"""Seed loader module.

Responsibilities:
- Insert a fixed batch of sample rows into each table, only when it is empty
- Keep repeated runs idempotent (a populated table is left untouched)
- Resolve child foreign keys to the parents inserted by the same run

Seeding order: students, courses, resources, homeworks, student_courses.
Relative dates are computed from one `now` captured at the start of the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import structlog

from studentsystem.db.courses_repository import (
    find_course_ids_by_name,
    insert_courses,
    insert_resources,
)
from studentsystem.db.database import count_rows
from studentsystem.db.homeworks_repository import insert_homeworks
from studentsystem.db.models import (
    ContentType,
    CourseRecord,
    EnrollmentRecord,
    HomeworkRecord,
    ResourceRecord,
    ResourceType,
    StudentRecord,
)
from studentsystem.db.students_repository import (
    find_student_ids_by_name,
    insert_enrollments,
    insert_students,
)

logger = structlog.get_logger(__name__)

# =============================================================================
# SEED DATA
# =============================================================================

# (name, phone_number, registered days ago, birthday)
SEED_STUDENTS = [
    ("Alice Smith", "1234567890", 30, date(2000, 5, 15)),
    ("Bob Johnson", "0987654321", 60, date(1999, 10, 20)),
    ("Charlie Brown", "1122334455", 90, date(2001, 1, 25)),
    ("Diana Prince", "5544332211", 120, date(1998, 7, 30)),
    ("Eve Adams", "9988776655", 150, date(2002, 3, 5)),
]

# (name, description, start offset days, end offset days, price)
SEED_COURSES = [
    ("C# Advanced", "Advanced C# programming", -20, 10, Decimal("300.00")),
    ("SQL Fundamentals", "Introduction to SQL databases", -40, -10, Decimal("250.00")),
    ("Web Development Basics", "HTML, CSS, JavaScript", -70, -20, Decimal("350.00")),
    ("Data Structures", "Algorithms and Data Structures", -100, -50, Decimal("400.00")),
]

# (name, url, type, course index)
SEED_RESOURCES = [
    ("C# Advanced Video 1", "http://example.com/csharp_video1", ResourceType.VIDEO, 0),
    ("C# Advanced Presentation", "http://example.com/csharp_pres", ResourceType.PRESENTATION, 0),
    ("SQL Book", "http://example.com/sql_book", ResourceType.DOCUMENT, 1),
    ("Web Dev Tutorial", "http://example.com/webdev_tut", ResourceType.VIDEO, 2),
    ("Data Structures Notes", "http://example.com/ds_notes", ResourceType.DOCUMENT, 3),
]

# (content, type, submitted days ago, student index, course index)
SEED_HOMEWORKS = [
    ("http://example.com/hw1.zip", ContentType.ZIP, 5, 0, 0),
    ("http://example.com/hw2.pdf", ContentType.PDF, 15, 1, 1),
    ("http://example.com/hw3.app", ContentType.APPLICATION, 25, 2, 2),
    ("http://example.com/hw4.zip", ContentType.ZIP, 35, 0, 1),
]

# (student index, course index)
SEED_ENROLLMENTS = [
    (0, 0),
    (0, 1),
    (1, 1),
    (2, 2),
    (3, 0),
    (4, 3),
]


# =============================================================================
# DATA CLASSES
# =============================================================================


class SeedError(Exception):
    """Error seeding the database."""

    pass


@dataclass
class SeedReport:
    """Outcome of a seeding run."""

    inserted: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    @property
    def total_inserted(self) -> int:
        return sum(self.inserted.values())


# =============================================================================
# RECORD BUILDERS
# =============================================================================


def build_students(now: datetime) -> list[StudentRecord]:
    return [
        StudentRecord(
            student_id=None,
            name=name,
            phone_number=phone,
            registered_on=now - timedelta(days=days_ago),
            birthday=birthday,
        )
        for name, phone, days_ago, birthday in SEED_STUDENTS
    ]


def build_courses(now: datetime) -> list[CourseRecord]:
    return [
        CourseRecord(
            course_id=None,
            name=name,
            description=description,
            start_date=now + timedelta(days=start),
            end_date=now + timedelta(days=end),
            price=price,
        )
        for name, description, start, end, price in SEED_COURSES
    ]


def build_resources(course_ids: list[int]) -> list[ResourceRecord]:
    return [
        ResourceRecord(
            resource_id=None,
            name=name,
            url=url,
            resource_type=resource_type,
            course_id=course_ids[course_idx],
        )
        for name, url, resource_type, course_idx in SEED_RESOURCES
    ]


def build_homeworks(
    now: datetime,
    student_ids: list[int],
    course_ids: list[int],
) -> list[HomeworkRecord]:
    return [
        HomeworkRecord(
            homework_id=None,
            content=content,
            content_type=content_type,
            submission_time=now - timedelta(days=days_ago),
            student_id=student_ids[student_idx],
            course_id=course_ids[course_idx],
        )
        for content, content_type, days_ago, student_idx, course_idx in SEED_HOMEWORKS
    ]


def build_enrollments(
    student_ids: list[int],
    course_ids: list[int],
) -> list[EnrollmentRecord]:
    return [
        EnrollmentRecord(
            student_id=student_ids[student_idx],
            course_id=course_ids[course_idx],
        )
        for student_idx, course_idx in SEED_ENROLLMENTS
    ]


# =============================================================================
# SEEDING
# =============================================================================


class _ParentIds:
    """Seed-index to id mapping for students and courses.

    Filled from this run's inserts. When a parent table was already
    populated, ids are looked up lazily by seed name.
    """

    def __init__(self) -> None:
        self._student_ids: list[int] | None = None
        self._course_ids: list[int] | None = None

    def set_students(self, ids: list[int]) -> None:
        self._student_ids = ids

    def set_courses(self, ids: list[int]) -> None:
        self._course_ids = ids

    @property
    def students(self) -> list[int]:
        if self._student_ids is None:
            names = [row[0] for row in SEED_STUDENTS]
            self._student_ids = _resolve_ids("students", names, find_student_ids_by_name(names))
        return self._student_ids

    @property
    def courses(self) -> list[int]:
        if self._course_ids is None:
            names = [row[0] for row in SEED_COURSES]
            self._course_ids = _resolve_ids("courses", names, find_course_ids_by_name(names))
        return self._course_ids


def _resolve_ids(table: str, names: list[str], found: dict[str, int]) -> list[int]:
    missing = [name for name in names if name not in found]
    if missing:
        raise SeedError(
            f"Cannot seed children of '{table}': seed rows missing: {', '.join(missing)}"
        )
    return [found[name] for name in names]


def _table_is_empty(table: str, report: SeedReport) -> bool:
    if count_rows(table) > 0:
        report.skipped.append(table)
        logger.info("seed.batch_skipped", table=table)
        return False
    return True


def _record_batch(table: str, count: int, report: SeedReport) -> None:
    report.inserted[table] = count
    logger.info("seed.batch_inserted", table=table, count=count)


def seed_database(now: datetime | None = None) -> SeedReport:
    """Seed every empty table with the sample data.

    The database must already be initialized (see studentsystem.db.init_db).

    Args:
        now: Reference time for relative dates. Defaults to current UTC time.

    Returns:
        SeedReport listing inserted counts and skipped tables

    Raises:
        SeedError: If a child batch needs seed parents that are not in the database
        sqlite3.IntegrityError: If a batch violates a constraint (batch not stored)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = now.replace(microsecond=0)

    report = SeedReport()
    parents = _ParentIds()

    if _table_is_empty("students", report):
        ids = insert_students(build_students(now))
        parents.set_students(ids)
        _record_batch("students", len(ids), report)

    if _table_is_empty("courses", report):
        ids = insert_courses(build_courses(now))
        parents.set_courses(ids)
        _record_batch("courses", len(ids), report)

    if _table_is_empty("resources", report):
        ids = insert_resources(build_resources(parents.courses))
        _record_batch("resources", len(ids), report)

    if _table_is_empty("homeworks", report):
        ids = insert_homeworks(build_homeworks(now, parents.students, parents.courses))
        _record_batch("homeworks", len(ids), report)

    if _table_is_empty("student_courses", report):
        enrollments = build_enrollments(parents.students, parents.courses)
        insert_enrollments(enrollments)
        _record_batch("student_courses", len(enrollments), report)

    logger.info(
        "seed.completed",
        inserted=report.total_inserted,
        skipped=len(report.skipped),
    )
    return report

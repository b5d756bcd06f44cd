"""Record types for the student system tables.

Tables:
- students: Student profile and registration date
- courses: Course catalog with dates and price
- resources: Learning material attached to a course
- homeworks: Homework submissions by a student for a course
- student_courses: Enrollment join table (student_id, course_id)

Relationships are plain foreign-key ids. Navigation happens through
query-time joins (see studentsystem.core.queries), never through
back-references held on the records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

# Storage format for timestamps (UTC, lexically sortable)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

CENTS = Decimal("0.01")


class ResourceType(str, Enum):
    """Kind of learning resource."""

    VIDEO = "Video"
    PRESENTATION = "Presentation"
    DOCUMENT = "Document"
    OTHER = "Other"


class ContentType(str, Enum):
    """Format of a homework submission."""

    APPLICATION = "Application"
    PDF = "Pdf"
    ZIP = "Zip"


@dataclass
class StudentRecord:
    """Student record from database."""

    student_id: int | None
    name: str
    phone_number: str | None
    registered_on: datetime
    birthday: date | None = None


@dataclass
class CourseRecord:
    """Course record from database."""

    course_id: int | None
    name: str
    description: str | None
    start_date: datetime
    end_date: datetime
    price: Decimal


@dataclass
class ResourceRecord:
    """Resource record from database."""

    resource_id: int | None
    name: str
    url: str
    resource_type: ResourceType
    course_id: int


@dataclass
class HomeworkRecord:
    """Homework record from database."""

    homework_id: int | None
    content: str
    content_type: ContentType
    submission_time: datetime
    student_id: int
    course_id: int


@dataclass(frozen=True)
class EnrollmentRecord:
    """Enrollment of a student in a course."""

    student_id: int
    course_id: int


# =============================================================================
# STORAGE CONVERSIONS
# =============================================================================


def to_db_timestamp(value: datetime) -> str:
    """Format a datetime for storage.

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime(TIMESTAMP_FORMAT)


def from_db_timestamp(value: str) -> datetime:
    """Parse a stored timestamp into a naive UTC datetime."""
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def to_db_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def from_db_date(value: str | None) -> date | None:
    if value is None:
        return None
    return date.fromisoformat(value)


def to_cents(price: Decimal) -> int:
    """Convert a price to integer cents, rounding to two decimals."""
    return int(price.quantize(CENTS, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENTS)

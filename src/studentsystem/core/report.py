"""Text report over the five student system queries.

Every line follows the "Label: value, Label: value" layout. Format functions
take query results and return lines, build_report() runs the queries too.
"""

from __future__ import annotations

from datetime import datetime

from studentsystem.core.queries import (
    CourseLateHomework,
    CourseResourceCount,
    StudentCourseCount,
    StudentHomeworks,
    get_student_homeworks,
    list_courses_with_late_homework,
    list_courses_with_resource_counts,
    list_students_by_course_count,
    list_students_with_course_counts,
)

DEFAULT_STUDENT_NAME = "Alice Smith"

REPORT_TITLE = "--- Queries ---"

HEADINGS = {
    1: "1. List all students with their registered date and number of courses.",
    2: "2. List all courses with total number of resources.",
    3: "3. Show all homework submissions for a given student (e.g., '{name}').",
    4: "4. Show students ordered by number of courses they are enrolled in.",
    5: "5. Show all courses that have at least one homework submitted after their end date.",
}


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_students_with_course_counts(rows: list[StudentCourseCount]) -> list[str]:
    return [
        f"Student Name: {row.name}, "
        f"Registered On: {format_date(row.registered_on)}, "
        f"Courses Enrolled: {row.courses_count}"
        for row in rows
    ]


def format_courses_with_resource_counts(rows: list[CourseResourceCount]) -> list[str]:
    return [
        f"Course Name: {row.name}, Resources Count: {row.resources_count}"
        for row in rows
    ]


def format_student_homeworks(
    result: StudentHomeworks | None,
    student_name: str,
) -> list[str]:
    """Lines for one student's homeworks, or the not-found line."""
    if result is None:
        return [f"Student with name '{student_name}' not found."]

    lines = [f"Homework submissions for {result.name}:"]
    for homework in result.homeworks:
        lines.append(
            f"- Course: {homework.course_name}, "
            f"Content: {homework.content}, "
            f"Submission Time: {format_timestamp(homework.submission_time)}"
        )
    return lines


def format_students_by_course_count(rows: list[StudentCourseCount]) -> list[str]:
    lines = ["Students ordered by number of courses enrolled:"]
    lines.extend(
        f"- Student Name: {row.name}, Courses Enrolled: {row.courses_count}"
        for row in rows
    )
    return lines


def format_courses_with_late_homework(courses: list[CourseLateHomework]) -> list[str]:
    """Lines for courses with late homework, or the none-found line."""
    if not courses:
        return ["No courses found with late homework submissions."]

    lines = ["Courses with late homework submissions:"]
    for course in courses:
        lines.append(
            f"Course: {course.name} "
            f"(Starts: {format_date(course.start_date)}, "
            f"Ends: {format_date(course.end_date)})"
        )
        for homework in course.late_homeworks:
            lines.append(
                f"- Late Homework: {homework.content} by {homework.student_name} "
                f"(Submitted: {format_timestamp(homework.submission_time)})"
            )
    return lines


def build_report(student_name: str = DEFAULT_STUDENT_NAME) -> list[str]:
    """Run all five queries and return the full report.

    Args:
        student_name: Student looked up by the homework query

    Returns:
        Report lines, sections separated by blank lines
    """
    sections = [
        (HEADINGS[1], format_students_with_course_counts(list_students_with_course_counts())),
        (HEADINGS[2], format_courses_with_resource_counts(list_courses_with_resource_counts())),
        (
            HEADINGS[3].format(name=student_name),
            format_student_homeworks(get_student_homeworks(student_name), student_name),
        ),
        (HEADINGS[4], format_students_by_course_count(list_students_by_course_count())),
        (HEADINGS[5], format_courses_with_late_homework(list_courses_with_late_homework())),
    ]

    lines = [REPORT_TITLE]
    for heading, body in sections:
        lines.append("")
        lines.append(heading)
        lines.extend(body)
    return lines

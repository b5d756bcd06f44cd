"""Tests for report formatting (F3)."""

from datetime import datetime, timedelta

from studentsystem.core.queries import (
    CourseLateHomework,
    CourseResourceCount,
    HomeworkSubmission,
    LateHomework,
    StudentCourseCount,
    StudentHomeworks,
)
from studentsystem.core.report import (
    HEADINGS,
    REPORT_TITLE,
    build_report,
    format_courses_with_late_homework,
    format_courses_with_resource_counts,
    format_student_homeworks,
    format_students_by_course_count,
    format_students_with_course_counts,
)

WHEN = datetime(2026, 10, 14, 12, 0, 0)


class TestFormatters:
    """Tests for the per-query line formatters."""

    def test_student_course_counts_line(self):
        lines = format_students_with_course_counts([
            StudentCourseCount(1, "Alice Smith", datetime(2026, 9, 19, 12, 0, 0), 2),
        ])
        assert lines == [
            "Student Name: Alice Smith, Registered On: 2026-09-19, Courses Enrolled: 2"
        ]

    def test_course_resource_counts_line(self):
        lines = format_courses_with_resource_counts([CourseResourceCount(1, "C# Advanced", 2)])
        assert lines == ["Course Name: C# Advanced, Resources Count: 2"]

    def test_student_homeworks_lines(self):
        result = StudentHomeworks(
            student_id=1,
            name="Alice Smith",
            homeworks=[HomeworkSubmission("C# Advanced", "http://example.com/hw1.zip", WHEN)],
        )
        assert format_student_homeworks(result, "Alice Smith") == [
            "Homework submissions for Alice Smith:",
            "- Course: C# Advanced, Content: http://example.com/hw1.zip, "
            "Submission Time: 2026-10-14 12:00:00",
        ]

    def test_student_not_found_line(self):
        assert format_student_homeworks(None, "Nobody") == [
            "Student with name 'Nobody' not found."
        ]

    def test_students_by_course_count_lines(self):
        lines = format_students_by_course_count([
            StudentCourseCount(1, "Alice Smith", WHEN, 2),
            StudentCourseCount(2, "Bob Johnson", WHEN, 1),
        ])
        assert lines == [
            "Students ordered by number of courses enrolled:",
            "- Student Name: Alice Smith, Courses Enrolled: 2",
            "- Student Name: Bob Johnson, Courses Enrolled: 1",
        ]

    def test_no_late_homework_line(self):
        assert format_courses_with_late_homework([]) == [
            "No courses found with late homework submissions."
        ]

    def test_late_homework_lines(self):
        course = CourseLateHomework(
            course_id=2,
            name="SQL Fundamentals",
            start_date=WHEN - timedelta(days=35),
            end_date=WHEN - timedelta(days=5),
            late_homeworks=[LateHomework("http://example.com/hw9.zip", WHEN, "Bob Johnson")],
        )
        assert format_courses_with_late_homework([course]) == [
            "Courses with late homework submissions:",
            "Course: SQL Fundamentals (Starts: 2026-09-09, Ends: 2026-10-09)",
            "- Late Homework: http://example.com/hw9.zip by Bob Johnson "
            "(Submitted: 2026-10-14 12:00:00)",
        ]


class TestBuildReport:
    """Tests for the full report over a seeded database."""

    def test_sections_in_order(self, seeded_db):
        lines = build_report()

        assert lines[0] == REPORT_TITLE
        positions = [lines.index(HEADINGS[n]) for n in (1, 2, 4, 5)]
        assert positions == sorted(positions)
        assert HEADINGS[3].format(name="Alice Smith") in lines

    def test_sample_report_content(self, seeded_db):
        lines = build_report()

        assert "Student Name: Alice Smith, Registered On: 2026-09-19, Courses Enrolled: 2" in lines
        assert "Course Name: C# Advanced, Resources Count: 2" in lines
        assert "Homework submissions for Alice Smith:" in lines
        assert sum(1 for line in lines if line.startswith("- Course: ")) == 2
        assert "- Student Name: Eve Adams, Courses Enrolled: 1" in lines
        assert lines[-1] == "No courses found with late homework submissions."

    def test_unknown_student(self, seeded_db):
        lines = build_report("Nobody Here")
        assert "Student with name 'Nobody Here' not found." in lines

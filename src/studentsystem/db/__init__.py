"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization for students, courses, resources,
  homeworks and student_courses
- Repository functions per table
"""

from studentsystem.db.database import count_rows, get_db, init_db

__all__ = ["count_rows", "get_db", "init_db"]

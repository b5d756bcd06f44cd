"""Student system: course records in SQLite with seed data and reports."""

__version__ = "0.1.0"

"""Safety tests to ensure the suite leaves the default database alone.

The state of ./db is recorded in conftest.py when the session starts.
This module is collected after the phase directories, so the comparison
below covers every test that ran before it.
"""

from pathlib import Path

import pytest


class TestDatabaseDirectorySafety:
    """./db must look the same as before the session started."""

    def test_db_directory_unchanged(self, db_dir_state_before, directory_state):
        current = directory_state(Path("db"))

        if not db_dir_state_before["exists"] and current["exists"]:
            pytest.fail(
                "./db was created during the test run. "
                "Tests must use tmp_path databases."
            )
        if current != db_dir_state_before:
            pytest.fail(
                "./db was modified during the test run. "
                "Tests must use tmp_path databases."
            )


class TestDirectoryState:
    """The snapshot helper notices the changes the safety check relies on."""

    def test_missing_directory(self, tmp_path, directory_state):
        assert directory_state(tmp_path / "db") == {"exists": False, "digest": None}

    def test_detects_created_file(self, tmp_path, directory_state):
        db_dir = tmp_path / "db"
        before = directory_state(db_dir)

        db_dir.mkdir()
        (db_dir / "leak.db").write_bytes(b"SQLite format 3\x00")

        assert directory_state(db_dir) != before

    def test_detects_modified_content(self, tmp_path, directory_state):
        db_dir = tmp_path / "db"
        db_dir.mkdir()
        db_file = db_dir / "studentsystem.db"
        db_file.write_bytes(b"aaaa")
        before = directory_state(db_dir)

        # Same size, different bytes
        db_file.write_bytes(b"bbbb")

        assert directory_state(db_dir) != before

    def test_unchanged_directory_is_equal(self, tmp_path, directory_state):
        db_dir = tmp_path / "db"
        db_dir.mkdir()
        (db_dir / "studentsystem.db").write_bytes(b"data")

        assert directory_state(db_dir) == directory_state(db_dir)


class TestTestIsolation:
    """Test modules only open databases under tmp_path."""

    def test_no_default_init_db_calls(self):
        tests_dir = Path(__file__).parent
        violations = [
            str(test_file)
            for test_file in sorted(tests_dir.rglob("test_*.py"))
            if test_file.name != "test_safety.py" and "init_db()" in test_file.read_text()
        ]

        assert violations == [], f"init_db() without a temp path in: {violations}"

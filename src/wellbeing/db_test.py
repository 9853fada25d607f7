"""
Tests for the db helpers, run through the connection override.

Run with: pytest src/wellbeing/db_test.py -v
"""
from unittest.mock import MagicMock, patch

import pytest

from wellbeing import db


@pytest.fixture
def fake_connection():
    conn = MagicMock()
    db.set_connection_override(conn)
    yield conn
    db.clear_connection_override()


def cursor_of(conn: MagicMock) -> MagicMock:
    return conn.cursor.return_value.__enter__.return_value


class TestConnectionOverride:
    """Tests for set_connection_override() / clear_connection_override()"""

    def test_override_is_used_without_commit(self, fake_connection):
        with db.get_connection() as conn:
            assert conn is fake_connection

        fake_connection.commit.assert_not_called()
        fake_connection.close.assert_not_called()

    def test_clear_restores_normal_connections(self):
        db.set_connection_override(MagicMock())
        db.clear_connection_override()

        with patch("wellbeing.db.psycopg.connect") as connect:
            with db.get_connection() as conn:
                assert conn is connect.return_value

        connect.return_value.commit.assert_called_once()
        connect.return_value.close.assert_called_once()

    def test_normal_connection_rolls_back_on_error(self):
        with patch("wellbeing.db.psycopg.connect") as connect:
            with pytest.raises(RuntimeError):
                with db.get_connection():
                    raise RuntimeError("boom")

        connect.return_value.rollback.assert_called_once()
        connect.return_value.commit.assert_not_called()


class TestQueryHelpers:
    """Tests for execute() and fetch_all()"""

    def test_execute_returns_rowcount(self, fake_connection):
        cursor_of(fake_connection).rowcount = 3

        affected = db.execute("DELETE FROM entry_values WHERE lower(value) = lower(%s)", ("happy",))

        assert affected == 3
        cursor_of(fake_connection).execute.assert_called_once_with(
            "DELETE FROM entry_values WHERE lower(value) = lower(%s)", ("happy",)
        )

    def test_fetch_all_returns_rows(self, fake_connection):
        cursor_of(fake_connection).fetchall.return_value = [{"value": "happy"}]

        rows = db.fetch_all("SELECT value FROM entry_values")

        assert rows == [{"value": "happy"}]


class TestApplyMigrations:
    """Tests for apply_migrations()"""

    def test_packaged_migrations_exist(self):
        assert (db.MIGRATIONS_DIR / "001_initial_schema.sql").is_file()

    def test_runs_files_in_name_order(self, fake_connection, tmp_path):
        (tmp_path / "002_second.sql").write_text("SELECT 2;")
        (tmp_path / "001_first.sql").write_text("SELECT 1;")

        applied = db.apply_migrations(tmp_path)

        assert applied == ["001_first.sql", "002_second.sql"]
        executed = [c.args[0] for c in cursor_of(fake_connection).execute.call_args_list]
        assert executed == ["SELECT 1;", "SELECT 2;"]

    def test_empty_directory_raises(self, fake_connection, tmp_path):
        with pytest.raises(FileNotFoundError):
            db.apply_migrations(tmp_path)

"""Tests for the Database handle lifecycle and migrations."""

import os

import pytest

from lesson_booking_api.app.core.db import MIGRATIONS, Database, apply_migrations, resolve_database_path
from lesson_booking_api.app.core.errors import ErrorCode, StoreNotInitializedError, StoreUnavailableError


def test_get_before_init_raises():
    db = Database(":memory:")
    with pytest.raises(StoreNotInitializedError) as excinfo:
        db.get()
    assert excinfo.value.code is ErrorCode.STORE_NOT_INITIALIZED
    # Callers that only care about availability can catch the parent class.
    assert isinstance(excinfo.value, StoreUnavailableError)


def test_init_is_idempotent(tmp_path):
    db = Database(str(tmp_path / "a.db"))
    first = db.init()
    second = db.init()
    assert first is second
    assert db.get() is first
    db.close()


def test_close_resets_state(tmp_path):
    db = Database(str(tmp_path / "a.db"))
    db.init()
    db.close()
    assert db.is_initialized is False
    with pytest.raises(StoreNotInitializedError):
        db.get()
    # Closing twice is harmless, and the handle can be reopened.
    db.close()
    db.init()
    assert db.is_initialized is True
    db.close()


def test_migrations_create_tables_once(tmp_path):
    path = str(tmp_path / "a.db")
    db = Database(path)
    conn = db.init()
    tables = {row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"lessons", "orders", "migrations"} <= tables
    latest = MIGRATIONS[-1][0]
    assert apply_migrations(conn) == latest
    versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [version for version, _ in MIGRATIONS]
    db.close()


def test_space_check_constraint(tmp_path):
    db = Database(str(tmp_path / "a.db"))
    db.init()
    with db.cursor() as cursor:
        cursor.execute(
            "INSERT INTO lessons (id, topic, location, price, space) VALUES ('x', 'Art', 'Hendon', 1, 1)"
        )
    with pytest.raises(StoreUnavailableError):
        with db.cursor() as cursor:
            cursor.execute("UPDATE lessons SET space = -1 WHERE id = 'x'")
    db.close()


def test_cursor_maps_sqlite_errors(tmp_path):
    db = Database(str(tmp_path / "a.db"))
    db.init()
    with pytest.raises(StoreUnavailableError) as excinfo:
        with db.cursor() as cursor:
            cursor.execute("SELECT * FROM no_such_table")
    assert "no_such_table" in excinfo.value.message
    db.close()


def test_init_failure_is_store_unavailable(tmp_path):
    # A directory cannot be opened as a database file.
    db = Database(str(tmp_path))
    with pytest.raises(StoreUnavailableError):
        db.init()
    assert db.is_initialized is False


def test_resolve_database_path():
    assert resolve_database_path(":memory:") == ":memory:"
    absolute = os.path.abspath("some.db")
    assert resolve_database_path(absolute) == absolute
    relative = resolve_database_path("data/lessons.db")
    assert os.path.isabs(relative)
    assert relative.endswith(os.path.join("lesson_booking_api", "data", "lessons.db"))


def test_name_and_ping(tmp_path):
    db = Database(str(tmp_path / "cst3144.db"))
    assert db.name == "cst3144"
    db.init()
    db.ping()
    db.close()
    with pytest.raises(StoreNotInitializedError):
        db.ping()

"""Tests for settings helpers, logging setup and error rendering."""

import logging

from lesson_booking_api.app.api.errors import to_http_exception
from lesson_booking_api.app.core.config import Settings
from lesson_booking_api.app.core.errors import (
    InsufficientSpaceError,
    InvalidFieldError,
    StoreNotInitializedError,
    UnknownLessonError,
)
from lesson_booking_api.app.core.logging_config import ACCESS_LOGGER, setup_logging
from lesson_booking_api.app.stores import InMemoryCatalogStore, SQLiteCatalogStore, create_store


def test_cors_origin_list():
    settings = Settings(cors_origins="http://a.test, http://b.test,,")
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]


def test_create_store_backends(tmp_path):
    assert isinstance(create_store(Settings(store_backend="memory")), InMemoryCatalogStore)
    store = create_store(Settings(store_backend="SQLite", database_url=str(tmp_path / "x.db")))
    assert isinstance(store, SQLiteCatalogStore)
    assert store.name == "x"


def test_create_store_unknown_backend():
    try:
        create_store(Settings(store_backend="mongo"))
    except ValueError as e:
        assert "mongo" in str(e)
    else:
        raise AssertionError("expected ValueError")


def test_setup_logging_adds_handlers(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    logfile = tmp_path / "app.log"

    setup_logging("debug", str(logfile))
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        logging.getLogger("lesson_booking_api.test").debug("hello")
        for handler in root.handlers:
            handler.flush()
        assert "[DEBUG] lesson_booking_api.test: hello" in logfile.read_text(encoding="utf-8")

        # A second call leaves the configuration alone.
        setup_logging("error")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
    finally:
        for handler in root.handlers:
            handler.close()


def test_setup_logging_unknown_level(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    setup_logging("chatty")
    assert root.level == logging.INFO


def test_error_status_mapping():
    assert to_http_exception(InvalidFieldError("foo")).status_code == 400
    assert to_http_exception(UnknownLessonError("x")).status_code == 400
    assert to_http_exception(InsufficientSpaceError("x", 3, 1)).status_code == 409
    assert to_http_exception(StoreNotInitializedError()).status_code == 503


def test_error_detail_carries_offender():
    detail = to_http_exception(InsufficientSpaceError("Art-Hen-70", 4, 3)).detail
    assert detail["error"] == "INSUFFICIENT_SPACE"
    assert detail["lesson_id"] == "Art-Hen-70"
    assert "3 left" in detail["message"]
    assert str(InvalidFieldError("foo")) == 'INVALID_FIELD: Field "foo" not allowed'


def test_access_level_applies_when_root_is_configured(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    access = logging.getLogger(ACCESS_LOGGER)
    previous = access.level
    try:
        setup_logging("info", access_level="warning")
        assert access.level == logging.WARNING
        assert not access.isEnabledFor(logging.INFO)
        # Without an access level the logger is left as it is.
        setup_logging("info")
        assert access.level == logging.WARNING
    finally:
        access.setLevel(previous)

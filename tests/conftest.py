"""Pytest configuration and shared fixtures."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from lesson_booking_api.app.core.config import Settings
from lesson_booking_api.app.core.db import Database
from lesson_booking_api.app.main import create_app
from lesson_booking_api.app.schemas.lesson import LessonCreate
from lesson_booking_api.app.stores.memory_store import InMemoryCatalogStore
from lesson_booking_api.app.stores.sqlite_store import SQLiteCatalogStore


def sample_lessons() -> list[LessonCreate]:
    return [
        LessonCreate(id="Art-Hen-70", topic="Art", location="Hendon", price=10, space=5, image="art.svg"),
        LessonCreate(id="Mat-Col-100", topic="Math", location="Colindale", price=100, space=2),
        LessonCreate(id="Mus-Bre-80", topic="Music", location="Brent Cross", price=80, space=1),
    ]


@pytest.fixture
def lessons() -> list[LessonCreate]:
    return sample_lessons()


@pytest.fixture
def memory_store(lessons) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(lessons)


@pytest.fixture
def sqlite_store(tmp_path, lessons):
    store = SQLiteCatalogStore(Database(str(tmp_path / "lessons.db")))
    asyncio.run(store.open())
    asyncio.run(store.insert_lessons(lessons))
    yield store
    asyncio.run(store.close())


@pytest.fixture(params=["memory", "sqlite"])
def store(request):
    """Each store-level test runs against both backends."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def settings(tmp_path) -> Settings:
    images = tmp_path / "images"
    images.mkdir()
    (images / "art.svg").write_text("<svg xmlns='http://www.w3.org/2000/svg'/>", encoding="utf-8")
    return Settings(
        database_url=str(tmp_path / "api.db"),
        store_backend="sqlite",
        seed_file=str(tmp_path / "missing-seed.json"),
        seed_on_startup=False,
        images_dir=str(images),
        api_prefix="",
    )


@pytest.fixture
def client(settings, memory_store):
    app = create_app(settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client

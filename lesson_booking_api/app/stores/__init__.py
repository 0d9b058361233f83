"""
Catalog store backends.

``create_store`` builds the backend selected by ``STORE_BACKEND``.  The
returned store is not opened yet; the application opens it on startup.
"""

from lesson_booking_api.app.core.config import Settings
from lesson_booking_api.app.core.db import Database
from lesson_booking_api.app.stores.interfaces import CatalogStore, ReservationOutcome
from lesson_booking_api.app.stores.memory_store import InMemoryCatalogStore
from lesson_booking_api.app.stores.sqlite_store import SQLiteCatalogStore

__all__ = [
    "CatalogStore",
    "ReservationOutcome",
    "InMemoryCatalogStore",
    "SQLiteCatalogStore",
    "create_store",
]


def create_store(settings: Settings) -> CatalogStore:
    backend = settings.store_backend.lower()
    if backend == "memory":
        return InMemoryCatalogStore()
    if backend == "sqlite":
        return SQLiteCatalogStore(Database(settings.database_url, timeout=settings.database_timeout))
    raise ValueError(f"Unknown store backend: {settings.store_backend}")

"""Store interfaces (repository pattern).

Stores must be swappable and return schema models.  A store holds the
``lessons`` catalog and its sibling ``orders`` collection; it is the
single writer for seat counts and prices.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from lesson_booking_api.app.schemas.lesson import LessonCreate, LessonRead, LessonUpdate
from lesson_booking_api.app.schemas.order import OrderCreate, OrderRead


class ReservationOutcome(Enum):
    """Result of a conditional seat decrement."""

    OK = "ok"
    INSUFFICIENT = "insufficient"
    NOT_FOUND = "not_found"


class CatalogStore(ABC):
    """Interface for lesson and order persistence operations."""

    name: str = "catalog"

    async def open(self) -> None:
        """Acquire backing resources.  Safe to call more than once."""

    async def close(self) -> None:
        """Release backing resources."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise ``StoreUnavailableError`` if the store cannot serve requests."""
        ...

    @abstractmethod
    async def list_lessons(self) -> list[LessonRead]:
        """Return all lessons in insertion order."""
        ...

    @abstractmethod
    async def find_lesson(self, lesson_id: str) -> LessonRead | None:
        """Return a lesson by ID, or None if not found."""
        ...

    @abstractmethod
    async def search_lessons(self, text: str, number: float | None = None) -> list[LessonRead]:
        """Return lessons whose topic or location contains ``text``
        (case-insensitive), or whose price or space equals ``number``."""
        ...

    @abstractmethod
    async def update_lesson(self, lesson_id: str, update: LessonUpdate) -> LessonRead | None:
        """Apply a validated update and return the new record, or None if not found."""
        ...

    @abstractmethod
    async def reserve_space(self, lesson_id: str, qty: int) -> ReservationOutcome:
        """Decrement ``space`` by ``qty`` only if ``space >= qty``, atomically."""
        ...

    @abstractmethod
    async def release_space(self, lesson_id: str, qty: int) -> bool:
        """Give ``qty`` seats back.  Return False if the lesson does not exist."""
        ...

    @abstractmethod
    async def insert_order(self, order: OrderCreate) -> OrderRead:
        """Persist an accepted order and return it with its assigned ID."""
        ...

    @abstractmethod
    async def list_orders(self) -> list[OrderRead]:
        """Return all orders, oldest first.

        Not exposed over HTTP; used by ``diagnose.py`` and tests to read
        back what was admitted.
        """
        ...

    @abstractmethod
    async def count_lessons(self) -> int:
        ...

    @abstractmethod
    async def insert_lessons(self, lessons: Iterable[LessonCreate]) -> int:
        """Bulk insert lessons, skipping IDs that already exist.  Return the number inserted."""
        ...

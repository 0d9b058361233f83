"""In-process implementation of the CatalogStore.

Lessons live in an insertion-ordered dict.  There is no conditional
update primitive to lean on, so every check-and-decrement of a
lesson's seats runs under that lesson's own ``asyncio.Lock``.
"""

import asyncio
import itertools
from typing import Iterable

from lesson_booking_api.app.schemas.lesson import LessonCreate, LessonRead, LessonUpdate
from lesson_booking_api.app.schemas.order import OrderCreate, OrderRead
from lesson_booking_api.app.stores.interfaces import CatalogStore, ReservationOutcome


class InMemoryCatalogStore(CatalogStore):
    """Catalog kept in memory; lost when the process exits."""

    name = "memory"

    def __init__(self, lessons: Iterable[LessonCreate] = ()) -> None:
        self._lessons: dict[str, LessonRead] = {}
        self._orders: list[OrderRead] = []
        self._order_ids = itertools.count(1)
        # One lock per stored lesson, created with the lesson itself.
        self._locks: dict[str, asyncio.Lock] = {}
        for lesson in lessons:
            self._add(lesson)

    def _add(self, lesson: LessonCreate) -> bool:
        if lesson.id in self._lessons:
            return False
        self._lessons[lesson.id] = LessonRead(**lesson.model_dump())
        self._locks[lesson.id] = asyncio.Lock()
        return True

    async def ping(self) -> None:
        return None

    async def list_lessons(self) -> list[LessonRead]:
        return [lesson.model_copy() for lesson in self._lessons.values()]

    async def find_lesson(self, lesson_id: str) -> LessonRead | None:
        lesson = self._lessons.get(lesson_id)
        return lesson.model_copy() if lesson else None

    async def search_lessons(self, text: str, number: float | None = None) -> list[LessonRead]:
        needle = text.casefold()
        results = []
        for lesson in self._lessons.values():
            if needle in lesson.topic.casefold() or needle in lesson.location.casefold():
                results.append(lesson.model_copy())
            elif number is not None and number in (lesson.price, lesson.space):
                results.append(lesson.model_copy())
        return results

    async def update_lesson(self, lesson_id: str, update: LessonUpdate) -> LessonRead | None:
        lock = self._locks.get(lesson_id)
        if lock is None:
            return None
        async with lock:
            lesson = self._lessons[lesson_id]
            updated = lesson.model_copy(update=update.changes())
            self._lessons[lesson_id] = updated
            return updated.model_copy()

    async def reserve_space(self, lesson_id: str, qty: int) -> ReservationOutcome:
        lock = self._locks.get(lesson_id)
        if lock is None:
            return ReservationOutcome.NOT_FOUND
        async with lock:
            lesson = self._lessons[lesson_id]
            if lesson.space < qty:
                return ReservationOutcome.INSUFFICIENT
            self._lessons[lesson_id] = lesson.model_copy(update={"space": lesson.space - qty})
            return ReservationOutcome.OK

    async def release_space(self, lesson_id: str, qty: int) -> bool:
        lock = self._locks.get(lesson_id)
        if lock is None:
            return False
        async with lock:
            lesson = self._lessons[lesson_id]
            self._lessons[lesson_id] = lesson.model_copy(update={"space": lesson.space + qty})
            return True

    async def insert_order(self, order: OrderCreate) -> OrderRead:
        stored = OrderRead(id=next(self._order_ids), **order.model_dump())
        self._orders.append(stored)
        return stored.model_copy(deep=True)

    async def list_orders(self) -> list[OrderRead]:
        return [order.model_copy(deep=True) for order in self._orders]

    async def count_lessons(self) -> int:
        return len(self._lessons)

    async def insert_lessons(self, lessons: Iterable[LessonCreate]) -> int:
        return sum(1 for lesson in lessons if self._add(lesson))

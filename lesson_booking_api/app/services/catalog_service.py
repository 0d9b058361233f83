"""
Business logic for the lesson catalog.

The ``CatalogService`` is the only sanctioned way to change a lesson.
``update_lesson`` projects an untrusted request body onto the
allow-listed fields, checks types and ranges, and only then hands a
typed ``LessonUpdate`` to the store.  Listing, search and bulk seeding
live here too so the HTTP layer never talks to a store directly.
"""

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from lesson_booking_api.app.core.errors import InvalidFieldError, InvalidTypeError
from lesson_booking_api.app.schemas.lesson import (
    LESSON_UPDATE_FIELDS,
    MAX_SPACE,
    LessonCreate,
    LessonRead,
    LessonUpdate,
)
from lesson_booking_api.app.stores.interfaces import CatalogStore, ReservationOutcome


logger = logging.getLogger(__name__)


def is_number(value: Any) -> bool:
    """True for finite ints and floats.  ``bool`` is not a number here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def as_count(value: Any) -> Optional[int]:
    """Return ``value`` as an int if it is a whole number, else None."""
    if not is_number(value):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        return int(value)
    return value


def parse_number(text: str) -> Optional[float]:
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class CatalogService:
    """Service for reading and updating lessons."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    async def list_lessons(self) -> List[LessonRead]:
        return await self.store.list_lessons()

    async def find_lesson(self, lesson_id: str) -> Optional[LessonRead]:
        return await self.store.find_lesson(lesson_id)

    async def search_lessons(self, query: Optional[str]) -> List[LessonRead]:
        """Search lessons by topic or location, or by exact price/space.

        A blank query returns the whole catalog.  The query is matched
        literally (case-insensitive substring), never as a pattern.
        """
        text = (query or "").strip()
        if not text:
            return await self.store.list_lessons()
        return await self.store.search_lessons(text, parse_number(text))

    async def update_lesson(self, lesson_id: str, fields: Any) -> Optional[LessonRead]:
        """Apply a partial update to a lesson.

        Returns the updated lesson, or ``None`` when no lesson has the
        given id.  An empty update returns the lesson unchanged.

        Raises:
            InvalidFieldError: a key outside topic/location/price/space.
            InvalidTypeError: a value of the wrong type or out of range.
        """
        update = self.validate_update(lesson_id, fields)
        if not update.changes():
            return await self.store.find_lesson(lesson_id)
        lesson = await self.store.update_lesson(lesson_id, update)
        if lesson is not None:
            logger.info("Lesson %s updated: %s", lesson_id, update.changes())
        return lesson

    @staticmethod
    def validate_update(lesson_id: str, fields: Any) -> LessonUpdate:
        """Turn a raw request body into a ``LessonUpdate``."""
        if not isinstance(fields, Mapping):
            raise InvalidTypeError("body", "a JSON object")
        body = dict(fields)

        # The id travels in the URL; echoing it back in the body is harmless.
        if "id" in body and body["id"] == lesson_id:
            del body["id"]

        # ``spaces`` is an older spelling of ``space``.
        if "spaces" in body and "space" not in body:
            body["space"] = body.pop("spaces")

        for key in body:
            if key not in LESSON_UPDATE_FIELDS:
                raise InvalidFieldError(str(key))

        for key in ("topic", "location"):
            if key in body and not isinstance(body[key], str):
                raise InvalidTypeError(key, "a string")

        if "price" in body:
            if not is_number(body["price"]):
                raise InvalidTypeError("price", "a number")
            try:
                price = float(body["price"])
            except OverflowError:
                raise InvalidTypeError("price", "a finite number") from None
            if price < 0:
                raise InvalidTypeError("price", "a non-negative number")
            body["price"] = price

        if "space" in body:
            if not is_number(body["space"]):
                raise InvalidTypeError("space", "a number")
            count = as_count(body["space"])
            if count is None or not 0 <= count <= MAX_SPACE:
                raise InvalidTypeError("space", "a non-negative whole number")
            body["space"] = count

        return LessonUpdate(**body)

    async def reserve_space(self, lesson_id: str, qty: Any) -> ReservationOutcome:
        count = as_count(qty)
        if count is None or count < 1:
            raise InvalidTypeError("qty", "a positive whole number")
        return await self.store.reserve_space(lesson_id, count)

    async def seed_lessons(self, lessons: Iterable[LessonCreate], only_if_empty: bool = True) -> int:
        """Bulk load lessons.  Returns the number inserted.

        With ``only_if_empty`` (the default) nothing is written when the
        catalog already holds lessons.
        """
        if only_if_empty:
            count = await self.store.count_lessons()
            if count:
                logger.info("Lessons already present (%s); skipping seed", count)
                return 0
        inserted = await self.store.insert_lessons(lessons)
        logger.info("Seeded %s lesson(s)", inserted)
        return inserted

    @staticmethod
    def load_seed_file(path: str | Path) -> List[LessonCreate]:
        """Read a JSON array of lessons.

        Raises ``ValueError`` if the file is not a list of valid lessons.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Seed file {path} must contain a JSON array")
        lessons = []
        for index, raw in enumerate(data):
            if isinstance(raw, dict) and "spaces" in raw and "space" not in raw:
                raw = {**raw, "space": raw["spaces"]}
                raw.pop("spaces")
            try:
                lessons.append(LessonCreate.model_validate(raw))
            except ValidationError as exc:
                raise ValueError(f"Invalid lesson at index {index} in {path}: {exc}") from exc
        return lessons

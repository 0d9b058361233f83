"""SQLite implementation of the CatalogStore.

Seat reservation is a single conditional ``UPDATE``; SQLite executes
it atomically, so two concurrent orders can never both take the last
seat.
"""

import json
import logging
import sqlite3
from typing import Iterable

from lesson_booking_api.app.core.db import Database
from lesson_booking_api.app.schemas.lesson import (
    LESSON_UPDATE_FIELDS,
    MAX_SPACE,
    LessonCreate,
    LessonRead,
    LessonUpdate,
)
from lesson_booking_api.app.schemas.order import OrderCreate, OrderItem, OrderRead
from lesson_booking_api.app.stores.interfaces import CatalogStore, ReservationOutcome


logger = logging.getLogger(__name__)

LESSON_COLUMNS = "id, topic, location, price, space, image"


def _row_to_lesson(row: sqlite3.Row) -> LessonRead:
    return LessonRead(
        id=row["id"],
        topic=row["topic"],
        location=row["location"],
        price=row["price"],
        space=row["space"],
        image=row["image"],
    )


def _row_to_order(row: sqlite3.Row) -> OrderRead:
    items = [OrderItem(**item) for item in json.loads(row["items"])]
    return OrderRead(
        id=row["id"],
        name=row["name"],
        phone=row["phone"],
        items=items,
        created_at=row["created_at"],
    )


class SQLiteCatalogStore(CatalogStore):
    """Lessons and orders stored in two SQLite tables."""

    def __init__(self, database: Database) -> None:
        self.database = database

    @property
    def name(self) -> str:
        return self.database.name

    async def open(self) -> None:
        self.database.init()

    async def close(self) -> None:
        self.database.close()

    async def ping(self) -> None:
        self.database.ping()

    async def list_lessons(self) -> list[LessonRead]:
        with self.database.cursor() as cursor:
            rows = cursor.execute(f"SELECT {LESSON_COLUMNS} FROM lessons ORDER BY seq").fetchall()
        return [_row_to_lesson(row) for row in rows]

    async def find_lesson(self, lesson_id: str) -> LessonRead | None:
        with self.database.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {LESSON_COLUMNS} FROM lessons WHERE id = ?",
                (lesson_id,),
            ).fetchone()
        return _row_to_lesson(row) if row else None

    async def search_lessons(self, text: str, number: float | None = None) -> list[LessonRead]:
        query = (
            f"SELECT {LESSON_COLUMNS} FROM lessons "
            "WHERE instr(casefold(topic), casefold(?)) > 0 OR instr(casefold(location), casefold(?)) > 0"
        )
        params: list = [text, text]
        if number is not None:
            query += " OR price = ? OR space = ?"
            params.extend([number, number])
        query += " ORDER BY seq"
        with self.database.cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        return [_row_to_lesson(row) for row in rows]

    async def update_lesson(self, lesson_id: str, update: LessonUpdate) -> LessonRead | None:
        changes = update.changes()
        with self.database.cursor() as cursor:
            if changes:
                # Column names come from the allow-list, never from the request.
                columns = [field for field in LESSON_UPDATE_FIELDS if field in changes]
                assignments = ", ".join(f"{column} = ?" for column in columns)
                params = [changes[column] for column in columns] + [lesson_id]
                cursor.execute(f"UPDATE lessons SET {assignments} WHERE id = ?", tuple(params))
                if cursor.rowcount == 0:
                    return None
            row = cursor.execute(
                f"SELECT {LESSON_COLUMNS} FROM lessons WHERE id = ?",
                (lesson_id,),
            ).fetchone()
        return _row_to_lesson(row) if row else None

    async def reserve_space(self, lesson_id: str, qty: int) -> ReservationOutcome:
        with self.database.cursor() as cursor:
            # No lesson can hold more seats than an INTEGER column stores.
            if qty <= MAX_SPACE:
                cursor.execute(
                    "UPDATE lessons SET space = space - ? WHERE id = ? AND space >= ?",
                    (qty, lesson_id, qty),
                )
                if cursor.rowcount == 1:
                    return ReservationOutcome.OK
            exists = cursor.execute("SELECT 1 FROM lessons WHERE id = ?", (lesson_id,)).fetchone()
        return ReservationOutcome.INSUFFICIENT if exists else ReservationOutcome.NOT_FOUND

    async def release_space(self, lesson_id: str, qty: int) -> bool:
        with self.database.cursor() as cursor:
            cursor.execute(
                "UPDATE lessons SET space = space + ? WHERE id = ?",
                (qty, lesson_id),
            )
            return cursor.rowcount == 1

    async def insert_order(self, order: OrderCreate) -> OrderRead:
        items_json = json.dumps([item.model_dump() for item in order.items])
        with self.database.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO orders (name, phone, items, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (order.name, order.phone, items_json, order.created_at.isoformat()),
            )
            order_id = cursor.lastrowid
        return OrderRead(id=order_id, **order.model_dump())

    async def list_orders(self) -> list[OrderRead]:
        with self.database.cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, name, phone, items, created_at FROM orders ORDER BY id"
            ).fetchall()
        return [_row_to_order(row) for row in rows]

    async def count_lessons(self) -> int:
        with self.database.cursor() as cursor:
            row = cursor.execute("SELECT COUNT(*) AS total FROM lessons").fetchone()
        return row["total"] if row else 0

    async def insert_lessons(self, lessons: Iterable[LessonCreate]) -> int:
        inserted = 0
        with self.database.cursor() as cursor:
            for lesson in lessons:
                cursor.execute(
                    """
                    INSERT OR IGNORE INTO lessons (id, topic, location, price, space, image)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (lesson.id, lesson.topic, lesson.location, lesson.price, lesson.space, lesson.image),
                )
                inserted += cursor.rowcount
        logger.info("Inserted %s lesson(s) into %s", inserted, self.name)
        return inserted

"""
Business logic for order admission.

``OrderService.submit_order`` validates an order, reserves seats for
every item and persists the order.  Validation fails fast: the first
violation is raised before anything is written.  Seats are reserved
item by item through the store's atomic conditional decrement; when a
later item cannot be reserved (or persisting the order fails), the
seats already taken by this request are given back before the error
propagates.  There is no cross-record transaction, so this
compensation is what keeps a failed multi-item order from leaking
seats.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, List

from lesson_booking_api.app.core.errors import (
    InsufficientSpaceError,
    InvalidItemsError,
    InvalidNameError,
    InvalidPhoneError,
    UnknownLessonError,
)
from lesson_booking_api.app.schemas.order import OrderCreate, OrderItem, OrderRead
from lesson_booking_api.app.services.catalog_service import as_count
from lesson_booking_api.app.stores.interfaces import CatalogStore, ReservationOutcome


logger = logging.getLogger(__name__)

# Letters (any script) separated by whitespace.
NAME_PATTERN = re.compile(r"[^\W\d_]+(?:\s+[^\W\d_]+)*")
PHONE_PATTERN = re.compile(r"[0-9]+")

# Keys accepted for the lesson reference of an order item, in priority order.
ITEM_LESSON_KEYS = ("lessonId", "lesson_id", "id")


def validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidNameError()
    name = name.strip()
    if not name or not NAME_PATTERN.fullmatch(name):
        raise InvalidNameError()
    return name


def validate_phone(phone: Any) -> str:
    if not isinstance(phone, str):
        raise InvalidPhoneError()
    phone = phone.strip()
    if not PHONE_PATTERN.fullmatch(phone):
        raise InvalidPhoneError()
    return phone


def validate_items(items: Any) -> List[OrderItem]:
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise InvalidItemsError("items must be a list")
    if not items:
        raise InvalidItemsError("items must not be empty")

    parsed: List[OrderItem] = []
    for index, item in enumerate(items):
        if isinstance(item, OrderItem):
            parsed.append(item)
            continue
        if not isinstance(item, Mapping):
            raise InvalidItemsError("each item must be an object with id and qty", index)

        lesson_id = next((item[key] for key in ITEM_LESSON_KEYS if key in item), None)
        if not isinstance(lesson_id, str) or not lesson_id.strip():
            raise InvalidItemsError("item id must be a non-empty string", index)

        qty = as_count(item.get("qty"))
        if qty is None or qty < 1:
            raise InvalidItemsError("item qty must be a positive whole number", index)

        parsed.append(OrderItem(lesson_id=lesson_id.strip(), qty=qty))
    return parsed


class OrderService:
    """Service for admitting orders against the lesson catalog."""

    def __init__(self, store: CatalogStore) -> None:
        self.store = store

    async def submit_order(self, name: Any, phone: Any, items: Any) -> OrderRead:
        """Validate, reserve seats for and persist an order.

        Raises:
            InvalidNameError, InvalidPhoneError, InvalidItemsError: malformed input.
            UnknownLessonError: an item references a lesson that does not exist.
            InsufficientSpaceError: a lesson has fewer seats than requested.
            StoreUnavailableError: the store failed; nothing is retried.
        """
        name = validate_name(name)
        phone = validate_phone(phone)
        order_items = validate_items(items)

        for item in order_items:
            if await self.store.find_lesson(item.lesson_id) is None:
                raise UnknownLessonError(item.lesson_id)

        reserved: List[OrderItem] = []
        try:
            for item in order_items:
                outcome = await self.store.reserve_space(item.lesson_id, item.qty)
                if outcome is ReservationOutcome.OK:
                    reserved.append(item)
                elif outcome is ReservationOutcome.NOT_FOUND:
                    raise UnknownLessonError(item.lesson_id)
                else:
                    lesson = await self.store.find_lesson(item.lesson_id)
                    raise InsufficientSpaceError(
                        item.lesson_id,
                        requested=item.qty,
                        available=lesson.space if lesson else None,
                    )

            order = OrderCreate(
                name=name,
                phone=phone,
                items=order_items,
                created_at=datetime.now(timezone.utc),
            )
            stored = await self.store.insert_order(order)
        except Exception as exc:
            if reserved:
                logger.info("Order for %s rejected (%s); releasing %s reservation(s)", name, exc, len(reserved))
                await self._release(reserved)
            raise

        logger.info(
            "Order %s accepted: %s",
            stored.id,
            ", ".join(f"{item.lesson_id} x{item.qty}" for item in stored.items),
        )
        return stored

    async def _release(self, reserved: List[OrderItem]) -> None:
        # Newest first, so the catalog steps back through the same states.
        for item in reversed(reserved):
            try:
                await self.store.release_space(item.lesson_id, item.qty)
            except Exception:
                logger.exception("Failed to release %s seat(s) of lesson %s", item.qty, item.lesson_id)

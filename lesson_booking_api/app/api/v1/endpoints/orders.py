"""
Order endpoints for API v1.

``POST /orders`` admits an order: it validates the payload, reserves
seats for every item and stores the order.  Malformed input and
unknown lessons yield 400; a lesson without enough seats yields 409.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from lesson_booking_api.app.api.deps import get_order_service
from lesson_booking_api.app.api.errors import to_http_exception
from lesson_booking_api.app.core.errors import DomainError
from lesson_booking_api.app.schemas.order import OrderCreated
from lesson_booking_api.app.services.order_service import OrderService


router = APIRouter()


@router.post(
    "/orders",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    payload: Any = Body(None),
    orders: OrderService = Depends(get_order_service),
) -> OrderCreated:
    """Place an order.

    Expects ``{"name": ..., "phone": ..., "items": [{"id": ..., "qty": ...}]}``.
    A body that is not a JSON object is treated as an empty one, so the
    first missing field (``name``) is reported.
    """
    data = payload if isinstance(payload, dict) else {}
    try:
        order = await orders.submit_order(data.get("name"), data.get("phone"), data.get("items"))
    except DomainError as e:
        raise to_http_exception(e) from e
    return OrderCreated(order_id=order.id)

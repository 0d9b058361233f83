"""
Pydantic models for orders.

An order books seats in one or more lessons.  ``OrderCreate`` is the
validated, ready-to-persist form produced by the admission service;
``OrderRead`` is the stored record including its assigned id.  The
storefront posts items as ``{"id": ..., "qty": ...}``; internally the
lesson reference is called ``lesson_id``.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class OrderItem(BaseModel):
    lesson_id: str = Field(..., min_length=1)
    qty: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    """Schema for an accepted order before it is stored."""

    name: str
    phone: str
    items: List[OrderItem]
    created_at: datetime


class OrderRead(OrderCreate):
    """Schema for a persisted order."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class OrderCreated(BaseModel):
    """Response body of ``POST /orders``."""

    ok: bool = True
    order_id: int = Field(..., serialization_alias="orderId")

"""
FastAPI dependencies.

Services are built once per application in ``create_app`` and kept on
``app.state``; handlers receive them through these helpers.
"""

from fastapi import Request

from lesson_booking_api.app.services.catalog_service import CatalogService
from lesson_booking_api.app.services.order_service import OrderService


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service

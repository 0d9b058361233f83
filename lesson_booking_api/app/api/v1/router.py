"""
Top-level router for version 1 of the API.

This router aggregates the storefront routers.  Each endpoint module
declares its full paths (``/lessons``, ``/orders``, ...); the optional
``API_PREFIX`` setting is applied when the router is mounted in
``main.py``.
"""

from fastapi import APIRouter

from .endpoints import health, images, lessons, orders, search

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(lessons.router, tags=["lessons"])
router.include_router(search.router, tags=["lessons"])
router.include_router(orders.router, tags=["orders"])
router.include_router(images.router, tags=["images"])

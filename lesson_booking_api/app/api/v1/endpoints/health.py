"""
Health and index endpoints for API v1.

``GET /health`` pings the catalog store.  When the store could not be
opened at startup the service keeps running and this endpoint reports
the failure with a 500 until it is fixed.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from lesson_booking_api.app.core.errors import DomainError


logger = logging.getLogger(__name__)

router = APIRouter()

ROUTES = [
    "GET /health",
    "GET /lessons",
    "GET /lessons/:id",
    "GET /search?query=",
    "POST /orders",
    "PUT /lessons/:id",
    "GET /images/:file",
]


@router.get("/")
async def index() -> Dict[str, Any]:
    return {"status": "OK", "routes": ROUTES}


@router.get("/health")
async def health(request: Request):
    store = request.app.state.store
    try:
        await store.ping()
    except DomainError as e:
        logger.error("/health error: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "error": e.message},
        )
    return {
        "ok": True,
        "db": store.name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

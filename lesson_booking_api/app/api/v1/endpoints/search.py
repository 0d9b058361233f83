"""
Search endpoint for API v1.

``GET /search?query=...`` matches lessons whose topic or location
contains the query (case-insensitive).  A numeric query also matches
lessons with that exact price or number of seats left.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from lesson_booking_api.app.api.deps import get_catalog_service
from lesson_booking_api.app.api.errors import to_http_exception
from lesson_booking_api.app.core.errors import DomainError
from lesson_booking_api.app.schemas.lesson import LessonRead
from lesson_booking_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("/search", response_model=List[LessonRead])
async def search_lessons(
    query: Optional[str] = Query(None, description="Text, price or seat count to look for"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[LessonRead]:
    try:
        return await catalog.search_lessons(query)
    except DomainError as e:
        raise to_http_exception(e) from e

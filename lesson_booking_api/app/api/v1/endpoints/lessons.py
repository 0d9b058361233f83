"""
Lesson endpoints for API v1.

These routes list the catalog, fetch a single lesson and update a
lesson's descriptive fields, price or remaining seats.  The update
body is passed to ``CatalogService`` as raw JSON so that unknown
fields and wrong types are rejected by the allow-list check with a
400, rather than being silently dropped by model parsing.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Path

from lesson_booking_api.app.api.deps import get_catalog_service
from lesson_booking_api.app.api.errors import to_http_exception
from lesson_booking_api.app.core.errors import DomainError, NotFoundError
from lesson_booking_api.app.schemas.lesson import LessonRead
from lesson_booking_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("/lessons", response_model=List[LessonRead])
async def list_lessons(
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[LessonRead]:
    """Return every lesson in the catalog."""
    try:
        return await catalog.list_lessons()
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/lessons/{lesson_id}", response_model=LessonRead)
async def get_lesson(
    lesson_id: str = Path(..., description="Lesson slug, e.g. Art-Hen-70"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> LessonRead:
    try:
        lesson = await catalog.find_lesson(lesson_id)
    except DomainError as e:
        raise to_http_exception(e) from e
    if lesson is None:
        raise to_http_exception(NotFoundError(lesson_id))
    return lesson


@router.put("/lessons/{lesson_id}", response_model=LessonRead)
async def update_lesson(
    lesson_id: str = Path(..., description="Lesson slug, e.g. Art-Hen-70"),
    body: Any = Body(None),
    catalog: CatalogService = Depends(get_catalog_service),
) -> LessonRead:
    """Update ``topic``, ``location``, ``price`` or ``space`` of a lesson.

    ``spaces`` is accepted in place of ``space``.  Any other field, or a
    value of the wrong type, yields 400.  Unknown lessons yield 404.
    """
    try:
        lesson = await catalog.update_lesson(lesson_id, {} if body is None else body)
    except DomainError as e:
        raise to_http_exception(e) from e
    if lesson is None:
        raise HTTPException(
            status_code=404,
            detail={**NotFoundError(lesson_id).to_dict(), "tried": lesson_id},
        )
    return lesson

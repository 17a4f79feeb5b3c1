"""
LessonHub Backend — Lesson Route Handlers
===========================================

What:  GET /lessons (list everything) and PUT /lessons/{id} (partial update).
How:   Delegates to LessonService and serializes the MongoDB documents.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path, Request
from pymongo.asynchronous.database import AsyncDatabase

from lessonhub.database import get_database
from lessonhub.middleware.logging import annotate
from lessonhub.schemas.documents import (
    ErrorResponse,
    serialize_document,
    serialize_documents,
)
from lessonhub.services.lesson_service import lesson_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Lessons"])


@router.get(
    "/lessons",
    response_model=List[Dict[str, Any]],
    responses={
        200: {"description": "Every lesson document"},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="List all lessons",
)
async def list_lessons(
    request: Request,
    db: AsyncDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    """Return the whole lesson collection, unpaginated."""
    lessons = await lesson_service.list_lessons(db)
    annotate(request, lesson_count=len(lessons))
    return serialize_documents(lessons)


@router.put(
    "/lessons/{lesson_id}",
    response_model=Dict[str, Any],
    responses={
        200: {"description": "The lesson after the update"},
        400: {"description": "Invalid update body", "model": ErrorResponse},
        404: {"description": "No lesson with this id", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Update a lesson by its numeric id",
    description=(
        "Applies the body's top-level fields to the lesson whose `id` field "
        "matches the path parameter (not MongoDB's `_id`). Nested objects are "
        "replaced, not merged. Returns the re-read document."
    ),
)
async def update_lesson(
    request: Request,
    lesson_id: int = Path(description="Application-level numeric lesson id"),
    fields: Dict[str, Any] = Body(description="Fields to set on the lesson"),
    db: AsyncDatabase = Depends(get_database),
) -> Dict[str, Any]:
    annotate(request, lesson_id=lesson_id)
    updated = await lesson_service.update_lesson(db, lesson_id, fields)
    return serialize_document(updated)

"""
LessonHub Backend — Search Route Handler
==========================================

What:  GET /search?term=... returns lessons matching a free-text term.
How:   The term is read from `term`, or from `word` (the parameter name used
       by older clients) when `term` is absent or empty. Query construction lives in services/search.py.

The search collection may live in a different database than the lessons
collection (SEARCH_DATABASE), so this route depends on the connection
rather than on the default database.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, Request

from lessonhub.config import settings
from lessonhub.database import MongoConnection, get_connection
from lessonhub.middleware.logging import annotate
from lessonhub.schemas.documents import ErrorResponse, serialize_documents
from lessonhub.services.search import is_numeric_term, search_service

router = APIRouter(tags=["Search"])


@router.get(
    "/search",
    response_model=List[Dict[str, Any]],
    responses={
        200: {"description": "Matching lesson documents"},
        400: {"description": "Missing search term", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Search lessons by keyword or number",
    description=(
        "Numeric terms match the text form of numeric fields (price, "
        "availableSpaces) by substring; other terms match text fields "
        "(title, location) by case-insensitive substring."
    ),
)
async def search_lessons(
    request: Request,
    term: str | None = Query(default=None, description="Search text"),
    word: str | None = Query(default=None, description="Alias of `term`"),
    connection: MongoConnection = Depends(get_connection),
) -> List[Dict[str, Any]]:
    # An empty `term` falls back to `word`
    text = (term or word or "").strip()
    if text:
        annotate(request, search_mode="numeric" if is_numeric_term(text) else "text")

    db = connection.get_database(settings.search_database_name)
    results = await search_service.search_lessons(db, term or word)
    return serialize_documents(results)

"""
LessonHub Backend — Lesson Search
===================================

What:  Builds and runs the "search-as-you-type" query behind GET /search.
How:   Branches on the lexical shape of the term:

    Numeric term ("20", "4.5", "-3")
        Each numeric field is converted to text with `$convert` and matched
        with `$regexMatch`, so "20" finds prices 20, 120, and 200 but not 3.

        {"$expr": {"$or": [
            {"$regexMatch": {"input": {"$convert": {"input": "$price",
                                                    "to": "string",
                                                    "onError": None,
                                                    "onNull": None}},
                             "regex": "20", "options": "i"}},
            ...
        ]}}

    Anything else ("math", "1_000", "1e3")
        Case-insensitive substring match on each text field.

        {"$or": [{"title": {"$regex": "math", "$options": "i"}}, ...]}

    The term is regex-escaped, so "c++" or "(intro" are matched literally
    instead of being interpreted as patterns.

Trade-offs:
    No text index and no relevance ranking. Substring matching on numeric
    text produces false positives by construction ("1" matches 1, 10, 21).
    A numeric field that is missing, null, or not convertible to a string
    (an array or an object) converts to null and never matches.
"""

import logging
import re
from typing import Any, Dict, List, Sequence

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from lessonhub.config import settings
from lessonhub.exceptions import DatabaseError, ValidationError

logger = logging.getLogger(__name__)

# Plain ASCII decimals only: no exponents, digit separators, or non-ASCII digits
_NUMERIC_TERM = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


def is_numeric_term(term: str) -> bool:
    """True when the term is a plain decimal number ("20", "-1.5", ".5")."""
    return _NUMERIC_TERM.fullmatch(term) is not None


def _as_string(field: str) -> Dict[str, Any]:
    return {
        "$convert": {
            "input": f"${field}",
            "to": "string",
            "onError": None,
            "onNull": None,
        }
    }


def build_search_query(
    term: str,
    text_fields: Sequence[str],
    numeric_fields: Sequence[str],
) -> Dict[str, Any]:
    """
    Build the MongoDB filter for a search term.

    Args:
        term: Already stripped, non-empty search text.
        text_fields: Fields matched with `$regex` for non-numeric terms.
        numeric_fields: Fields converted to strings for numeric terms.

    Raises:
        ValueError: The list of fields for the selected branch is empty.
    """
    pattern = re.escape(term)

    if is_numeric_term(term):
        if not numeric_fields:
            raise ValueError("No numeric search fields configured")
        clauses: List[Dict[str, Any]] = [
            {
                "$regexMatch": {
                    "input": _as_string(field),
                    "regex": pattern,
                    "options": "i",
                }
            }
            for field in numeric_fields
        ]
        expr = clauses[0] if len(clauses) == 1 else {"$or": clauses}
        return {"$expr": expr}

    if not text_fields:
        raise ValueError("No text search fields configured")
    conditions = [
        {field: {"$regex": pattern, "$options": "i"}} for field in text_fields
    ]
    return conditions[0] if len(conditions) == 1 else {"$or": conditions}


class SearchService:
    """Runs search queries against the configured search collection."""

    async def search_lessons(
        self, db: AsyncDatabase, term: str | None
    ) -> List[Dict[str, Any]]:
        """
        Return every document in the search collection matching the term.

        Raises:
            ValidationError: The term is missing or blank (no query is run).
            DatabaseError: The query failed.
        """
        term = (term or "").strip()
        if not term:
            raise ValidationError(message="A search term is required", field="term")

        query = build_search_query(
            term,
            text_fields=settings.search_text_fields_list,
            numeric_fields=settings.search_numeric_fields_list,
        )
        mode = "numeric" if is_numeric_term(term) else "text"

        try:
            results = await db[settings.search_collection].find(query).to_list(None)
        except PyMongoError as e:
            logger.error("Search for %r failed: %s", term, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not search lessons. Please try again.",
                context={"collection": settings.search_collection, "error_type": type(e).__name__},
            )

        logger.info("Search %r (%s) matched %d documents", term, mode, len(results))
        return results


search_service = SearchService()

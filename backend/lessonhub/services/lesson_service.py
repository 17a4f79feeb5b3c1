"""
LessonHub Backend — Lesson Service
====================================

What:  Store operations for the lesson collection (list, update).
How:   One collection call per operation; pymongo errors are wrapped in
       DatabaseError so the global handler answers with a generic 500.
Who:   Called by the lesson route handlers.

Lesson identity:
    Lessons are addressed by their application-level numeric `id` field,
    never by MongoDB's `_id`. Lessons are seeded out of band and never
    created or deleted through the API.

Update semantics:
    PUT applies the body with `$set`, a shallow merge of top-level keys:
    a nested object in the body replaces the stored one wholesale. The
    document is then re-read so the response reflects the post-update state.
    Atomicity is whatever MongoDB gives a single-document update; the
    update and the re-read are two separate operations.
"""

import logging
from typing import Any, Dict, List

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from lessonhub.config import settings
from lessonhub.exceptions import DatabaseError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Fields a client may never overwrite through PUT /lessons/{id}
PROTECTED_FIELDS = {"_id"}


def validate_update_fields(fields: Dict[str, Any]) -> None:
    """
    Reject update bodies `$set` would reject or misinterpret.

    Raises:
        ValidationError: Empty body, `_id` present, or a key that is an
            operator (`$inc`) or a dotted path (`a.b`), either of which would
            turn the shallow merge into something else.
    """
    if not fields:
        raise ValidationError(message="Update body must contain at least one field", field="body")

    for key in fields:
        if key in PROTECTED_FIELDS:
            raise ValidationError(message=f"Field '{key}' cannot be updated", field=key)
        if not key or key.startswith("$") or "." in key:
            raise ValidationError(
                message=f"Invalid field name '{key}'. Only top-level field names are allowed.",
                field=key,
            )


class LessonService:
    """Stateless lesson operations; the database is passed in per call."""

    async def list_lessons(self, db: AsyncDatabase) -> List[Dict[str, Any]]:
        """Return every lesson document, unfiltered and unpaginated."""
        try:
            lessons = await db[settings.lessons_collection].find({}).to_list(None)
        except PyMongoError as e:
            logger.error("Failed to fetch lessons: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch lessons",
                context={"collection": settings.lessons_collection, "error_type": type(e).__name__},
            )

        logger.info("Showing %d lessons", len(lessons))
        return lessons

    async def update_lesson(
        self, db: AsyncDatabase, lesson_id: int, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge `fields` into the lesson with `id == lesson_id` and return it.

        Raises:
            ValidationError: The body is not a valid set of top-level fields.
            NotFoundError: No lesson has that id (nothing is modified).
            DatabaseError: The update or the re-read failed.
        """
        validate_update_fields(fields)
        collection = db[settings.lessons_collection]

        try:
            result = await collection.update_one({"id": lesson_id}, {"$set": fields})
            if result.matched_count == 0:
                raise NotFoundError(resource="lesson", resource_id=str(lesson_id))

            updated = await collection.find_one({"id": lesson_id})
        except PyMongoError as e:
            logger.error("Failed to update lesson %s: %s", lesson_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to update lesson",
                context={"lesson_id": lesson_id, "error_type": type(e).__name__},
            )

        if updated is None:
            # Deleted out of band between the update and the re-read
            raise NotFoundError(resource="lesson", resource_id=str(lesson_id))

        logger.info(
            "Lesson %s updated (fields=%s, modified=%d)",
            lesson_id,
            sorted(fields),
            result.modified_count,
        )
        return updated


lesson_service = LessonService()

"""
LessonHub Backend — Order Service
===================================

What:  Persists client-submitted orders in the order collection.
How:   The body is inserted verbatim; the response is the store's insertion
       acknowledgment. There is no referential check against lessons and no
       duplicate detection.
"""

import logging
from typing import Any, Dict

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from lessonhub.config import settings
from lessonhub.exceptions import DatabaseError, ValidationError
from lessonhub.schemas.documents import InsertAcknowledgment

logger = logging.getLogger(__name__)


class OrderService:
    async def create_order(
        self, db: AsyncDatabase, order: Dict[str, Any]
    ) -> InsertAcknowledgment:
        """
        Insert `order` as a new document.

        The dict is copied before insertion because pymongo adds `_id` to the
        mapping it is given.

        Raises:
            ValidationError: The body is an empty object.
            DatabaseError: The insert failed.
        """
        if not order:
            raise ValidationError(message="Order body must not be empty", field="body")

        document = dict(order)
        try:
            result = await db[settings.orders_collection].insert_one(document)
        except PyMongoError as e:
            logger.error("Failed to create order: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create order",
                context={"collection": settings.orders_collection, "error_type": type(e).__name__},
            )

        logger.info("Order created: %s", result.inserted_id)
        return InsertAcknowledgment(
            acknowledged=result.acknowledged,
            insertedId=str(result.inserted_id),
        )


order_service = OrderService()

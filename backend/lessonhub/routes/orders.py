"""
LessonHub Backend — Order Route Handler
=========================================

What:  POST /order stores the JSON body as a new order document.

The body must be a JSON object (FastAPI answers 422 for arrays, scalars, or
malformed JSON) and must not be empty (400). Its contents are otherwise
persisted exactly as sent.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from pymongo.asynchronous.database import AsyncDatabase

from lessonhub.database import get_database
from lessonhub.schemas.documents import ErrorResponse, InsertAcknowledgment
from lessonhub.services.order_service import order_service

router = APIRouter(tags=["Orders"])


@router.post(
    "/order",
    response_model=InsertAcknowledgment,
    responses={
        400: {"description": "Empty order body", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create an order",
)
async def create_order(
    order: Dict[str, Any] = Body(description="Arbitrary order document"),
    db: AsyncDatabase = Depends(get_database),
) -> InsertAcknowledgment:
    return await order_service.create_order(db, order)

"""
LessonHub Backend — Pydantic Response Schemas
===============================================

What:  API contracts for the few fixed-shape responses, plus the encoder for
       schema-less MongoDB documents.
How:   Lessons and orders have no fixed schema, so they are returned as plain
       JSON objects. `serialize_document` runs FastAPI's jsonable_encoder with
       an ObjectId encoder so `_id` (and any other ObjectId value) becomes its
       hex string. No fields are added or removed.
"""

from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

# ══════════════════════════════════════════════════════════════════════════
# Document Encoding
# ══════════════════════════════════════════════════════════════════════════


def serialize_document(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a MongoDB document to JSON-compatible data."""
    return jsonable_encoder(dict(document), custom_encoder={ObjectId: str})


def serialize_documents(documents: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(doc) for doc in documents]


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class InsertAcknowledgment(BaseModel):
    """
    What:  The store's acknowledgment of a single-document insert.
    Who:   Returned by POST /order.

    Field names follow the MongoDB driver's own InsertOneResult JSON shape
    so existing clients that read `insertedId` keep working.
    """
    acknowledged: bool = Field(description="Whether the write was acknowledged by the server")
    insertedId: str = Field(description="Hex string of the new document's _id")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the process started")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "lesson with ID '42' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request ID for tracing")

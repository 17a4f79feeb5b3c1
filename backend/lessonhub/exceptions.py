"""
LessonHub Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) translate them
       into structured JSON error responses.
Who:   Raised by services and routes; caught by the global handlers.

Exception Hierarchy:
    LessonHubError (base)
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error
    └── StoreConnectionError   → fatal at startup (process exits)
"""

from typing import Any, Dict, Optional


class LessonHubError(Exception):
    """
    Base exception for all LessonHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not always returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LessonHubError):
    """
    Raised when client input fails validation.

    When:    Missing search term, empty or malformed update/order body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "A search term is required",
            "details": {"field": "term"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(LessonHubError):
    """
    Raised when a requested resource does not exist.

    When:    PUT /lessons/{id} with an unknown lesson id, or a missing image.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(LessonHubError):
    """
    Raised when a MongoDB operation fails.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context (the
    collection, the pymongo error type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreConnectionError(LessonHubError):
    """
    Raised when the initial connection to MongoDB cannot be established.

    This is the only fatal condition: the lifespan lets it propagate, startup
    fails, and the server process exits without accepting connections.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

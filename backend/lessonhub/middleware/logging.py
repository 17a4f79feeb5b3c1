"""
LessonHub Backend — Request Logging Middleware
================================================

What:  One access log line per HTTP request: method, path, status, duration,
       request ID, client IP, and whatever the route attached with
       `annotate()` (the lesson being updated, the search mode, how many
       lessons were listed).
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

    GET /search 200 4.2ms [1a2b3c4d] from 10.0.0.7 search_mode=numeric
    PUT /lessons/3 404 2.9ms [5e6f7a8b] from 10.0.0.7 lesson_id=3

Log levels follow the status class: 5xx → ERROR, 4xx → WARNING,
everything else → INFO. /health is skipped because load balancers hit it
every few seconds.

Request bodies are never logged; orders may contain customer details.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lessonhub.middleware.request_id import request_id_var

logger = logging.getLogger("lessonhub.access")

SKIPPED_PATHS = {"/health"}

# Route annotations a handler may attach; anything else is dropped
ACCESS_FIELDS = ("lesson_id", "lesson_count", "search_mode")


def annotate(request: Request, **fields: Any) -> None:
    """
    Attach domain fields to this request's access log line.

    Usage:
        annotate(request, lesson_id=lesson_id)
    """
    unknown = set(fields) - set(ACCESS_FIELDS)
    if unknown:
        raise ValueError(f"Unknown access log fields: {sorted(unknown)}")
    current: Dict[str, Any] = getattr(request.state, "access_fields", {})
    request.state.access_fields = {**current, **fields}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        # Same scope as the route's Request, so handler annotations are visible
        fields: Dict[str, Any] = getattr(request.state, "access_fields", {})
        suffix = "".join(f" {name}={fields[name]}" for name in ACCESS_FIELDS if name in fields)

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s%s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            suffix,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                **fields,
            },
        )

        return response

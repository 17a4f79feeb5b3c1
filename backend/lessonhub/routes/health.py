"""
LessonHub Backend — Root and Health Check Routes
==================================================

What:  GET / returns a plain-text greeting; GET /health probes MongoDB.
Who:   The greeting is a smoke test for humans; /health is for Docker health
       checks and load balancers.

Status levels:
    - healthy:   MongoDB answered `ping` (HTTP 200)
    - unhealthy: MongoDB did not answer (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from lessonhub import __version__
from lessonhub.config import settings
from lessonhub.database import MongoConnection, get_connection, ping
from lessonhub.schemas.documents import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def root() -> str:
    return settings.greeting


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    connection: MongoConnection = Depends(get_connection),
):
    """Ping MongoDB and report the aggregate status."""
    connected = await ping(connection)
    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body

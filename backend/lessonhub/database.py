"""
LessonHub Backend — MongoDB Client Management
===============================================

What:  Opens, verifies, exposes, and closes the process-wide MongoDB client.
How:   `connect()` builds an AsyncMongoClient from the structured
       DatabaseConfig and runs a `ping` before returning. The application
       lifespan stores the resulting `MongoConnection` on `app.state`; the
       `get_database` dependency hands the selected database to each request.
Who:   `connect()`/`close()` are called by the lifespan in main.py;
       `get_database()` is injected into route handlers via Depends().
When:  One client per process, created at startup and closed at shutdown.

Concurrency:
    A single AsyncMongoClient is shared by all in-flight requests. The driver
    owns pooling and socket management; the application adds no locking,
    queuing, or transaction scoping on top.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from lessonhub.config import Settings
from lessonhub.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)


@dataclass
class MongoConnection:
    """The open client plus the database selected by `db_name`."""

    client: AsyncMongoClient
    database: AsyncDatabase

    def get_database(self, name: str) -> AsyncDatabase:
        if name == self.database.name:
            return self.database
        return self.client[name]


async def connect(settings: Settings) -> MongoConnection:
    """
    Open the MongoDB client and verify it with a `ping` command.

    Raises:
        StoreConnectionError: The URI is invalid or no server answered the
            ping within `db_server_selection_timeout_ms`. Callers treat this
            as fatal; there is no retry.
    """
    config = settings.database
    client: AsyncMongoClient = AsyncMongoClient(
        config.connection_uri(),
        serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
    )
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        await client.close()
        raise StoreConnectionError(
            message=f"Failed to connect to MongoDB: {e}",
            context={"host": config.host, "database": config.name},
        ) from e

    logger.info("Connected to MongoDB at %s (database=%s)", config.host, config.name)
    return MongoConnection(client=client, database=client[config.name])


async def close(connection: MongoConnection) -> None:
    """Close all pooled connections held by the client."""
    await connection.client.close()
    logger.info("MongoDB connection closed")


async def ping(connection: MongoConnection) -> bool:
    """Lightweight liveness probe used by the health route."""
    try:
        await connection.client.admin.command("ping")
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", str(e))
        return False
    return True


def get_connection(request: Request) -> MongoConnection:
    """FastAPI dependency returning the connection owned by the lifespan."""
    return request.app.state.mongo


def get_database(request: Request) -> AsyncDatabase:
    """FastAPI dependency returning the application database."""
    return get_connection(request).database

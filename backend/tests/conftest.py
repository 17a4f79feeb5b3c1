"""
LessonHub Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   MongoDB is replaced by MagicMock/AsyncMock objects shaped like
       pymongo's async API; the ASGI client overrides the database
       dependencies, so no MongoDB server is needed. httpx's ASGITransport
       does not run the lifespan, so the app never tries to connect.

Fixture Hierarchy:
    ├── lessons_collection: Mock collection (find / find_one / update_one / insert_one)
    ├── mock_db: Mock database; every db[name] returns lessons_collection
    ├── mock_connection: Mock MongoConnection wrapping mock_db
    ├── sample_lessons: Seed-style lesson documents with ObjectId _id values
    └── test_client: HTTPX AsyncClient bound to a fresh app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any lessonhub imports
os.environ["DB_PROPERTIES_FILE"] = os.path.join(tempfile.gettempdir(), "lessonhub-test-missing.properties")
os.environ["DB_HOST"] = "localhost:27017"
os.environ["DB_NAME"] = "lessonhub_test"
os.environ["IMAGES_DIR"] = tempfile.mkdtemp(prefix="lessonhub_images_")
os.environ["LOG_LEVEL"] = "WARNING"


def make_cursor(documents=None):
    """A mock AsyncCursor whose to_list() returns `documents`."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    return cursor


@pytest.fixture
def lessons_collection():
    collection = MagicMock()
    collection.find = MagicMock(return_value=make_cursor())
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock()
    collection.insert_one = AsyncMock()
    return collection


@pytest.fixture
def mock_db(lessons_collection):
    """
    Provides a mock AsyncDatabase.

    Usage:
        async def test_list(mock_db, lessons_collection):
            lessons_collection.find.return_value = make_cursor([...])
            result = await lesson_service.list_lessons(mock_db)
    """
    db = MagicMock()
    db.name = "lessonhub_test"
    db.__getitem__.return_value = lessons_collection
    return db


@pytest.fixture
def mock_connection(mock_db):
    connection = MagicMock()
    connection.database = mock_db
    connection.get_database = MagicMock(return_value=mock_db)
    connection.client.admin.command = AsyncMock(return_value={"ok": 1.0})
    return connection


@pytest.fixture
def sample_lessons():
    return [
        {
            "_id": ObjectId("65a1b2c3d4e5f6a7b8c9d0e1"),
            "id": 1,
            "title": "Math",
            "location": "London",
            "price": 100,
            "availableSpaces": 5,
        },
        {
            "_id": ObjectId("65a1b2c3d4e5f6a7b8c9d0e2"),
            "id": 2,
            "title": "English",
            "location": "Oxford",
            "price": 120,
            "availableSpaces": 3,
        },
        {
            "_id": ObjectId("65a1b2c3d4e5f6a7b8c9d0e3"),
            "id": 3,
            "title": "Music",
            "location": "Bristol",
            "price": 3,
            "availableSpaces": 10,
            "schedule": {"day": "Mon", "time": "10:00"},
        },
    ]


@pytest_asyncio.fixture
async def test_client(mock_connection, mock_db):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from lessonhub.database import get_connection, get_database
    from lessonhub.main import create_app

    app = create_app()
    app.dependency_overrides[get_connection] = lambda: mock_connection
    app.dependency_overrides[get_database] = lambda: mock_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

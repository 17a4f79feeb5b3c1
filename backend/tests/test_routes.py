"""
LessonHub Backend — API Endpoint Tests
========================================

What:  End-to-end HTTP tests through the FastAPI app with a mocked MongoDB.
How:   `test_client` (conftest.py) overrides get_connection/get_database, so
       every route talks to the mock collection.

What we test:
    ✅ Status codes and error bodies for every route
    ✅ ObjectId serialization without added or dropped fields
    ✅ Search parameter aliases (term / word) and the no-query 400 path
    ✅ Update and order bodies reach the store unchanged
    ✅ Static images and their 404 fallback
    ✅ X-Request-ID on every response (unsafe client IDs replaced)
    ✅ Access log lines carry the lesson id, lesson count, and search mode
"""

import logging
import re
from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure
from starlette.requests import Request

from lessonhub.middleware.logging import annotate
from lessonhub.services.image_service import ImageService


class TestRootAndHealth:
    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize("supplied", ["<script>", "a b", "x" * 65])
    async def test_unsafe_request_id_is_replaced(self, test_client, supplied):
        response = await test_client.get("/", headers={"X-Request-ID": supplied})

        rid = response.headers["X-Request-ID"]
        assert rid != supplied
        assert re.fullmatch(r"[0-9a-f]{8}", rid)

    @pytest.mark.asyncio
    async def test_health_connected(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_disconnected(self, test_client, mock_connection):
        mock_connection.client.admin.command.side_effect = OperationFailure("down")

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


class TestListLessonsEndpoint:
    @pytest.mark.asyncio
    async def test_returns_every_lesson(self, test_client, lessons_collection, sample_lessons):
        lessons_collection.find.return_value.to_list.return_value = sample_lessons

        response = await test_client.get("/lessons")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == len(sample_lessons)
        for returned, stored in zip(body, sample_lessons):
            assert set(returned) == set(stored)
            assert returned["_id"] == str(stored["_id"])
            assert returned["title"] == stored["title"]
        assert body[2]["schedule"] == {"day": "Mon", "time": "10:00"}

    @pytest.mark.asyncio
    async def test_store_error_returns_500(self, test_client, lessons_collection):
        lessons_collection.find.return_value.to_list.side_effect = OperationFailure("boom")

        response = await test_client.get("/lessons")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert "boom" not in response.text


class TestSearchEndpoint:
    @pytest.mark.asyncio
    async def test_missing_parameter_returns_400_without_query(self, test_client, lessons_collection):
        response = await test_client.get("/search")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        lessons_collection.find.assert_not_called()

    @pytest.mark.asyncio
    async def test_numeric_term(self, test_client, lessons_collection, sample_lessons):
        lessons_collection.find.return_value.to_list.return_value = sample_lessons[1:2]

        response = await test_client.get("/search", params={"term": "20"})

        assert response.status_code == 200
        assert [doc["id"] for doc in response.json()] == [2]
        query = lessons_collection.find.call_args.args[0]
        assert "$expr" in query

    @pytest.mark.asyncio
    async def test_word_alias_text_term(self, test_client, lessons_collection, mock_connection):
        response = await test_client.get("/search", params={"word": "Math"})

        assert response.status_code == 200
        assert response.json() == []
        query = lessons_collection.find.call_args.args[0]
        assert {"title": {"$regex": "Math", "$options": "i"}} in query["$or"]
        mock_connection.get_database.assert_called_once_with("lessonhub_test")

    @pytest.mark.asyncio
    async def test_empty_term_falls_back_to_word(self, test_client, lessons_collection):
        response = await test_client.get("/search", params={"term": "", "word": "math"})

        assert response.status_code == 200
        query = lessons_collection.find.call_args.args[0]
        assert {"title": {"$regex": "math", "$options": "i"}} in query["$or"]

    @pytest.mark.asyncio
    async def test_store_error_returns_500(self, test_client, lessons_collection):
        lessons_collection.find.return_value.to_list.side_effect = OperationFailure("boom")

        response = await test_client.get("/search", params={"term": "math"})

        assert response.status_code == 500


class TestUpdateLessonEndpoint:
    @pytest.mark.asyncio
    async def test_update_returns_reread_document(self, test_client, lessons_collection, sample_lessons):
        before = sample_lessons[0]
        lessons_collection.update_one.return_value = MagicMock(matched_count=1, modified_count=1)
        lessons_collection.find_one.return_value = {**before, "price": 99}

        response = await test_client.put("/lessons/1", json={"price": 99})

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 99
        assert body["title"] == before["title"]
        assert body["availableSpaces"] == before["availableSpaces"]
        lessons_collection.update_one.assert_awaited_once_with({"id": 1}, {"$set": {"price": 99}})

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, test_client, lessons_collection):
        lessons_collection.update_one.return_value = MagicMock(matched_count=0, modified_count=0)

        response = await test_client.put("/lessons/999", json={"price": 99})

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_non_numeric_id_returns_422(self, test_client, lessons_collection):
        response = await test_client.put("/lessons/abc", json={"price": 99})

        assert response.status_code == 422
        lessons_collection.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"_id": "x"}, {"schedule.day": "Tue"}])
    async def test_invalid_body_returns_400(self, test_client, lessons_collection, body):
        response = await test_client.put("/lessons/1", json=body)

        assert response.status_code == 400
        lessons_collection.update_one.assert_not_awaited()


class TestCreateOrderEndpoint:
    @pytest.mark.asyncio
    async def test_creates_one_order(self, test_client, lessons_collection):
        inserted_id = ObjectId("65a1b2c3d4e5f6a7b8c9d0ff")
        lessons_collection.insert_one.return_value = MagicMock(
            acknowledged=True, inserted_id=inserted_id
        )
        order = {"name": "Ada", "phone": "0123", "lessonIds": [1, 2], "spaces": 2}

        response = await test_client.post("/order", json=order)

        assert response.status_code == 200
        assert response.json() == {"acknowledged": True, "insertedId": str(inserted_id)}
        lessons_collection.insert_one.assert_awaited_once_with(order)

    @pytest.mark.asyncio
    async def test_non_object_body_returns_422(self, test_client, lessons_collection):
        response = await test_client.post("/order", json=[{"name": "Ada"}])

        assert response.status_code == 422
        lessons_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_body_returns_400(self, test_client, lessons_collection):
        response = await test_client.post("/order", json={})

        assert response.status_code == 400
        lessons_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_returns_500(self, test_client, lessons_collection):
        lessons_collection.insert_one.side_effect = OperationFailure("insert failed")

        response = await test_client.post("/order", json={"name": "Ada"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"


class TestImagesEndpoint:
    @pytest.mark.asyncio
    async def test_serves_existing_image(self, test_client, tmp_path):
        (tmp_path / "math.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")

        with patch("lessonhub.routes.images.image_service", ImageService(str(tmp_path))):
            response = await test_client.get("/images/math.png")

        assert response.status_code == 200
        assert response.content == b"\x89PNG\r\n\x1a\nfake"
        assert response.headers["content-type"] == "image/png"

    @pytest.mark.asyncio
    async def test_missing_image_returns_404(self, test_client, tmp_path):
        with patch("lessonhub.routes.images.image_service", ImageService(str(tmp_path))):
            response = await test_client.get("/images/missing.png")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_nul_byte_in_path_returns_400(self, test_client, tmp_path):
        with patch("lessonhub.routes.images.image_service", ImageService(str(tmp_path))):
            response = await test_client.get("/images/a%00b.png")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestAccessLog:
    @pytest.fixture(autouse=True)
    def capture_access(self, caplog):
        caplog.set_level(logging.INFO, logger="lessonhub.access")
        self.caplog = caplog

    def access_records(self):
        return [r for r in self.caplog.records if r.name == "lessonhub.access"]

    @pytest.mark.asyncio
    async def test_search_mode_logged(self, test_client):
        await test_client.get("/search", params={"term": " 20 "})
        await test_client.get("/search", params={"word": "math"})

        numeric, text = self.access_records()
        assert numeric.search_mode == "numeric"
        assert numeric.getMessage().endswith("search_mode=numeric")
        assert text.search_mode == "text"

    @pytest.mark.asyncio
    async def test_lesson_id_logged_on_failed_update(self, test_client, lessons_collection):
        lessons_collection.update_one.return_value = MagicMock(matched_count=0, modified_count=0)

        await test_client.put("/lessons/7", json={"price": 1})

        (record,) = self.access_records()
        assert record.levelno == logging.WARNING
        assert record.status == 404
        assert record.lesson_id == 7
        assert "lesson_id=7" in record.getMessage()

    @pytest.mark.asyncio
    async def test_lesson_count_logged(self, test_client, lessons_collection, sample_lessons):
        lessons_collection.find.return_value.to_list.return_value = sample_lessons

        await test_client.get("/lessons")

        (record,) = self.access_records()
        assert record.lesson_count == 3

    @pytest.mark.asyncio
    async def test_unannotated_route_has_no_fields(self, test_client):
        await test_client.get("/")

        (record,) = self.access_records()
        assert "=" not in record.getMessage()
        assert not hasattr(record, "search_mode")
        assert not hasattr(record, "lesson_id")

    def test_annotate_rejects_unknown_fields(self):
        request = Request({"type": "http", "headers": []})

        with pytest.raises(ValueError, match="customer_name"):
            annotate(request, customer_name="Ada")

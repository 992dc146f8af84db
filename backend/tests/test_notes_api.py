"""
Notekeeper Backend: Notes API Endpoint Tests
==============================================

What:  End-to-end tests for /api/notes and /health through the FastAPI app.
How:   HTTPX AsyncClient over ASGITransport, backed by the temporary SQLite
       database from conftest.

What we test:
    ✅ Create → 201 with the stored note; invalid → 400 with ordered errors
    ✅ Fetch / replace / delete, including 404 for unknown ids
    ✅ Validation happens before the store is touched
    ✅ Database failures surface as a generic 500
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from notekeeper.services.validator import DATETIME_ERROR, TEXT_ERROR, TITLE_ERROR


async def create_note(client, payload):
    response = await client.post("/api/notes", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateEndpoint:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_note(self, test_client, valid_payload):
        response = await test_client.post("/api/notes", json=valid_payload)

        assert response.status_code == 201
        body = response.json()
        assert isinstance(body["id"], int)
        assert body["title"] == "Shopping list"
        assert body["text"] == "Milk, eggs, bread"
        assert body["datetime"].startswith("2023-01-01T00:00:00")

    @pytest.mark.asyncio
    async def test_invalid_payload_returns_all_errors(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": "", "text": 12, "datetime": "later"}
        )

        assert response.status_code == 400
        assert response.json() == [
            {"field": "title", "error": TITLE_ERROR},
            {"field": "text", "error": TEXT_ERROR},
            {"field": "datetime", "error": DATETIME_ERROR},
        ]

    @pytest.mark.asyncio
    async def test_missing_body_counts_as_empty_payload(self, test_client):
        response = await test_client.post("/api/notes")

        assert response.status_code == 400
        assert [e["field"] for e in response.json()] == ["title", "datetime"]

    @pytest.mark.asyncio
    async def test_invalid_payload_never_reaches_store(self, test_client):
        with patch("notekeeper.routes.notes.note_store") as mock_store:
            mock_store.create = AsyncMock()
            response = await test_client.post("/api/notes", json={"title": ""})

        assert response.status_code == 400
        mock_store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_script_in_title_is_escaped(self, test_client, valid_payload):
        valid_payload["title"] = "<script>alert(1)</script>"
        body = await create_note(test_client, valid_payload)
        assert "<script>" not in body["title"]

    @pytest.mark.asyncio
    async def test_title_too_long_once_escaped_returns_400(self, test_client, valid_payload):
        valid_payload["title"] = "<" * 255
        response = await test_client.post("/api/notes", json=valid_payload)

        assert response.status_code == 400
        assert response.json() == [{"field": "title", "error": TITLE_ERROR}]

    @pytest.mark.asyncio
    async def test_stored_title_never_exceeds_255(self, test_client, valid_payload):
        valid_payload["title"] = "<" * 63 + " ab"
        body = await create_note(test_client, valid_payload)
        assert len(body["title"]) == 255

    @pytest.mark.asyncio
    async def test_datetime_overflowing_utc_returns_400(self, test_client, valid_payload):
        valid_payload["datetime"] = "9999-12-31T23:00:00-05:00"
        response = await test_client.post("/api/notes", json=valid_payload)

        assert response.status_code == 400
        assert response.json() == [{"field": "datetime", "error": DATETIME_ERROR}]

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client, valid_payload):
        response = await test_client.post(
            "/api/notes", json=valid_payload, headers={"X-Request-ID": "abc12345"}
        )
        assert response.headers["X-Request-ID"] == "abc12345"


class TestReadEndpoints:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/notes")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_returns_created_notes(self, test_client, valid_payload):
        first = await create_note(test_client, valid_payload)
        valid_payload["title"] = "Second"
        second = await create_note(test_client, valid_payload)

        response = await test_client.get("/api/notes")

        assert response.status_code == 200
        assert [n["id"] for n in response.json()] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_get_one_matches_created(self, test_client, valid_payload):
        created = await create_note(test_client, valid_payload)

        response = await test_client.get(f"/api/notes/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, test_client):
        response = await test_client.get("/api/notes/9999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "9999" in body["message"]

    @pytest.mark.asyncio
    async def test_non_integer_id_is_rejected(self, test_client):
        response = await test_client.get("/api/notes/abc")
        assert response.status_code == 422


class TestUpdateEndpoint:

    @pytest.mark.asyncio
    async def test_put_replaces_note(self, test_client, valid_payload):
        created = await create_note(test_client, valid_payload)
        replacement = {"title": "Updated", "text": "New body", "datetime": "2024-05-01T09:00:00Z"}

        response = await test_client.put(f"/api/notes/{created['id']}", json=replacement)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["title"] == "Updated"
        assert body["text"] == "New body"
        assert body["datetime"].startswith("2024-05-01T09:00:00")

        fetched = (await test_client.get(f"/api/notes/{created['id']}")).json()
        assert fetched == body

    @pytest.mark.asyncio
    async def test_put_missing_returns_404(self, test_client, valid_payload):
        response = await test_client.put("/api/notes/9999", json=valid_payload)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_put_validates_before_lookup(self, test_client):
        """An invalid payload is a 400 even when the id does not exist."""
        response = await test_client.put("/api/notes/9999", json={"title": "x", "datetime": ""})

        assert response.status_code == 400
        assert response.json() == [{"field": "datetime", "error": DATETIME_ERROR}]

    @pytest.mark.asyncio
    async def test_put_rejects_datetime_overflowing_utc(self, test_client, valid_payload):
        created = await create_note(test_client, valid_payload)
        valid_payload["datetime"] = "9999-12-31T23:00:00-05:00"

        response = await test_client.put(f"/api/notes/{created['id']}", json=valid_payload)

        assert response.status_code == 400
        assert response.json() == [{"field": "datetime", "error": DATETIME_ERROR}]


class TestDeleteEndpoint:

    @pytest.mark.asyncio
    async def test_delete_returns_204_then_404(self, test_client, valid_payload):
        created = await create_note(test_client, valid_payload)

        response = await test_client.delete(f"/api/notes/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert (await test_client.get(f"/api/notes/{created['id']}")).status_code == 404
        assert (await test_client.delete(f"/api/notes/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_returns_404(self, test_client):
        response = await test_client.delete("/api/notes/9999")
        assert response.status_code == 404


class TestFailures:

    @pytest.mark.asyncio
    async def test_database_error_returns_generic_500(self, test_client):
        failure = OperationalError("SELECT", {}, Exception("password authentication failed"))
        with patch("notekeeper.routes.notes.note_store") as mock_store:
            mock_store.read_all = AsyncMock(side_effect=failure)
            response = await test_client.get("/api/notes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "password" not in response.text


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

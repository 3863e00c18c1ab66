"""
HTTP contract of the todo endpoints: status codes, bodies and error envelopes.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from todo_api.api.dependencies import get_renderer
from tests.conftest import BrokenRenderer, PostResponseBrokenRenderer

INVALID_IDS = ["abc", "1.5", "0", "-3", "%20", "1e3", "0x10", "1/2", "12abc"]

DEEP_ARRAY = b"[" * 100000 + b"]" * 100000


def _post(client, text: str = "buy milk"):
    return client.post("/todo", json={"todo": text})


class TestGetTodo:

    @pytest.mark.parametrize("raw_id", INVALID_IDS)
    def test_invalid_id_returns_400(self, client, raw_id):
        response = client.get(f"/todo/{raw_id}")

        assert response.status_code == 400
        assert "id" in response.json()["message"]

    def test_empty_id_returns_400(self, client):
        response = client.get("/todo/")

        assert response.status_code == 400
        assert response.json() == {"message": "id cannot be blank"}

    @pytest.mark.parametrize("todo_id", [1, 42, 999999])
    def test_unknown_id_returns_204(self, client, todo_id):
        response = client.get(f"/todo/{todo_id}")

        assert response.status_code == 204
        assert response.content == b""

    def test_returns_posted_item(self, client):
        todo_id = _post(client, "buy milk").json()["id"]

        response = client.get(f"/todo/{todo_id}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert body["todo"] == "buy milk"
        created_on = datetime.fromisoformat(body["created_on"].replace("Z", "+00:00"))
        assert created_on.tzinfo is not None

    def test_store_error_returns_400_envelope(self, failing_client):
        response = failing_client.get("/todo/7")

        assert response.status_code == 400
        assert response.json() == {"message": "Error retrieving record"}

    def test_render_failure_degrades_to_bare_500(self, client):
        todo_id = _post(client).json()["id"]
        client.app.dependency_overrides[get_renderer] = BrokenRenderer

        response = client.get(f"/todo/{todo_id}")

        assert response.status_code == 500
        assert response.content == b""

    def test_unexpected_error_never_leaks_exception(self, crashing_client):
        response = crashing_client.get("/todo/1")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert response.headers["X-Request-ID"]


class TestDeleteTodo:

    @pytest.mark.parametrize("raw_id", INVALID_IDS)
    def test_invalid_id_returns_400(self, client, raw_id):
        response = client.delete(f"/todo/{raw_id}")

        assert response.status_code == 400
        assert "message" in response.json()

    def test_empty_id_returns_400(self, client):
        response = client.delete("/todo/")

        assert response.status_code == 400

    @pytest.mark.parametrize("todo_id", [1, 42, 999999])
    def test_unknown_id_returns_204(self, client, todo_id):
        response = client.delete(f"/todo/{todo_id}")

        assert response.status_code == 204

    def test_deletes_existing_item_once(self, client):
        todo_id = _post(client).json()["id"]

        first = client.delete(f"/todo/{todo_id}")
        second = client.delete(f"/todo/{todo_id}")

        assert first.status_code == 200
        assert first.content == b""
        assert second.status_code == 204
        assert client.get(f"/todo/{todo_id}").status_code == 204

    def test_store_error_returns_500_envelope(self, failing_client):
        response = failing_client.delete("/todo/7")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error with request"}


class TestPostTodo:

    def test_returns_numeric_id(self, client):
        response = _post(client, "buy milk")

        assert response.status_code == 200
        assert isinstance(response.json()["id"], int)
        assert response.json()["id"] >= 1

    def test_ids_increase_and_are_not_reused(self, client):
        first = _post(client, "one").json()["id"]
        second = _post(client, "two").json()["id"]
        client.delete(f"/todo/{second}")
        third = _post(client, "three").json()["id"]

        assert first < second < third

    def test_extra_fields_are_ignored(self, client):
        response = client.post("/todo", json={"todo": "walk dog", "priority": 3})

        assert response.status_code == 200

    @pytest.mark.parametrize(
        "payload",
        [{"todo": ""}, {"todo": "   "}, {}, {"todo": None}, {"todo": 123}],
    )
    def test_invalid_todo_field_returns_400(self, client, payload):
        response = client.post("/todo", json=payload)

        assert response.status_code == 400
        assert response.json()["message"].startswith("todo:")

    def test_blank_todo_message(self, client):
        response = client.post("/todo", json={"todo": ""})

        assert response.json() == {"message": "todo: todo cannot be blank"}

    @pytest.mark.parametrize(
        "body",
        [b"{bad json", b"", b"[1, 2]", b'"buy milk"', b"null", b"\xff\xfe"],
    )
    def test_malformed_body_returns_400(self, client, body):
        response = client.post(
            "/todo", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"message": "invalid body"}

    @pytest.mark.parametrize(
        "body",
        [DEEP_ARRAY, b'{"todo": "buy milk", "tags": ' + DEEP_ARRAY + b"}"],
        ids=["deep-array", "object-with-deep-field"],
    )
    def test_deeply_nested_body_returns_400(self, client, body):
        response = client.post(
            "/todo", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"message": "invalid body"}

    def test_success_render_failure_degrades_to_bare_500(self, client):
        client.app.dependency_overrides[get_renderer] = PostResponseBrokenRenderer

        response = _post(client, "buy milk")

        assert response.status_code == 500
        assert response.content == b""
        assert client.get("/todo/1").json()["todo"] == "buy milk"

    def test_malformed_body_is_logged_at_debug(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger="todo_api.request"):
            client.post(
                "/todo", content=b"{bad json", headers={"Content-Type": "application/json"}
            )

        records = [r for r in caplog.records if r.name == "todo_api.request"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)

    def test_store_error_returns_500_envelope(self, failing_client):
        response = _post(failing_client)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error with request"}

    def test_error_render_failure_degrades_to_bare_500(self, client):
        client.app.dependency_overrides[get_renderer] = BrokenRenderer

        response = client.post("/todo", json={"todo": ""})

        assert response.status_code == 500
        assert response.content == b""


class TestRequestId:

    def test_generated_when_absent(self, client):
        response = client.get("/todo/1")

        assert len(response.headers["X-Request-ID"]) == 36

    def test_echoes_client_request_id(self, client):
        response = client.get("/todo/1", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_rejects_unsafe_request_id(self, client):
        response = client.get("/todo/1", headers={"X-Request-ID": "bad id;"})

        assert response.headers["X-Request-ID"] != "bad id;"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_health_reports_store(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["store"] == "memory"
    assert body["store_initialized"] is True
    assert body["environment"] == "development"

"""HTTP tests for the /users routes."""

import pytest

from src.users_api.entities.user import User
from tests.fixtures.dummies import FailingStore, RecordingStore


def _create(client, username="alice", email="a@example.com"):
    return client.post("/users", json={"username": username, "email": email})


class TestListUsers:
    def test_empty(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        assert response.json() == {"data": [], "error": None}

    def test_lists_created_users(self, client):
        _create(client, "alice", "a@example.com")
        _create(client, "bob", "b@example.com")

        response = client.get("/users")

        assert response.status_code == 200
        assert [u["username"] for u in response.json()["data"]] == ["alice", "bob"]

    def test_trailing_slash(self, client):
        _create(client)

        response = client.get("/users/")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 1


class TestGetUser:
    def test_existing(self, client):
        user_id = _create(client).json()["id"]

        response = client.get(f"/users/{user_id}")

        assert response.status_code == 200
        assert response.json() == {
            "data": [{"id": user_id, "username": "alice", "email": "a@example.com"}],
            "error": None,
        }

    def test_missing_is_empty(self, client):
        response = client.get("/users/404")

        assert response.status_code == 200
        assert response.json() == {"data": [], "error": None}

    @pytest.mark.parametrize(
        "raw_id", ["99999999999999999999", "-9999999999999999999", "1e30", "1.5"]
    )
    def test_ids_outside_key_range_are_empty(self, client, raw_id):
        _create(client)

        response = client.get(f"/users/{raw_id}")

        assert response.status_code == 200
        assert response.json() == {"data": [], "error": None}

    @pytest.mark.parametrize("raw_id", ["abc", "12a", "nan"])
    def test_non_numeric(self, make_client, raw_id):
        store = RecordingStore()
        client = make_client(store)

        response = client.get(f"/users/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"data": [], "error": "id must be numeric"}
        assert store.calls == []


class TestCreateUser:
    def test_success_echoes_fields_and_id(self, client):
        response = _create(client)

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [{"username": "alice", "email": "a@example.com"}]
        assert isinstance(body["id"], int)
        assert body["error"] is None

    def test_echoes_fields_as_submitted(self, client):
        response = _create(client, "alice", "Alice@EXAMPLE.COM")

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == [{"username": "alice", "email": "Alice@EXAMPLE.COM"}]

        stored = client.get(f"/users/{body['id']}").json()["data"]
        assert stored[0]["email"] == "Alice@EXAMPLE.COM"

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "", "email": "a@example.com"},
            {"username": "alice"},
            {"username": "alice", "email": "not-an-email"},
            {},
        ],
    )
    def test_invalid_payload_is_400_without_insert(self, make_client, payload):
        store = RecordingStore()
        client = make_client(store)

        response = client.post("/users", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["data"] == []
        assert isinstance(body["error"], list) and body["error"]
        assert store.calls == []

    def test_missing_body(self, make_client):
        store = RecordingStore()
        client = make_client(store)

        response = client.post("/users")

        assert response.status_code == 400
        assert store.calls == []

    def test_malformed_json(self, make_client):
        store = RecordingStore()
        client = make_client(store)

        response = client.post(
            "/users",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["data"] == []
        assert store.calls == []


class TestUpdateUser:
    def test_partial_update(self, client):
        user_id = _create(client).json()["id"]

        response = client.put(f"/users/{user_id}", json={"email": "new@example.com"})

        assert response.status_code == 200
        assert response.json() == {
            "data": [{"id": user_id, "email": "new@example.com"}],
            "error": None,
        }
        stored = client.get(f"/users/{user_id}").json()["data"][0]
        assert stored == {"id": user_id, "username": "alice", "email": "new@example.com"}

    def test_payload_sent_to_store_omits_username(self, make_client):
        store = RecordingStore(users=[User(id=3, username="carol", email="c@example.com")])
        client = make_client(store)

        response = client.put("/users/3", json={"email": "carol@example.com"})

        assert response.status_code == 200
        assert store.calls == [("update", 3, {"email": "carol@example.com"})]

    def test_non_numeric_id(self, make_client):
        store = RecordingStore()
        client = make_client(store)

        response = client.put("/users/abc", json={"email": "new@example.com"})

        assert response.status_code == 400
        assert response.json() == {"data": [], "error": "id must be numeric"}
        assert store.calls == []

    def test_missing_row(self, client):
        response = client.put("/users/99", json={"username": "ghost"})

        assert response.status_code == 404
        assert response.json() == {"data": [], "error": "user not found"}

    @pytest.mark.parametrize("raw_id", ["99999999999999999999", "1e30", "2.5"])
    def test_ids_outside_key_range_are_not_found(self, client, raw_id):
        response = client.put(f"/users/{raw_id}", json={"email": "new@example.com"})

        assert response.status_code == 404
        assert response.json() == {"data": [], "error": "user not found"}

    def test_empty_payload(self, client):
        user_id = _create(client).json()["id"]

        response = client.put(f"/users/{user_id}", json={})

        assert response.status_code == 400


class TestStoreFailures:
    @pytest.mark.parametrize(
        "method, path, payload, message",
        [
            ("GET", "/users", None, "error reading data"),
            ("GET", "/users/1", None, "error reading data"),
            ("POST", "/users", {"username": "a", "email": "a@example.com"}, "error saving data"),
            ("PUT", "/users/1", {"email": "a@example.com"}, "error updating data"),
        ],
    )
    def test_store_failure_is_json_500(self, make_client, method, path, payload, message):
        client = make_client(FailingStore())

        response = client.request(method, path, json=payload)

        assert response.status_code == 500
        assert response.json() == {"data": [], "error": message}


def test_request_id_header_is_echoed(client):
    response = client.get("/users", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"

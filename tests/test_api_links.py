# Tests for the JSON API: /api/links, /api/auth, /api/password.
# Created: 2026-03-05

import json

import pytest
from fastapi.testclient import TestClient

from linkboard.directory import DirectoryStore, StoreConfig, default_directory
from linkboard.kv import MemoryKVStore
from linkboard.web import create_app

SECRET = "test-secret-123"
AUTH = {"Authorization": f"Bearer {SECRET}"}


@pytest.fixture
def kv():
    return MemoryKVStore({"ADMIN_PASSWORD": SECRET})


@pytest.fixture
def client(test_settings, kv):
    store = DirectoryStore(kv, StoreConfig(retry_base_delay=0))
    return TestClient(create_app(test_settings, store))


def _no_store(resp):
    return resp.headers["cache-control"].startswith("no-store")


class TestGetLinks:
    """Tests for GET /api/links."""

    def test_empty_store_returns_defaults(self, client):
        resp = client.get("/api/links")
        assert resp.status_code == 200
        data = resp.json()
        assert data == default_directory().to_dict()
        assert len(data["links"]) == 6
        assert _no_store(resp)
        assert resp.headers["pragma"] == "no-cache"

    def test_legacy_array_record(self, client, kv):
        kv._data["data"] = '[{"name": "Old", "url": "https://old"}]'
        data = client.get("/api/links").json()
        assert data["links"] == [{"name": "Old", "url": "https://old"}]
        assert data["categories"] == default_directory().categories

    def test_corrupt_record_returns_defaults(self, client, kv):
        kv._data["data"] = "{oops"
        assert client.get("/api/links").json() == default_directory().to_dict()

    def test_no_auth_needed(self, client):
        assert client.get("/api/links", headers={"Authorization": "Bearer nope"}).status_code == 200


class TestPostLinks:
    """Tests for POST /api/links."""

    def test_requires_bearer(self, client, kv):
        resp = client.post("/api/links", json=[])
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}
        assert "data" not in kv.snapshot()

    def test_wrong_secret(self, client):
        resp = client.post("/api/links", json=[], headers={"Authorization": "Bearer wrong"})
        assert resp.status_code == 401

    def test_save_full_directory(self, client, kv):
        payload = {
            "links": [{"name": "A", "url": "https://a", "category": "x"}],
            "categories": {"x": "X"},
        }
        resp = client.post("/api/links", json=payload, headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert _no_store(resp)
        assert json.loads(kv.snapshot()["data"]) == payload

    def test_invalid_link_array_scenario(self, client):
        resp = client.post("/api/links", json=["x"], headers=AUTH)
        assert resp.status_code == 200

        data = client.get("/api/links").json()
        assert data["links"] == ["x"]
        assert data["categories"] == default_directory().categories

    def test_non_json_body_is_400(self, client):
        resp = client.post(
            "/api/links",
            content=b"not-json",
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Request body is not valid JSON"

    @pytest.mark.parametrize("body", [b"\"links\"", b"42", b"null", b"true"])
    def test_scalar_body_is_400(self, client, kv, body):
        resp = client.post(
            "/api/links",
            content=body,
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid data format"
        assert "data" not in kv.snapshot()

    def test_auth_checked_before_body(self, client):
        resp = client.post(
            "/api/links",
            content=b"not-json",
            headers={"Authorization": "Bearer wrong", "Content-Type": "application/json"},
        )
        assert resp.status_code == 401

    def test_store_failure_is_500_with_cause(self, test_settings, make_flaky_kv):
        kv = make_flaky_kv({"ADMIN_PASSWORD": SECRET}, put_failures=3)
        app = create_app(test_settings, DirectoryStore(kv, StoreConfig(retry_base_delay=0)))
        resp = TestClient(app).post("/api/links", json=[], headers=AUTH)

        assert resp.status_code == 500
        data = resp.json()
        assert data["error"] == "put #3 rejected"
        assert data["cause"] == "KVStoreError: put #3 rejected"
        assert "Traceback" in data["stack"]
        assert kv.put_calls == 3

    def test_stack_hidden_when_details_disabled(self, test_settings, make_flaky_kv):
        settings = test_settings.model_copy(update={"expose_error_details": False})
        kv = make_flaky_kv({"ADMIN_PASSWORD": SECRET}, put_failures=3)
        app = create_app(settings, DirectoryStore(kv, StoreConfig(retry_base_delay=0)))
        data = TestClient(app).post("/api/links", json=[], headers=AUTH).json()
        assert "stack" not in data
        assert data["cause"]


class TestAuth:
    """Tests for GET /api/auth."""

    def test_valid_secret(self, client):
        resp = client.get("/api/auth", headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"authenticated": True}
        assert _no_store(resp)

    def test_invalid_secret(self, client):
        resp = client.get("/api/auth", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401
        assert resp.json() == {"authenticated": False}

    def test_missing_header(self, client):
        assert client.get("/api/auth").status_code == 401

    def test_default_secret_when_nothing_configured(self, test_settings):
        client = TestClient(create_app(test_settings, DirectoryStore(MemoryKVStore())))
        assert client.get("/api/auth", headers={"Authorization": "Bearer admin"}).status_code == 200

    def test_configured_secret_when_store_has_none(self, test_settings):
        settings = test_settings.model_copy(update={"admin_password": "from-env"})
        client = TestClient(create_app(settings))
        resp = client.get("/api/auth", headers={"Authorization": "Bearer from-env"})
        assert resp.status_code == 200
        assert client.get("/api/auth", headers={"Authorization": "Bearer admin"}).status_code == 401

    def test_unreachable_store_falls_back_to_default(self, test_settings, make_flaky_kv):
        store = DirectoryStore(make_flaky_kv(fail_gets=True))
        client = TestClient(create_app(test_settings, store))
        assert client.get("/api/auth", headers={"Authorization": "Bearer admin"}).status_code == 200


class TestPassword:
    """Tests for POST /api/password."""

    def test_change_password(self, client, kv):
        resp = client.post("/api/password", json={"password": "n3w"}, headers=AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert kv.snapshot()["ADMIN_PASSWORD"] == "n3w"

        # Old secret stops working, new one works
        assert client.get("/api/auth", headers=AUTH).status_code == 401
        assert client.get("/api/auth", headers={"Authorization": "Bearer n3w"}).status_code == 200

    def test_requires_bearer(self, client, kv):
        resp = client.post("/api/password", json={"password": "n3w"})
        assert resp.status_code == 401
        assert kv.snapshot()["ADMIN_PASSWORD"] == SECRET

    @pytest.mark.parametrize("body", [{}, {"password": ""}, {"password": 5}, ["n3w"]])
    def test_invalid_password_is_400(self, client, kv, body):
        resp = client.post("/api/password", json=body, headers=AUTH)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid password"
        assert kv.snapshot()["ADMIN_PASSWORD"] == SECRET

    def test_store_failure_is_500(self, test_settings, make_flaky_kv):
        kv = make_flaky_kv({"ADMIN_PASSWORD": SECRET}, put_failures=1)
        client = TestClient(create_app(test_settings, DirectoryStore(kv)))
        resp = client.post(
            "/api/password",
            json={"password": "n3w"},
            headers={**AUTH, "Origin": "https://elsewhere.example"},
        )
        assert resp.status_code == 500
        assert resp.headers["access-control-allow-origin"] == "*"
        assert _no_store(resp)
        data = resp.json()
        assert data["error"] == "put #1 rejected"
        assert data["cause"] == "KVStoreError: put #1 rejected"
        assert kv.put_calls == 1
        assert kv.snapshot()["ADMIN_PASSWORD"] == SECRET

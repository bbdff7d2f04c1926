"""
Tests for the User Directory forwarding service.
Run: pytest test_main.py -v
"""
import pytest
from fastapi.testclient import TestClient

from conftest import BASE_URL, FakeCollection
from main import app
from user_directory.core import dependencies
from user_directory.services.relay_service import RelayService


@pytest.fixture
def upstream(store):
    """Wire the relay to the in-memory collection instead of the hosted API."""
    dependencies.init_http_client(transport=store.transport)
    dependencies._relay_service = RelayService(dependencies.get_http_client(), BASE_URL)
    yield store
    dependencies._http_client = None
    dependencies._relay_service = None


@pytest.fixture
def client(upstream):
    return TestClient(app)


# ── Health & Metrics ──────────────────────────────────────────────────────

class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.json()["service"] == "user-directory"

    def test_readiness_ok(self, client):
        r = client.get("/health/ready")
        assert r.status_code == 200
        assert r.json()["upstream"] == "reachable"

    def test_readiness_degraded_when_upstream_down(self, client, upstream):
        upstream.fail("GET", "down")
        r = client.get("/health/ready")
        assert r.status_code == 503
        assert r.json()["status"] == "degraded"

    def test_metrics_endpoint(self, client):
        client.get("/users")
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "directory_relay_requests_total" in r.text
        assert "directory_requests_total" in r.text

    def test_lifespan_creates_and_closes_http_client(self):
        with TestClient(app) as c:
            assert c.get("/health").status_code == 200
            assert dependencies._http_client is not None
        assert dependencies._http_client is None


class TestRequestID:
    def test_request_id_propagated(self, client):
        r = client.get("/users", headers={"X-Request-ID": "req-42"})
        assert r.headers["X-Request-ID"] == "req-42"

    def test_request_id_generated(self, client):
        r = client.get("/health")
        assert len(r.headers.get("X-Request-ID", "")) > 0


# ── Relay ─────────────────────────────────────────────────────────────────

class TestRelay:
    def test_list_users(self, client):
        r = client.get("/users")
        assert r.status_code == 200
        assert [u["name"] for u in r.json()] == ["Ann", "Bob", "Cleo"]

    def test_get_user(self, client):
        r = client.get("/users/2")
        assert r.status_code == 200
        assert r.json()["child"] == {"firstname": "Tim", "lastname": "Bobson"}

    def test_get_unknown_user_relays_404(self, client):
        r = client.get("/users/999")
        assert r.status_code == 404

    def test_create_user_relays_status_and_body(self, client, upstream):
        r = client.post("/users", json={"name": "Dee", "email": "dee@x.com", "role": "viewer"})
        assert r.status_code == 201
        assert r.json()["id"] == "4"
        assert upstream.records["4"]["name"] == "Dee"

    def test_update_user(self, client, upstream):
        r = client.put("/users/1", json={"role": "owner"})
        assert r.status_code == 200
        assert upstream.records["1"]["role"] == "owner"
        assert upstream.records["1"]["name"] == "Ann"

    def test_delete_user(self, client, upstream):
        r = client.delete("/users/3")
        assert r.status_code == 200
        assert "3" not in upstream.records
        assert upstream.calls[-1] == ("DELETE", "/api/v1/users/3")

    def test_upstream_error_status_is_relayed(self, client, upstream):
        upstream.fail("GET", 503)
        r = client.get("/users")
        assert r.status_code == 503

    @pytest.mark.parametrize("method,path,message", [
        ("GET", "/users", "Failed to fetch users"),
        ("POST", "/users", "Failed to create user"),
        ("GET", "/users/1", "Failed to fetch user"),
        ("PUT", "/users/1", "Failed to update user"),
        ("DELETE", "/users/1", "Failed to delete user"),
    ])
    def test_unreachable_upstream_returns_500(self, client, upstream, method, path, message):
        upstream.fail(method, "down")
        r = client.request(method, path, json={"name": "x"} if method in ("POST", "PUT") else None)
        assert r.status_code == 500
        assert r.json() == {"error": message}

    def test_no_retry_on_failure(self, client, upstream):
        upstream.fail("GET", "down")
        client.get("/users")
        assert upstream.count("GET") == 1


class TestDirectoryFactory:
    @pytest.mark.anyio
    async def test_build_directory_against_relay_shape(self):
        store = FakeCollection([{"name": "Ann", "email": "a@x.com", "role": "admin"}])
        ctl = dependencies.build_directory(store.client(), BASE_URL)
        await ctl.mount(message="hello")
        assert [r.name for r in ctl.records] == ["Ann"]
        assert ctl.notifications.current == "hello"
        ctl.close()


# ── Middleware & logging helpers ─────────────────────────────────────────

def test_endpoint_label_collapses_ids():
    from user_directory.middleware import endpoint_label
    assert endpoint_label("/users/42") == "/users/{id}"
    assert endpoint_label("/users") == "/users"


def test_json_formatter_includes_request_id_and_error():
    import json
    import logging
    from user_directory.core.logging import JSONFormatter

    try:
        raise ValueError("boom")
    except ValueError:
        import sys
        record = logging.LogRecord("t", logging.ERROR, __file__, 1, "failed %s", ("x",), sys.exc_info())
    record.request_id = "req-1"
    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "failed x"
    assert data["request_id"] == "req-1"
    assert data["error_type"] == "ValueError"
    assert data["service"] == "user-directory"

"""Smoke tests for health, request correlation and error rendering."""

from __future__ import annotations

from tests.helpers.assertions import assert_problem


def test_health(client) -> None:
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_request_id_is_generated(client) -> None:
    resp = client.get("/api/v1/health")
    assert resp.headers.get("X-Request-ID")


def test_request_id_does_not_leak_between_requests(client) -> None:
    tagged = client.get("/api/v1/health", headers={"X-Request-ID": "first"})
    first = client.get("/api/v1/health")
    second = client.get("/api/v1/health")

    assert tagged.headers["X-Request-ID"] == "first"
    assert first.headers["X-Request-ID"] not in {"first", second.headers["X-Request-ID"]}


def test_problem_body_carries_the_request_id_of_its_request(client) -> None:
    client.get("/api/v1/health", headers={"X-Request-ID": "earlier"})
    resp = client.get("/api/v1/nope", headers={"X-Request-ID": "later"})
    assert assert_problem(resp, 404, "not_found")["request_id"] == "later"


def test_unknown_route_is_problem_json(client) -> None:
    body = assert_problem(client.get("/api/v1/nope"), 404, "not_found")
    assert body["detail"] == "Route '/api/v1/nope' not found"


def test_cors_allows_configured_origin(client) -> None:
    resp = client.get("/api/v1/health", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_each_request_is_logged_once(client, caplog) -> None:
    caplog.set_level("DEBUG", logger="app.access")

    client.get("/api/v1/health")

    (record,) = [r for r in caplog.records if r.getMessage() == "request.completed"]
    assert (record.method, record.path, record.status) == ("GET", "/api/v1/health", 200)
    assert record.elapsed_ms >= 0

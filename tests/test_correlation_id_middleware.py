from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from portfolio_api.core.middleware import SECURITY_HEADERS


def test_preserves_incoming_correlation_id_header(client: TestClient):
    incoming_id = "test-correlation-id-123"
    resp = client.get("/v1/health", headers={"X-Correlation-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Correlation-ID") == incoming_id


def test_generates_correlation_id_when_missing(client: TestClient):
    resp = client.get("/v1/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Correlation-ID")
    assert generated
    assert uuid.UUID(generated).version == 4

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None


def test_each_request_gets_its_own_id(client: TestClient):
    first = client.get("/v1/health").headers["X-Correlation-ID"]
    second = client.get("/v1/health").headers["X-Correlation-ID"]

    assert first != second


def test_error_responses_carry_correlation_id(client: TestClient):
    resp = client.get("/v1/projects/99999", headers={"X-Correlation-ID": "corr-404"})

    assert resp.status_code == 404
    assert resp.headers["X-Correlation-ID"] == "corr-404"


def test_security_headers_on_every_response(client: TestClient):
    for path in ("/v1/health", "/v1/profile", "/v1/unknown"):
        resp = client.get(path)
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value


def test_cors_preflight_and_exposed_headers(client: TestClient):
    preflight = client.options(
        "/v1/profile",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "PUT",
        },
    )

    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert preflight.headers["access-control-allow-credentials"] == "true"
    assert preflight.headers["access-control-max-age"] == "86400"

    resp = client.get("/v1/profile", headers={"Origin": "http://localhost:3000"})
    exposed = resp.headers["access-control-expose-headers"]
    assert "ETag" in exposed
    assert "Last-Modified" in exposed


def test_cors_rejects_unknown_origin(client: TestClient):
    resp = client.get("/v1/profile", headers={"Origin": "https://evil.example"})

    assert "access-control-allow-origin" not in resp.headers

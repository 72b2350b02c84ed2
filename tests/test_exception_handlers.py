"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, the flat error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Query
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from portfolio_api.core.errors import (
    AppError,
    DatabaseAppError,
    NotFoundAppError,
    RateLimitAppError,
    ValidationAppError,
)
from portfolio_api.core.exception_handlers import general_exception_handler, setup_exception_handlers


class _Payload(BaseModel):
    name: str = Field(..., min_length=2)
    age: int


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    """Create test client; crashes are rendered by the fallback handler."""
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    def test_validation_error_returns_400(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(code="invalid_project_id", message="Invalid project ID")

        response = client.get("/test-validation")

        assert response.status_code == 400
        assert response.json() == {"error": "invalid_project_id", "message": "Invalid project ID"}

    def test_details_are_included_when_provided(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-details")
        async def test_endpoint():
            raise ValidationAppError(code="bad", message="Bad input", details={"id": -1})

        data = client.get("/test-details").json()

        assert data["details"] == {"id": -1}

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (NotFoundAppError(code="project_not_found", message="Project not found"), 404),
            (RateLimitAppError(code="rate_limit_exceeded", message="slow down"), 429),
            (DatabaseAppError(code="database_error", message="Database query failed"), 500),
            (AppError(code="generic", message="generic"), 400),
        ],
    )
    def test_status_follows_error_class(
        self,
        client: TestClient,
        app_with_handlers: FastAPI,
        error: AppError,
        status: int,
    ):
        @app_with_handlers.get("/test-status")
        async def test_endpoint():
            raise error

        response = client.get("/test-status")

        assert response.status_code == status
        assert response.json()["error"] == error.code

    def test_retry_after_is_rounded_up(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-retry")
        async def test_endpoint():
            error = RateLimitAppError(code="rate_limit_exceeded", message="slow down")
            error.retry_after_seconds = 0.2
            raise error

        response = client.get("/test-retry")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "1"


class TestRequestValidationHandler:
    def test_body_validation_lists_fields(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.post("/payload")
        async def test_endpoint(payload: _Payload):
            return payload

        response = client.post("/payload", json={"name": "x"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_failed"
        assert data["message"] == "Request validation failed"
        assert set(data["details"]) == {"name", "age"}

    def test_query_validation(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/items")
        async def test_endpoint(limit: int = Query(...)):
            return {"limit": limit}

        response = client.get("/items", params={"limit": "many"})

        assert response.status_code == 400
        assert "limit" in response.json()["details"]


class TestHTTPExceptionHandler:
    def test_unknown_route(self, client: TestClient):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Not Found"}

    def test_method_not_allowed(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/only-get")
        async def test_endpoint():
            return {}

        response = client.delete("/only-get")

        assert response.status_code == 405
        assert response.json()["error"] == "method_not_allowed"


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_generic_500(
        self, client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/boom")
        async def test_endpoint():
            raise RuntimeError("database password is hunter2")

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        }
        assert "hunter2" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        """Verify stack traces are never included in response."""
        request = MagicMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = ValueError("Test error with details")
        response = asyncio.run(general_exception_handler(request, exc))

        response_body = response.body if isinstance(response.body, bytes) else bytes(response.body)
        response_text = response_body.decode()
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text
        assert json.loads(response_text)["error"] == "internal_server_error"


class TestErrorHandlerIntegration:
    def test_setup_exception_handlers_registers_handlers(self, app_with_handlers: FastAPI):
        assert AppError in app_with_handlers.exception_handlers
        assert Exception in app_with_handlers.exception_handlers

    def test_multiple_handler_setups_does_not_fail(self):
        app = FastAPI()

        setup_exception_handlers(app)
        setup_exception_handlers(app)

        assert AppError in app.exception_handlers

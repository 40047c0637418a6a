"""Unit tests for phenomena.api.errors handlers and store error rendering.

Usage
-----
Run with pytest::

    pytest tests/unit/test_api_errors.py

"""

from __future__ import annotations

import falcon.asgi
import falcon.testing
import pytest

from phenomena.api.errors import (
    STATUS_BY_KIND,
    InvalidInputError,
    handle_invalid_input,
    render_store_error,
)
from phenomena.board import ErrorKind, StoreError


class _BadRequestResource:
    """Resource that raises InvalidInputError."""

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        msg = "Request body is required"
        raise InvalidInputError(msg)


class _StoreErrorResource:
    """Resource that renders a fixed store error."""

    def __init__(self, error: StoreError) -> None:
        self._error = error

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        render_store_error(resp, self._error)


@pytest.fixture
def client() -> falcon.testing.TestClient:
    """Build a test client with the validation handler registered."""
    app = falcon.asgi.App()
    app.add_route("/bad-request", _BadRequestResource())
    app.add_route("/unauthorized", _StoreErrorResource(StoreError.unauthorized()))
    app.add_route("/not-updated", _StoreErrorResource(StoreError.not_updated()))
    app.add_error_handler(InvalidInputError, handle_invalid_input)
    return falcon.testing.TestClient(app)


class TestInvalidInputHandler:
    """Tests for InvalidInputError and its handler."""

    def test_returns_400(self, client: falcon.testing.TestClient) -> None:
        """Handler maps InvalidInputError to HTTP 400."""
        result = client.simulate_get("/bad-request")
        assert result.status == falcon.HTTP_400, "expected HTTP 400"

    def test_response_body(self, client: falcon.testing.TestClient) -> None:
        """Response body carries a fixed title and the reason."""
        result = client.simulate_get("/bad-request")
        assert result.json == {
            "title": "Invalid input",
            "description": "Request body is required",
        }, "wrong 400 body"

    def test_reason_attribute(self) -> None:
        """Reason attribute and string form both hold the reason."""
        ex = InvalidInputError("bad value")
        assert ex.reason == "bad value", "reason attribute mismatch"
        assert str(ex) == "bad value", "message should be the reason"


class TestRenderStoreError:
    """Tests for the store error to HTTP mapping."""

    @pytest.mark.parametrize(
        ("kind", "status"),
        [
            (ErrorKind.NOT_FOUND, falcon.HTTP_404),
            (ErrorKind.UNAUTHORIZED, falcon.HTTP_401),
            (ErrorKind.INVALID_STATE, falcon.HTTP_409),
            (ErrorKind.CONCURRENCY_ANOMALY, falcon.HTTP_409),
            (ErrorKind.STORE_FAILURE, falcon.HTTP_500),
        ],
    )
    def test_every_kind_has_a_status(self, kind: ErrorKind, status: str) -> None:
        """Each error kind maps to exactly one HTTP status."""
        assert STATUS_BY_KIND[kind] == status

    def test_unauthorized_body(self, client: falcon.testing.TestClient) -> None:
        """The body names the kind and carries the store message."""
        result = client.simulate_get("/unauthorized")
        assert result.status == falcon.HTTP_401, "expected HTTP 401"
        assert result.json == {
            "name": "unauthorized",
            "message": "Password incorrect for this report, please try again",
        }, "wrong 401 body"

    def test_concurrency_anomaly_is_conflict(
        self, client: falcon.testing.TestClient
    ) -> None:
        """A lost close race is reported as a conflict."""
        result = client.simulate_get("/not-updated")
        assert result.status == falcon.HTTP_409, "expected HTTP 409"
        assert result.json["message"] == "Report not updated", "wrong message"

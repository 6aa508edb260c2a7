"""Tests for error mapping."""

import httpx
import pytest

from docengine_mcp.utils.errors import (
    DocumentEngineError,
    ToolInputError,
    error_from_exception,
    error_from_response,
)


class TestErrorFromResponse:
    """Tests for error_from_response."""

    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (400, "BAD_REQUEST"),
            (401, "AUTHENTICATION_FAILED"),
            (403, "ACCESS_FORBIDDEN"),
            (404, "NOT_FOUND"),
            (409, "CONFLICT"),
            (413, "FILE_TOO_LARGE"),
            (429, "RATE_LIMIT_EXCEEDED"),
            (500, "SERVER_ERROR"),
            (503, "SERVER_ERROR"),
            (418, "API_ERROR"),
        ],
    )
    def test_status_codes(self, status: int, code: str) -> None:
        """Each status maps to a stable error code."""
        error = error_from_response(status, None)

        assert error.code == code
        assert error.status_code == status

    def test_body_message_preferred_for_not_found(self) -> None:
        """A message in the response body replaces the generic text."""
        error = error_from_response(404, {"message": "Document abc not found"})

        assert error.message == "Document abc not found"
        assert error.details == {"message": "Document abc not found"}

    def test_auth_message_ignores_body(self) -> None:
        """Authentication failures always use the fixed hint."""
        error = error_from_response(401, {"message": "nope"})

        assert error.message == "Authentication failed - check your API token"

    def test_unmapped_status_uses_fallback(self) -> None:
        """Unmapped statuses fall back to the transport reason."""
        error = error_from_response(418, "teapot", "I'm a teapot")

        assert error.message == "I'm a teapot"


class TestErrorFromException:
    """Tests for error_from_exception."""

    def test_wraps_transport_error(self) -> None:
        """Transport errors become UNKNOWN_ERROR without status."""
        cause = httpx.ConnectError("connection refused")

        error = error_from_exception(cause)

        assert error.code == "UNKNOWN_ERROR"
        assert error.status_code is None
        assert error.message == "connection refused"
        assert error.details is cause

    def test_passes_through_document_engine_error(self) -> None:
        """Existing DocumentEngineErrors are returned unchanged."""
        original = DocumentEngineError("bad", code="BAD_REQUEST")

        assert error_from_exception(original) is original


class TestToolInputError:
    """Tests for ToolInputError."""

    def test_code(self) -> None:
        """Input errors carry the INVALID_INPUT code."""
        error = ToolInputError("page_index must be >= 0")

        assert isinstance(error, DocumentEngineError)
        assert error.code == "INVALID_INPUT"
        assert str(error) == "page_index must be >= 0"

"""Error types for Document Engine operations."""

from __future__ import annotations

from typing import Any

_SERVER_ERROR_STATUSES = (500, 502, 503, 504)


class DocumentEngineError(Exception):
    """Error raised for a failed Document Engine operation.

    Attributes:
        message: Human-readable description.
        code: Stable machine-readable error code, e.g. "NOT_FOUND".
        status_code: HTTP status returned by the backend, if any.
        details: Response body or underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ToolInputError(DocumentEngineError):
    """Tool arguments were rejected before any backend call was made."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_INPUT")


def _body_message(data: Any) -> str | None:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def error_from_response(status: int, data: Any, fallback: str = "") -> DocumentEngineError:
    """Map an HTTP error response to a DocumentEngineError.

    Args:
        status: HTTP status code.
        data: Decoded response body (dict, str or None).
        fallback: Transport-level message used for unmapped statuses.

    Returns:
        DocumentEngineError with the code matching the status.
    """
    body_message = _body_message(data)

    if status == 400:
        return DocumentEngineError(
            body_message or "Bad request - invalid parameters", "BAD_REQUEST", 400, data
        )
    if status == 401:
        return DocumentEngineError(
            "Authentication failed - check your API token", "AUTHENTICATION_FAILED", 401, data
        )
    if status == 403:
        return DocumentEngineError(
            "Access forbidden - insufficient permissions", "ACCESS_FORBIDDEN", 403, data
        )
    if status == 404:
        return DocumentEngineError(body_message or "Resource not found", "NOT_FOUND", 404, data)
    if status == 409:
        return DocumentEngineError(
            body_message or "Conflict - resource already exists or is in use",
            "CONFLICT",
            409,
            data,
        )
    if status == 413:
        return DocumentEngineError(
            "File too large - exceeds size limits", "FILE_TOO_LARGE", 413, data
        )
    if status == 429:
        return DocumentEngineError(
            "Rate limit exceeded - too many requests", "RATE_LIMIT_EXCEEDED", 429, data
        )
    if status in _SERVER_ERROR_STATUSES:
        return DocumentEngineError(
            "Server error - please try again later", "SERVER_ERROR", status, data
        )
    return DocumentEngineError(
        body_message or fallback or "Unknown API error", "API_ERROR", status, data
    )


def error_from_exception(error: Exception) -> DocumentEngineError:
    """Wrap a non-HTTP failure (connection reset, timeout, ...)."""
    if isinstance(error, DocumentEngineError):
        return error
    return DocumentEngineError(str(error) or type(error).__name__, "UNKNOWN_ERROR", None, error)

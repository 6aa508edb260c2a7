"""Async HTTP client for the Document Engine REST API.

Wraps httpx.AsyncClient with token authentication, connection pooling,
retries with exponential backoff for transient failures, and mapping of
HTTP errors to DocumentEngineError.
"""

from __future__ import annotations

import asyncio
import logging
import random
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from docengine_mcp.config import DocEngineConfig
from docengine_mcp.utils.errors import (
    DocumentEngineError,
    error_from_exception,
    error_from_response,
)

logger = logging.getLogger(__name__)

# Upper bound for a single backoff delay, in milliseconds
MAX_RETRY_DELAY_MS = 30000

_RETRYABLE_4XX = (408, 429)


def should_retry(status: int | None) -> bool:
    """Whether a failed request is worth retrying.

    Args:
        status: HTTP status of the failed response, or None when no
            response was received (connection error, timeout).
    """
    if status is None:
        return True
    if status >= 500:
        return True
    return status in _RETRYABLE_4XX


def calculate_delay(base_delay_ms: int, retry_count: int) -> float:
    """Exponential backoff with up to 10% jitter, capped at 30 seconds.

    Args:
        base_delay_ms: Configured base delay in milliseconds.
        retry_count: Zero-based index of the retry about to happen.

    Returns:
        Delay in milliseconds.
    """
    exponential = base_delay_ms * (2**retry_count)
    jitter = random.random() * 0.1 * exponential
    return min(exponential + jitter, MAX_RETRY_DELAY_MS)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        # Document Engine expects lowercase booleans in query strings
        cleaned[key] = str(value).lower() if isinstance(value, bool) else value
    return cleaned


class DocumentEngineClient:
    """Client for the Document Engine API.

    Use as an async context manager, or call open()/close() explicitly
    when the client lives for the whole server lifespan.
    """

    def __init__(
        self,
        config: DocEngineConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def config(self) -> DocEngineConfig:
        """Get the configuration this client was built from."""
        return self._config

    @property
    def is_open(self) -> bool:
        """Whether the underlying HTTP client is open."""
        return self._http is not None

    async def open(self) -> None:
        """Create the pooled HTTP client."""
        if self._http is not None:
            return
        limits = httpx.Limits(
            max_connections=self._config.max_connections,
            max_keepalive_connections=10,
        )
        self._http = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            limits=limits,
            headers={
                "Authorization": f'Token token="{self._config.api_auth_token}"',
                "Accept": "application/json",
            },
            transport=self._transport,
        )
        logger.debug(f"Opened Document Engine client for {self._config.base_url}")

    async def close(self) -> None:
        """Close the HTTP client and release pooled connections."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.debug("Closed Document Engine client")

    async def __aenter__(self) -> DocumentEngineClient:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def http(self) -> httpx.AsyncClient:
        """Get the open HTTP client.

        Raises:
            RuntimeError: If the client has not been opened.
        """
        if self._http is None:
            raise RuntimeError("Document Engine client is not open.")
        return self._http

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method.
            path: Path relative to the configured base URL.
            params: Query parameters; None values are dropped.
            json: JSON request body.
            data: Form fields for multipart uploads.
            files: Files for multipart uploads.
            accept: Override for the Accept header.

        Returns:
            The successful httpx.Response.

        Raises:
            DocumentEngineError: When the request fails permanently or
                retries are exhausted.
        """
        max_retries = self._config.max_retries
        headers = {"Accept": accept} if accept else None
        query = _clean_params(params)

        retry_count = 0
        while True:
            logger.debug(f"{method} {path} params={query}")
            status: int | None = None
            failure: DocumentEngineError
            try:
                response = await self.http.request(
                    method,
                    path,
                    params=query,
                    json=json,
                    data=data,
                    files=files,
                    headers=headers,
                )
                if response.is_success:
                    logger.debug(f"{response.status_code} {method} {path}")
                    return response
                status = response.status_code
                failure = error_from_response(
                    status, _decode_body(response), response.reason_phrase
                )
            except httpx.TransportError as e:
                failure = error_from_exception(e)

            if retry_count < max_retries and should_retry(status):
                delay = calculate_delay(self._config.retry_delay, retry_count)
                retry_count += 1
                logger.warning(
                    f"Retrying {method} {path} (attempt {retry_count}/{max_retries}) "
                    f"in {delay:.0f}ms after {failure.code}"
                )
                await asyncio.sleep(delay / 1000)
                continue

            logger.error(f"API request failed: {method} {path} status={status} {failure.message}")
            raise failure

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a path and decode the JSON response."""
        response = await self.request("GET", path, params=params)
        return _decode_body(response)

    async def post_json(
        self,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """POST a JSON body and decode the JSON response."""
        response = await self.request("POST", path, params=params, json=body)
        return _decode_body(response)

    async def delete(self, path: str) -> Any:
        """DELETE a path and decode any response body."""
        response = await self.request("DELETE", path)
        return _decode_body(response)

    async def get_bytes(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        accept: str = "image/png",
    ) -> bytes:
        """GET a binary resource such as a rendered page."""
        response = await self.request("GET", path, params=params, accept=accept)
        return response.content

    async def upload_document(
        self,
        file_path: Path,
        document_id: str,
        title: str,
        overwrite: bool = True,
    ) -> dict[str, Any]:
        """Upload a PDF file as a new document.

        Args:
            file_path: Local file to upload.
            document_id: ID to assign to the document.
            title: Document title.
            overwrite: Replace an existing document with the same ID.

        Returns:
            The "data" object of the upload response.
        """
        content = file_path.read_bytes()
        response = await self.request(
            "POST",
            "/api/documents",
            data={
                "document_id": document_id,
                "title": title,
                "overwrite_existing_document": str(overwrite).lower(),
            },
            files={"file": (file_path.name, content, "application/pdf")},
        )
        body = _decode_body(response)
        if isinstance(body, dict):
            return body.get("data", body)
        return {}

    async def wait_until_ready(self, max_attempts: int, delay_ms: int) -> None:
        """Poll /healthcheck until Document Engine answers.

        Args:
            max_attempts: Number of health checks before giving up.
            delay_ms: Pause between attempts in milliseconds.

        Raises:
            DocumentEngineError: If the backend is still unreachable after
                the last attempt.
        """
        for attempt in range(1, max_attempts + 1):
            logger.info(
                f"Attempting to connect to Document Engine (attempt {attempt}/{max_attempts})"
            )
            try:
                await self.get_json("/healthcheck")
            except DocumentEngineError as e:
                if attempt == max_attempts:
                    raise DocumentEngineError(
                        f"Document Engine connection failed after {max_attempts} attempts: "
                        f"{e.message}",
                        code=e.code,
                        status_code=e.status_code,
                        details=e,
                    ) from e
                logger.warning(
                    f"Document Engine not ready yet (attempt {attempt}/{max_attempts}): "
                    f"{e.message}. Retrying in {delay_ms}ms..."
                )
                await asyncio.sleep(delay_ms / 1000)
                continue
            logger.info("Document Engine is ready")
            return

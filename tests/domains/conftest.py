"""Shared fixtures for tool family tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_mcp() -> MagicMock:
    """Create a mock FastMCP server."""
    mock = MagicMock()
    mock.tool = MagicMock(return_value=lambda f: f)
    return mock


@pytest.fixture
def mock_server() -> MagicMock:
    """Create a mock DocEngineServer with a client."""
    server = MagicMock()
    server.client = MagicMock()
    server.has_client = True
    return server


@pytest.fixture
def capture_tools(mock_mcp: MagicMock) -> Callable[..., dict[str, Any]]:
    """Register a family's tools and return them keyed by name."""

    def capture(register_tools: Callable[..., None], server: MagicMock) -> dict[str, Any]:
        tools: dict[str, Any] = {}

        def capture_tool(**kwargs: Any):
            def decorator(f):
                tools[f.__name__] = f
                return f

            return decorator

        mock_mcp.tool = capture_tool
        register_tools(mock_mcp, server)
        return tools

    return capture

"""Tests for the evaluation tool surface."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from evals.tool_surface import NO_TEXT_RESULT, ToolSurface, result_text
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ImageContent, TextContent


class TestResultText:
    """Tests for result_text."""

    def test_first_text_block(self) -> None:
        """The first text block is returned."""
        blocks = [
            ImageContent(type="image", data="aGk=", mimeType="image/png"),
            TextContent(type="text", text="# Documents"),
            TextContent(type="text", text="second"),
        ]

        assert result_text(blocks) == "# Documents"

    def test_tuple_result(self) -> None:
        """(content, structured) tuples use the content part."""
        result = ([TextContent(type="text", text="hello")], {"result": "hello"})

        assert result_text(result) == "hello"

    def test_no_text_falls_back(self) -> None:
        """Results without text report success."""
        assert result_text([]) == NO_TEXT_RESULT
        assert result_text(([], None)) == NO_TEXT_RESULT

    def test_dict_blocks(self) -> None:
        """Plain dict blocks are understood too."""
        assert result_text([{"type": "text", "text": "ok"}]) == "ok"


class TestToolSurface:
    """Tests for ToolSurface."""

    @pytest.fixture
    def server(self) -> MagicMock:
        """Create a mock DocEngineServer."""
        server = MagicMock()
        server.mcp.call_tool = AsyncMock()
        return server

    def test_list_tools_uses_generic_descriptions(self, server: MagicMock) -> None:
        """Every tool is described as a document processing tool."""
        server.mcp._tool_manager.list_tools.return_value = [
            SimpleNamespace(name="list_documents", description="List docs", parameters={"type": "object"}),
            SimpleNamespace(name="health_check", description=None, parameters={}),
        ]

        tools = ToolSurface(server).list_tools()

        assert tools == [
            {
                "name": "list_documents",
                "description": "Document processing tool: list_documents",
                "parameters": {"type": "object"},
            },
            {
                "name": "health_check",
                "description": "Document processing tool: health_check",
                "parameters": {},
            },
        ]

    async def test_call_tool_returns_text(self, server: MagicMock) -> None:
        """Successful calls return the tool's text."""
        server.mcp.call_tool.return_value = [TextContent(type="text", text="# Health Check Results")]

        text = await ToolSurface(server).call_tool("health_check", {})

        assert text == "# Health Check Results"
        server.mcp.call_tool.assert_awaited_once_with("health_check", {})

    async def test_call_tool_errors_become_text(self, server: MagicMock) -> None:
        """Handler failures are returned inline, never raised."""
        server.mcp.call_tool.side_effect = ValueError("Unknown tool: nope")

        text = await ToolSurface(server).call_tool("nope", {})

        assert text == "Error: Unknown tool: nope"

    async def test_wrapped_tool_errors_are_unwrapped(self, server: MagicMock) -> None:
        """Errors wrapped by FastMCP carry a single prefix."""
        cause = ValueError("1 validation error for read_document_infoArguments")
        wrapped = ToolError(f"Error executing tool read_document_info: {cause}")
        wrapped.__cause__ = cause
        server.mcp.call_tool.side_effect = wrapped

        text = await ToolSurface(server).call_tool("read_document_info", {})

        assert text == "Error: 1 validation error for read_document_infoArguments"

    async def test_unwrapped_tool_error_keeps_message(self, server: MagicMock) -> None:
        """A ToolError without a cause is reported as is."""
        server.mcp.call_tool.side_effect = ToolError("Unknown tool: nope")

        text = await ToolSurface(server).call_tool("nope", {})

        assert text == "Error: Unknown tool: nope"

    def test_client_comes_from_server(self, server: MagicMock) -> None:
        """The shared backend client is the server's."""
        assert ToolSurface(server).client is server.client

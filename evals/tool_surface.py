"""In-process tool surface for evaluations.

Runs the real Document Engine MCP server in-process so that plugin
loading, tool registration and every tool handler execute for real
against one shared backend client.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp.server.fastmcp.exceptions import ToolError

from docengine_mcp.clients.client import DocumentEngineClient
from docengine_mcp.config import DocEngineConfig
from docengine_mcp.server import DocEngineServer

logger = logging.getLogger(__name__)

NO_TEXT_RESULT = "Operation completed successfully"


def _block_text(block: Any) -> str | None:
    if isinstance(block, dict):
        if block.get("type") == "text":
            return block.get("text")
        return None
    if getattr(block, "type", None) == "text":
        return getattr(block, "text", None)
    return None


def result_text(result: Any) -> str:
    """Pick the text of an MCP tool result.

    FastMCP returns either a list of content blocks or a
    ``(content, structured)`` tuple; the first text block wins.
    """
    if isinstance(result, tuple):
        result = result[0] if result else None
    if isinstance(result, str):
        return result
    if isinstance(result, list):
        for block in result:
            text = _block_text(block)
            if text:
                return text
    return NO_TEXT_RESULT


class ToolSurface:
    """Wraps the Document Engine MCP server for evaluation use.

    Every tool is exposed with a uniform ``(name, arguments) -> text``
    contract; handler failures come back as ``"Error: ..."`` text so the
    agent under test can observe them.
    """

    def __init__(self, server: DocEngineServer) -> None:
        self._server = server

    @property
    def server(self) -> DocEngineServer:
        """Get the underlying Document Engine server."""
        return self._server

    @property
    def client(self) -> DocumentEngineClient:
        """Get the backend client shared by all tools."""
        return self._server.client

    @staticmethod
    @asynccontextmanager
    async def running(config: DocEngineConfig | None = None) -> AsyncIterator[ToolSurface]:
        """Start the MCP server and yield a surface for calling its tools.

        The backend client is opened before tools are called and closed
        when the context exits.
        """
        server = DocEngineServer(config=config)
        server.create_mcp()
        await server.startup()
        try:
            yield ToolSurface(server)
        finally:
            await server.shutdown()

    def list_tools(self) -> list[dict[str, Any]]:
        """List all registered MCP tools with their schemas.

        Returns a list of dicts with 'name', 'description', and 'parameters'.
        """
        tools = self._server.mcp._tool_manager.list_tools()
        return [
            {
                "name": tool.name,
                "description": f"Document processing tool: {tool.name}",
                "parameters": tool.parameters,
            }
            for tool in tools
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> str:
        """Call an MCP tool by name and return its text.

        Args:
            name: Tool name.
            arguments: Tool arguments as a dict.

        Returns:
            The tool's text output, or "Error: <message>" if it failed.
        """
        try:
            result = await self._server.mcp.call_tool(name, arguments)
        except ToolError as e:
            # FastMCP wraps handler and validation failures in its own prefix.
            cause = e.__cause__ or e
            logger.debug(f"Tool {name} failed: {cause}")
            return f"Error: {cause}"
        except Exception as e:
            logger.debug(f"Tool {name} failed: {e}")
            return f"Error: {e}"
        return result_text(result)

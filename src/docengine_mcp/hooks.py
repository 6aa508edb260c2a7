"""Pluggy hook specifications for Document Engine MCP plugins.

Each tool family is a plugin implementing these hooks; external
packages can contribute more tools through the same interface.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from docengine_mcp.plugin import PluginMetadata
    from docengine_mcp.server import DocEngineServer

PROJECT_NAME = "docengine_mcp"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DocEngineMCPHookSpec:
    """Hook specifications that plugins may implement."""

    @hookspec
    def docengine_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata identifying the plugin."""

    @hookspec
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Register MCP tools with the server.

        Args:
            mcp: The FastMCP instance to register tools on.
            server: The server, giving access to config and the backend client.
        """

    @hookspec
    def docengine_register_resources(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Register MCP resources with the server."""

    @hookspec
    def docengine_health_check(  # type: ignore[empty-body]
        self, server: DocEngineServer
    ) -> tuple[bool, str]:
        """Check whether the plugin can operate.

        Returns:
            Tuple of (healthy, message).
        """

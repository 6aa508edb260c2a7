"""Plugin interface for Document Engine MCP tool families.

This module defines the plugin base class and metadata that every tool
family uses to integrate with the server via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from docengine_mcp.hooks import hookimpl

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from docengine_mcp.server import DocEngineServer


@dataclass
class PluginMetadata:
    """Metadata describing a Document Engine MCP plugin."""

    name: str
    """Unique plugin name, e.g., 'discovery', 'annotations'."""

    version: str
    """Plugin version following semver, e.g., '1.0.0'."""

    description: str
    """Human-readable description of what this plugin provides."""

    maintainer: str
    """Maintainer email or team."""

    requires_backend: bool = True
    """Whether the plugin's tools need a reachable Document Engine."""


class BasePlugin:
    """Base implementation of a Document Engine MCP plugin.

    Tool families extend this class and override docengine_register_tools.
    All hook methods are decorated with @hookimpl to register them with
    pluggy.

    Example entry point in pyproject.toml for external plugins:
        [project.entry-points."docengine_mcp.plugins"]
        my_plugin = "my_package.plugin:MyPlugin"
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        """Initialize the plugin with metadata.

        Args:
            metadata: Plugin metadata.
        """
        self._metadata = metadata

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return self._metadata

    @hookimpl
    def docengine_get_plugin_metadata(self) -> PluginMetadata:
        """Return plugin metadata."""
        return self._metadata

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Register MCP tools. Override in subclass."""
        pass

    @hookimpl
    def docengine_register_resources(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Register MCP resources. Override in subclass."""
        pass

    @hookimpl
    def docengine_health_check(self, server: DocEngineServer) -> tuple[bool, str]:
        """Check that the backend client is available when the plugin needs it."""
        if not self._metadata.requires_backend:
            return True, "No backend requirements"
        if not server.has_client:
            return False, "Document Engine client not initialized"
        return True, "Document Engine client available"


"""Plugin manager using pluggy for the Document Engine MCP server.

This module provides the PluginManager class that handles plugin
discovery, registration, and lifecycle management using pluggy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from docengine_mcp.hooks import PROJECT_NAME, DocEngineMCPHookSpec

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from docengine_mcp.plugin import PluginMetadata
    from docengine_mcp.server import DocEngineServer

logger = logging.getLogger(__name__)

# Entry point group name for external plugin discovery
PLUGIN_ENTRY_POINT_GROUP = "docengine_mcp.plugins"


class PluginManager:
    """Manages plugin discovery, registration, and health checks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DocEngineMCPHookSpec)
        self._registered_plugins: dict[str, Any] = {}
        self._healthy_plugins: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Get the pluggy hook caller for invoking hooks."""
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        """Get all registered plugins by name."""
        return self._registered_plugins

    @property
    def healthy_plugins(self) -> dict[str, Any]:
        """Get plugins that passed health checks."""
        return self._healthy_plugins

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register a plugin instance.

        Args:
            plugin: Plugin instance implementing hook methods.
            name: Optional name for the plugin. Defaults to the name in
                the plugin's metadata, then to its class name.

        Returns:
            The name used to register the plugin.
        """
        if name is None:
            if hasattr(plugin, "docengine_get_plugin_metadata"):
                name = plugin.docengine_get_plugin_metadata().name
            else:
                name = type(plugin).__name__

        self._pm.register(plugin, name=name)
        self._registered_plugins[name] = plugin
        logger.debug(f"Registered plugin: {name}")
        return name

    def load_entrypoint_plugins(self) -> int:
        """Load external plugins from the docengine_mcp.plugins entry point group.

        Returns:
            Number of plugins loaded.
        """
        count = self._pm.load_setuptools_entrypoints(PLUGIN_ENTRY_POINT_GROUP)

        for plugin in self._pm.get_plugins():
            name = self._pm.get_name(plugin)
            if name and name not in self._registered_plugins:
                self._registered_plugins[name] = plugin
                logger.info(f"Loaded external plugin from entry point: {name}")

        logger.info(f"Loaded {count} external plugins from entry points")
        return count

    def load_core_plugins(self) -> int:
        """Register the built-in tool family plugins.

        Returns:
            Number of plugins loaded.
        """
        from docengine_mcp.domains.registry import get_core_plugins

        plugins = get_core_plugins()
        for plugin in plugins:
            self.register_plugin(plugin)

        logger.info(f"Loaded {len(plugins)} core plugins")
        return len(plugins)

    def get_all_metadata(self) -> list[PluginMetadata]:
        """Collect metadata from all registered plugins."""
        results = self.hook.docengine_get_plugin_metadata()
        return [meta for meta in results if meta is not None]

    def register_all_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Call tool registration hooks on all plugins."""
        self.hook.docengine_register_tools(mcp=mcp, server=server)
        logger.info(f"Registered tools from {len(self._registered_plugins)} plugins")

    def register_all_resources(self, mcp: FastMCP, server: DocEngineServer) -> None:
        """Call resource registration hooks on all plugins."""
        self.hook.docengine_register_resources(mcp=mcp, server=server)

    def run_health_checks(self, server: DocEngineServer) -> dict[str, tuple[bool, str]]:
        """Run health checks on all registered plugins.

        Updates healthy_plugins with the plugins that pass.

        Args:
            server: The server instance passed to each health check.

        Returns:
            Dictionary mapping plugin names to (healthy, message) tuples.
        """
        results: dict[str, tuple[bool, str]] = {}
        self._healthy_plugins.clear()

        for name, plugin in self._registered_plugins.items():
            try:
                if hasattr(plugin, "docengine_health_check"):
                    is_healthy, message = plugin.docengine_health_check(server=server)
                else:
                    is_healthy, message = True, "No health check defined"

                results[name] = (is_healthy, message)

                if is_healthy:
                    self._healthy_plugins[name] = plugin
                    logger.info(f"Plugin {name} health check passed: {message}")
                else:
                    logger.warning(f"Plugin {name} unavailable: {message}")
            except Exception as e:
                results[name] = (False, f"Health check error: {e}")
                logger.warning(f"Plugin {name} health check failed with error: {e}")

        return results

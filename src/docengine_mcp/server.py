"""FastMCP server definition for Document Engine with plugin-based tool families."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP

from docengine_mcp.clients.client import DocumentEngineClient
from docengine_mcp.config import DocEngineConfig, get_config
from docengine_mcp.plugin_manager import PluginManager
from docengine_mcp.utils.errors import DocumentEngineError

logger = logging.getLogger(__name__)


class DocEngineServer:
    """Document Engine MCP server with pluggable tool families."""

    def __init__(self, config: DocEngineConfig | None = None) -> None:
        self._config = config or get_config()
        self._client: DocumentEngineClient | None = None
        self._mcp: FastMCP | None = None
        self._plugin_manager: PluginManager | None = None

    @property
    def config(self) -> DocEngineConfig:
        """Get server configuration."""
        return self._config

    @property
    def has_client(self) -> bool:
        """Whether an open backend client is available."""
        return self._client is not None and self._client.is_open

    @property
    def client(self) -> DocumentEngineClient:
        """Get the shared Document Engine client.

        Raises:
            RuntimeError: If the server has not been started.
        """
        if self._client is None:
            raise RuntimeError("Server not running. Document Engine client not available.")
        return self._client

    @property
    def mcp(self) -> FastMCP:
        """Get the MCP server instance.

        Raises:
            RuntimeError: If the server is not initialized.
        """
        if self._mcp is None:
            raise RuntimeError("Server not initialized.")
        return self._mcp

    @property
    def plugin_manager(self) -> PluginManager:
        """Get the plugin manager.

        Raises:
            RuntimeError: If the server is not initialized.
        """
        if self._plugin_manager is None:
            raise RuntimeError("Server not initialized.")
        return self._plugin_manager

    async def startup(self) -> None:
        """Open the backend client and run plugin health checks.

        A new client waits for Document Engine to answer its health
        check. A client injected before startup (tests, eval harness) is
        kept as long as it is open.
        """
        if self._client is None or not self._client.is_open:
            self._client = DocumentEngineClient(self._config)
            await self._client.open()
            try:
                await self._client.wait_until_ready(
                    self._config.poll_max_retries, self._config.poll_retry_delay
                )
            except DocumentEngineError:
                await self.shutdown()
                raise

        if self._plugin_manager is not None:
            self._plugin_manager.run_health_checks(self)
            logger.info(
                f"Document Engine MCP server started with "
                f"{len(self._plugin_manager.healthy_plugins)}/"
                f"{len(self._plugin_manager.registered_plugins)} plugins active"
            )

    async def shutdown(self) -> None:
        """Close the backend client."""
        if self._client is not None:
            await self._client.close()
        self._client = None
        logger.info("Document Engine MCP server shut down")

    def _create_lifespan(self) -> Callable[[Any], AbstractAsyncContextManager[None]]:
        """Create the lifespan context manager for the MCP server."""
        server_self = self

        @asynccontextmanager
        async def lifespan(_app: Any) -> AsyncIterator[None]:
            """Open the backend client on startup, close it on shutdown."""
            logger.info(f"Starting Document Engine MCP server for {server_self._config.base_url}")
            await server_self.startup()
            try:
                yield
            finally:
                await server_self.shutdown()

        return lifespan

    def create_mcp(self) -> FastMCP:
        """Create the FastMCP server and register all plugin tools."""
        self._plugin_manager = PluginManager()
        self._plugin_manager.load_core_plugins()
        self._plugin_manager.load_entrypoint_plugins()

        mcp = FastMCP(
            name="document-engine-mcp",
            instructions="MCP server for Nutrient Document Engine - enables AI agents to "
            "list, read, search, annotate, redact, fill and edit PDF documents.",
            lifespan=self._create_lifespan(),
            host=self._config.host,
            port=self._config.port,
        )
        self._mcp = mcp

        self._plugin_manager.register_all_tools(mcp, self)
        self._plugin_manager.register_all_resources(mcp, self)
        self._register_core_resources(mcp)

        return mcp

    def _register_core_resources(self, mcp: FastMCP) -> None:
        """Register core MCP resources describing the server."""

        @mcp.resource("docengine://server/plugins")
        def server_plugins() -> dict:
            """Get loaded tool family plugins and their health status."""
            pm = self.plugin_manager
            plugins = {}
            for meta in pm.get_all_metadata():
                plugins[meta.name] = {
                    "version": meta.version,
                    "description": meta.description,
                    "maintainer": meta.maintainer,
                    "healthy": meta.name in pm.healthy_plugins,
                }
            return {
                "backend": self._config.base_url,
                "total_plugins": len(pm.registered_plugins),
                "active_plugins": len(pm.healthy_plugins),
                "plugins": plugins,
            }

        logger.info("Registered core MCP resources")


# Global server instance
_server: DocEngineServer | None = None


def get_server() -> DocEngineServer:
    """Get the global server instance."""
    global _server
    if _server is None:
        _server = DocEngineServer()
    return _server


def create_server(config: DocEngineConfig | None = None) -> FastMCP:
    """Create and return the MCP server instance.

    This is the main entry point for creating the server.
    """
    global _server
    _server = DocEngineServer(config)
    return _server.create_mcp()

"""Plugin registry for the core tool families.

Each tool family is wrapped in a plugin class that registers its tools
through pluggy hooks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docengine_mcp.hooks import hookimpl
from docengine_mcp.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from docengine_mcp.server import DocEngineServer

MAINTAINER = "document-engine-mcp@nutrient.io"


class DiscoveryPlugin(BasePlugin):
    """Plugin for finding documents and inspecting their structure."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="discovery",
                version="1.0.0",
                description="List documents and read document information",
                maintainer=MAINTAINER,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.discovery.tools import register_tools

        register_tools(mcp, server)


class ExtractionPlugin(BasePlugin):
    """Plugin for pulling text, tables and key-value data out of documents."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="extraction",
                version="1.0.0",
                description="Text, table and key-value extraction, search and page rendering",
                maintainer=MAINTAINER,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.extraction.tools import register_tools

        register_tools(mcp, server)


class FormsPlugin(BasePlugin):
    """Plugin for reading and filling PDF forms."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="forms",
                version="1.0.0",
                description="Form field extraction and filling",
                maintainer=MAINTAINER,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.forms.tools import register_tools

        register_tools(mcp, server)


class AnnotationsPlugin(BasePlugin):
    """Plugin for annotation markup and redaction workflows."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="annotations",
                version="1.0.0",
                description="Annotations, comments and redactions",
                maintainer=MAINTAINER,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.annotations.tools import register_tools

        register_tools(mcp, server)


class EditingPlugin(BasePlugin):
    """Plugin for page-level document edits."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="editing",
                version="1.0.0",
                description="Split, merge, rotate, watermark, duplicate and add pages",
                maintainer=MAINTAINER,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.editing.tools import register_tools

        register_tools(mcp, server)


class HealthPlugin(BasePlugin):
    """Plugin exposing the health check tool."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="health",
                version="1.0.0",
                description="Server and backend health reporting",
                maintainer=MAINTAINER,
                requires_backend=False,
            )
        )

    @hookimpl
    def docengine_register_tools(self, mcp: FastMCP, server: DocEngineServer) -> None:
        from docengine_mcp.domains.health.tools import register_tools

        register_tools(mcp, server)


def get_core_plugins() -> list[BasePlugin]:
    """Return all core tool family plugin instances."""
    return [
        DiscoveryPlugin(),
        ExtractionPlugin(),
        FormsPlugin(),
        AnnotationsPlugin(),
        EditingPlugin(),
        HealthPlugin(),
    ]

"""MCP Tools for server health."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from mcp.server.fastmcp import FastMCP

from docengine_mcp import __version__
from docengine_mcp.utils.errors import DocumentEngineError

if TYPE_CHECKING:
    from docengine_mcp.server import DocEngineServer

logger = logging.getLogger(__name__)

_STARTED = time.monotonic()


def format_uptime(seconds: int) -> str:
    """Format seconds as e.g. "1d 2h 3m 4s", omitting zero units."""
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    parts = [f"{v}{u}" for v, u in ((days, "d"), (hours, "h"), (minutes, "m")) if v > 0]
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def mask_url(url: str) -> str:
    """Reduce a URL to scheme, host and port, dropping credentials and path."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.hostname:
        return url
    port = f":{parsed.port}" if parsed.port else ""
    return f"{parsed.scheme}://{parsed.hostname}{port}"


def register_tools(mcp: FastMCP, server: DocEngineServer) -> None:
    """Register health tools with the MCP server."""

    @mcp.tool()
    async def health_check() -> str:
        """Check the health of the MCP server and the Document Engine backend."""
        started = time.monotonic()
        api_error: str | None = None
        try:
            await server.client.get_json("/healthcheck")
        except (DocumentEngineError, RuntimeError) as e:
            api_error = e.message if isinstance(e, DocumentEngineError) else str(e)
            logger.warning(f"Document Engine health check failed: {api_error}")
        latency_ms = round((time.monotonic() - started) * 1000)

        config = server.config
        lines = [
            "# Health Check Results",
            "",
            "## Overall Status",
            "",
            f"- **Status**: {'⚠️ Degraded' if api_error else '✅ Operational'}",
            f"- **Response Time**: {latency_ms}ms",
            "",
            "## Component Status",
            "",
            "- **MCP Server**: ✅ Operational",
            f"- **Document Engine API**: {'❌ Error' if api_error else '✅ Operational'}",
        ]
        if api_error:
            lines.append(f"  - Error: {api_error}")
        lines += [
            "",
            "## Server Information",
            "",
            f"- **Version**: {__version__}",
            f"- **Uptime**: {format_uptime(int(time.monotonic() - _STARTED))}",
            f"- **Timestamp**: {datetime.now(timezone.utc).isoformat()}",
            "",
            "## Configuration",
            "",
            f"- **Document Engine URL**: {mask_url(config.base_url)}",
            f"- **Connection Timeout**: {config.connection_timeout}ms",
            f"- **Max Retries**: {config.max_retries}",
            f"- **Retry Delay**: {config.retry_delay}ms",
            f"- **Max Connections**: {config.max_connections}",
            f"- **Log Level**: {config.log_level.value}",
            f"- **MCP Transport**: {config.transport.value}",
        ]
        if config.transport.value != "stdio":
            lines.append(f"- **MCP Host**: {config.host}")
            lines.append(f"- **MCP Port**: {config.port}")
        return "\n".join(lines)

"""Document Engine REST clients."""

from docengine_mcp.clients.client import DocumentEngineClient

__all__ = ["DocumentEngineClient"]

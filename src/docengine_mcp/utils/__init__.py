"""Utility modules for the Document Engine MCP server."""

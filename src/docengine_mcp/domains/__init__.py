"""Tool families exposed by the Document Engine MCP server."""

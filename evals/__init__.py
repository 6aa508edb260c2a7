"""Tool usage evaluation for the Document Engine MCP tools."""

"""Document Engine MCP server - document processing tools for AI agents."""

__version__ = "0.1.0"

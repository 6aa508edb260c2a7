"""Entry point for the Document Engine MCP server."""

import argparse
import logging
import sys
from typing import Any

from pydantic import ValidationError

from docengine_mcp import __version__
from docengine_mcp.config import DocEngineConfig, LogLevel, TransportMode


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server.

    Logs go to stderr so stdout stays free for the stdio transport.
    """
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="docengine-mcp",
        description="MCP server for Nutrient Document Engine",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default=None,
        help="Transport mode (default: MCP_TRANSPORT or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 5100)",
    )

    # Backend options
    parser.add_argument(
        "--base-url",
        default=None,
        help="Document Engine base URL (default: http://localhost:5000)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config_kwargs: dict[str, Any] = {}
    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)
    if args.host:
        config_kwargs["host"] = args.host
    if args.port:
        config_kwargs["port"] = args.port
    if args.base_url:
        config_kwargs["base_url"] = args.base_url
    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    try:
        config = DocEngineConfig(**config_kwargs)
    except ValidationError as e:
        setup_logging(LogLevel.ERROR)
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        return 1

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Document Engine MCP server v{__version__}")

    from docengine_mcp.server import create_server

    mcp = create_server(config)

    if config.transport == TransportMode.STDIO:
        logger.info("Running with stdio transport")
        mcp.run(transport="stdio")
    elif config.transport == TransportMode.SSE:
        logger.info(f"Running with SSE transport on {config.host}:{config.port}")
        mcp.run(transport="sse")
    else:
        logger.info(f"Running with streamable-http transport on {config.host}:{config.port}")
        mcp.run(transport="streamable-http")

    return 0


if __name__ == "__main__":
    sys.exit(main())

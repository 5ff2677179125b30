"""Entry point for the incus_mcp server."""

import logging

from incus_mcp.server import mcp, settings  # Importing also configures logging

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with the configured transport."""
    if settings.transport == "stdio":
        logger.info("Starting Incus MCP server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting Incus MCP server (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        mcp.run(
            transport="http",
            host=settings.http_host,
            port=settings.http_port,
        )


if __name__ == "__main__":
    run_server()

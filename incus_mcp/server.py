"""Incus MCP FastMCP server.

This is a thin wrapper that exposes the tool registry over MCP. All
business logic lives in the tools/ and services/ modules.
"""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from mcp.types import TextContent
from pydantic import Field
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from incus_mcp import __version__
from incus_mcp.config import Settings
from incus_mcp.dependencies import Dependencies
from incus_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from incus_mcp.models import ToolDescriptor
from incus_mcp.tools import ToolRegistry
from incus_mcp.utils.console import MCPRequestFormatter
from incus_mcp.utils.logfile import prepare_log_file

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "fastmcp",
    "mcp",
    "starlette",
    "anyio",
)


def configure_logging(settings: Settings) -> None:
    """Configure the incus_mcp package logger.

    Logs go to stderr (stdout belongs to the stdio transport) and, when a
    log file is configured, to that file without colors.
    """
    package_logger = logging.getLogger("incus_mcp")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Only add handlers if not already configured
    if not package_logger.handlers:
        if settings.log_to_stderr:
            use_colors = settings.log_colors and sys.stderr.isatty()
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
            package_logger.addHandler(handler)

        if settings.log_file is not None:
            truncated = prepare_log_file(
                settings.log_file, settings.log_truncate, settings.log_max_age_hours
            )
            file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
            file_handler.setFormatter(MCPRequestFormatter(use_colors=False))
            package_logger.addHandler(file_handler)
            if truncated:
                package_logger.info("Truncated stale log file %s", settings.log_file)

        if not package_logger.handlers:
            package_logger.addHandler(logging.NullHandler())
        package_logger.propagate = False

    for name in _NOISY_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(logging.WARNING)
        lg.handlers = []
        lg.propagate = False


logger = logging.getLogger(__name__)


class IncusTool(Tool):
    """MCP tool backed by a registry entry.

    Arguments are passed to the registry unvalidated; the registry owns
    validation. Error envelopes become MCP ``isError`` results.
    """

    registry: Any = Field(exclude=True, repr=False)

    @classmethod
    def from_descriptor(
        cls, descriptor: ToolDescriptor, registry: ToolRegistry
    ) -> "IncusTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema(),
            registry=registry,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        response = await self.registry.invoke(self.name, arguments)
        if response.is_error:
            raise ToolError(response.joined_text)
        return ToolResult(
            content=[TextContent(type="text", text=block.text) for block in response.content]
        )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup and shutdown.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with registered tool names
    """
    deps: Dependencies = server.deps
    logger.info("Incus MCP server starting up (version %s)", __version__)
    logger.info(
        "Registered %d tool(s), strict projects=%s, binary=%s",
        len(deps.registry),
        deps.settings.strict_projects,
        deps.settings.incus_binary,
    )
    logger.info("Incus MCP server ready to accept connections")
    try:
        yield {"tools": deps.registry.names()}
    finally:
        logger.info("Incus MCP server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings) -> None:
    """Add middleware in order: ErrorHandling -> Logging (with timing).

    Args:
        server: The FastMCP server to configure.
        settings: Loaded settings.
    """
    # First added = innermost
    server.add_middleware(
        ErrorHandlingMiddleware(include_traceback=settings.include_traceback)
    )
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=settings.slow_threshold_ms,
        )
    )


def register_tools(server: FastMCP, registry: ToolRegistry) -> None:
    """Expose every registry entry as an MCP tool."""
    for descriptor in registry:
        server.add_tool(IncusTool.from_descriptor(descriptor, registry))


def create_server(deps: Dependencies | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        deps: Dependencies to use, created from the environment if omitted

    Returns:
        Configured FastMCP server instance
    """
    deps = deps or Dependencies.create()
    server = FastMCP("incus-mcp", lifespan=app_lifespan)
    server.deps = deps

    configure_middleware(server, deps.settings)
    register_tools(server, deps.registry)

    # Health check endpoint for HTTP transport
    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
settings = Settings.from_env()
configure_logging(settings)
mcp = create_server(Dependencies.from_settings(settings))

"""Incus MCP middleware components."""

from incus_mcp.middleware.base import IncusMiddleware
from incus_mcp.middleware.errors import ErrorHandlingMiddleware
from incus_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "IncusMiddleware",
    "LoggingMiddleware",
]

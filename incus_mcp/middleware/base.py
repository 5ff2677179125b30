"""Base middleware class for Incus MCP."""

import logging

from fastmcp.server.middleware import Middleware


class IncusMiddleware(Middleware):
    """FastMCP middleware with a configurable logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to the module logger.
        """
        self.logger = logger or logging.getLogger(__name__)

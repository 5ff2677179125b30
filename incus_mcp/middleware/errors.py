"""Error handling middleware for consistent error logging."""

import logging
import traceback
from collections import Counter
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import MiddlewareContext

from incus_mcp.middleware.base import IncusMiddleware


class ErrorHandlingMiddleware(IncusMiddleware):
    """Logs exceptions raised below it, tracks per-type counts, re-raises.

    Failed incus calls reach this layer as ``ToolError`` carrying the
    envelope text; they are expected outcomes and logged at WARNING.
    Anything else is a server bug and logged at ERROR.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether unexpected errors log a traceback.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self._error_counts: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Error counts keyed by exception type name."""
        return dict(self._error_counts)

    def reset_stats(self) -> None:
        self._error_counts.clear()

    def _log(self, context: MiddlewareContext, error: Exception) -> None:
        error_type = type(error).__name__
        if isinstance(error, ToolError):
            self.logger.warning("Tool error in %s: %s", context.method, error)
            return

        detail = f"\n{traceback.format_exc()}" if self.include_traceback else ""
        self.logger.error(
            "Error in %s: %s: %s%s", context.method, error_type, error, detail
        )

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log and count errors, then re-raise them unchanged."""
        try:
            return await call_next(context)
        except Exception as e:
            self._error_counts[type(e).__name__] += 1
            self._log(context, e)
            raise

"""Typed failures raised by the incus execution pipeline.

Every failure the pipeline can produce is an ``IncusToolError`` subclass
tagged with an ``ErrorKind``. Only the tool dispatcher catches them.
"""

from collections.abc import Sequence
from enum import Enum

from incus_mcp.utils.shell import format_command


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"
    DECODE = "decode"
    VALIDATION = "validation"


class IncusToolError(Exception):
    """Base class for all pipeline failures."""

    kind: ErrorKind

    @property
    def user_message(self) -> str:
        """Most specific text to show the caller."""
        return str(self)


class UnavailableError(IncusToolError):
    """incus binary is missing or failed its liveness check."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = "incus CLI not available"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CommandTimeoutError(IncusToolError):
    """Command exceeded its deadline and was killed.

    ``stdout`` and ``stderr`` hold whatever was captured before the kill.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        argv: Sequence[str],
        timeout_ms: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.argv = list(argv)
        self.timeout_ms = timeout_ms
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"incus command timed out after {timeout_ms}ms: {format_command(self.argv)}"
        )


class NonZeroExitError(IncusToolError):
    """Command ran to completion but reported failure."""

    kind = ErrorKind.NON_ZERO_EXIT

    def __init__(self, argv: Sequence[str], exit_code: int, diagnostic: str) -> None:
        self.argv = list(argv)
        self.exit_code = exit_code
        self.diagnostic = diagnostic
        super().__init__(
            f"incus command failed ({exit_code}): {format_command(self.argv)}"
        )

    @property
    def user_message(self) -> str:
        return self.diagnostic or str(self)


class DecodeError(IncusToolError):
    """Structured output could not be parsed."""

    kind = ErrorKind.DECODE

    def __init__(self, preview: str) -> None:
        self.preview = preview
        super().__init__(f"Failed to parse JSON output: {preview}")


class InputValidationError(IncusToolError):
    """Tool input failed its schema before anything was spawned."""

    kind = ErrorKind.VALIDATION

    def __init__(self, tool: str, problems: Sequence[str]) -> None:
        self.tool = tool
        self.problems = list(problems)
        details = "; ".join(self.problems) or "invalid input"
        super().__init__(f"Invalid arguments for {tool}: {details}")

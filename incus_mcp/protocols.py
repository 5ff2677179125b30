"""Protocol interfaces for dependency inversion.

The tool registry depends on ``CommandRunner`` rather than on
``IncusCLI`` directly, so tests can substitute a recording fake:

    class FakeRunner:
        async def run(self, args, timeout_ms=None, stdin=None):
            return ExecutionResult(0, "", "")
        ...

    registry = ToolRegistry(FakeRunner())
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from incus_mcp.models import ExecutionResult


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running incus subcommands.

    Implementations raise ``IncusToolError`` subclasses on failure and
    never return a result with a nonzero exit status.
    """

    async def run(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> ExecutionResult:
        """Run and return the raw successful result."""
        ...

    async def run_text(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> str:
        """Run and return trimmed text output."""
        ...

    async def run_json(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> Any:
        """Run with JSON output and return the decoded payload."""
        ...


@runtime_checkable
class Prober(Protocol):
    """Protocol for the one-time availability check."""

    async def ensure_available(self) -> None:
        """Raise ``UnavailableError`` if the binary cannot be used."""
        ...

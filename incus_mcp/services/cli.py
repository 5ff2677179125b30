"""incus CLI facade: availability gate, executor and normalizer."""

import logging
from collections.abc import Sequence
from typing import Any

from incus_mcp.models import Command, ExecutionResult
from incus_mcp.protocols import Prober
from incus_mcp.services.decode import check_exit, decode_json, decode_text, with_json_format
from incus_mcp.services.executors import DEFAULT_TIMEOUT_MS, run_process
from incus_mcp.services.probe import AvailabilityProber
from incus_mcp.utils.shell import format_command

logger = logging.getLogger(__name__)


class IncusCLI:
    """Runs incus subcommands and normalizes their results.

    Every call waits for the prober before spawning anything.
    """

    def __init__(
        self,
        binary: str = "incus",
        prober: Prober | None = None,
    ) -> None:
        self.binary = binary
        self.prober = prober or AvailabilityProber(binary)

    def command(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> Command:
        """Build an immutable command for this binary."""
        return Command(
            binary=self.binary,
            args=tuple(args),
            timeout_ms=timeout_ms or DEFAULT_TIMEOUT_MS,
            stdin=stdin,
        )

    async def run(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> ExecutionResult:
        """Run a subcommand and return its raw successful result.

        Raises:
            UnavailableError: incus missing or unhealthy.
            CommandTimeoutError: Deadline exceeded.
            NonZeroExitError: incus reported failure.
        """
        await self.prober.ensure_available()
        command = self.command(args, timeout_ms, stdin)
        logger.debug("Running %s", format_command(command.argv))
        result = await run_process(command)
        return check_exit(command, result)

    async def run_text(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> str:
        """Run a subcommand and return its trimmed text output."""
        return decode_text(await self.run(args, timeout_ms, stdin))

    async def run_json(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> Any:
        """Run a subcommand with ``--format json`` and decode stdout.

        Raises:
            DecodeError: If stdout is not valid JSON.
        """
        result = await self.run(with_json_format(args), timeout_ms, stdin)
        return decode_json(result)

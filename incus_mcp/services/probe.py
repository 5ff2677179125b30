"""One-time availability check for the incus binary."""

import asyncio
import logging

from incus_mcp.models import Command
from incus_mcp.services.errors import IncusToolError, UnavailableError
from incus_mcp.services.executors import run_process

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_MS = 5_000


class AvailabilityProber:
    """Lazily runs ``incus version`` once and caches the outcome.

    The first caller starts the check; concurrent callers await the same
    task. Success and failure are both kept for the lifetime of the
    prober, there is no expiry and no re-check.
    """

    def __init__(self, binary: str = "incus") -> None:
        self.binary = binary
        self._check: asyncio.Task[None] | None = None

    @property
    def checked(self) -> bool:
        """Whether the check has finished (either way)."""
        return self._check is not None and self._check.done()

    async def ensure_available(self) -> None:
        """Wait for the shared availability check.

        Raises:
            UnavailableError: If the binary is missing or unhealthy.
        """
        if self._check is None:
            self._check = asyncio.ensure_future(self._run_check())
        # Shield so a cancelled caller does not cancel the shared check
        await asyncio.shield(self._check)

    async def _run_check(self) -> None:
        command = Command(
            binary=self.binary,
            args=("version",),
            timeout_ms=PROBE_TIMEOUT_MS,
        )
        try:
            result = await run_process(command)
        except UnavailableError as e:
            logger.error("%s CLI not found: %s", self.binary, e.detail)
            raise UnavailableError() from None
        except IncusToolError as e:
            logger.error("%s version check failed: %s", self.binary, e)
            raise UnavailableError(str(e)) from e

        if result.returncode != 0:
            detail = result.stderr.strip()
            logger.error(
                "%s version exited with %d: %s",
                self.binary,
                result.returncode,
                detail or "(no output)",
            )
            raise UnavailableError(detail)

        logger.info("%s CLI available (%s)", self.binary, result.stdout.strip())

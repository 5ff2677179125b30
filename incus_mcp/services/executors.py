"""Local process executor for the incus binary.

The executor never interprets exit status; it only spawns, feeds, drains
and enforces the deadline. See ``services.decode`` for normalization.
"""

import asyncio
import contextlib
import logging
import os
import signal

from incus_mcp.models import Command, ExecutionResult
from incus_mcp.services.errors import CommandTimeoutError, UnavailableError
from incus_mcp.utils.shell import format_command

logger = logging.getLogger(__name__)

# Deadline tiers (milliseconds)
DEFAULT_TIMEOUT_MS = 30_000
EXEC_TIMEOUT_MS = 60_000
LAUNCH_TIMEOUT_MS = 120_000

_READ_CHUNK = 64 * 1024
# Upper bound on reaping a killed process group
_REAP_TIMEOUT_S = 1.0


async def _drain(stream: asyncio.StreamReader | None, buffer: bytearray) -> None:
    """Read a stream to EOF into buffer."""
    if stream is None:
        return
    while chunk := await stream.read(_READ_CHUNK):
        buffer.extend(chunk)


async def _feed(writer: asyncio.StreamWriter | None, payload: str | None) -> None:
    """Write the full payload to the child's stdin, then close it."""
    if writer is None:
        return
    try:
        if payload:
            writer.write(payload.encode("utf-8"))
            await writer.drain()
    except (BrokenPipeError, ConnectionResetError):
        # Child exited without reading all of stdin; its exit status reports why
        logger.debug("stdin closed early by child process")
    finally:
        writer.close()


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def _kill_group(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the child and every descendant sharing its session."""
    with contextlib.suppress(ProcessLookupError):
        os.killpg(proc.pid, signal.SIGKILL)


async def run_process(command: Command) -> ExecutionResult:
    """Run a command to completion under its deadline.

    Stdin is fed and both output streams are drained concurrently with
    waiting for exit, so a child blocked on a full pipe can always make
    progress.

    Args:
        command: Command to execute

    Returns:
        ExecutionResult with exit status and captured output.

    Raises:
        UnavailableError: If the binary cannot be spawned.
        CommandTimeoutError: If the deadline expires. The child is killed
            and the error carries output captured before the kill.
    """
    argv = command.argv
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=(
                asyncio.subprocess.PIPE
                if command.stdin is not None
                else asyncio.subprocess.DEVNULL
            ),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )
    except OSError as e:
        raise UnavailableError(f"cannot execute {command.binary}: {e}") from e

    stdout = bytearray()
    stderr = bytearray()
    pending = asyncio.gather(
        _feed(proc.stdin, command.stdin),
        _drain(proc.stdout, stdout),
        _drain(proc.stderr, stderr),
        proc.wait(),
    )

    try:
        await asyncio.wait_for(pending, timeout=command.timeout_ms / 1000)
    except TimeoutError:
        # Snapshot before the kill so late output is not included
        captured_out, captured_err = _decode(stdout), _decode(stderr)
        logger.warning(
            "Command exceeded %dms deadline, killing pid %s: %s",
            command.timeout_ms,
            proc.pid,
            format_command(argv),
        )
        _kill_group(proc)
        try:
            await asyncio.wait_for(proc.wait(), timeout=_REAP_TIMEOUT_S)
        except TimeoutError:
            # A descendant left the group and still holds the pipes
            logger.warning("pid %s not reaped within %.1fs", proc.pid, _REAP_TIMEOUT_S)
        raise CommandTimeoutError(
            argv, command.timeout_ms, captured_out, captured_err
        ) from None

    return ExecutionResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
    )

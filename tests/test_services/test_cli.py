"""Tests for the incus CLI facade."""

from unittest.mock import AsyncMock, patch

import pytest

from incus_mcp.models import ExecutionResult
from incus_mcp.protocols import CommandRunner
from incus_mcp.services import IncusCLI
from incus_mcp.services.errors import DecodeError, NonZeroExitError, UnavailableError
from incus_mcp.services.executors import DEFAULT_TIMEOUT_MS


@pytest.fixture
def prober() -> AsyncMock:
    """Create a prober that reports incus available."""
    mock = AsyncMock()
    mock.ensure_available = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def cli(prober: AsyncMock) -> IncusCLI:
    return IncusCLI("incus", prober)


def test_cli_satisfies_runner_protocol(cli: IncusCLI) -> None:
    assert isinstance(cli, CommandRunner)


def test_cli_command_applies_default_timeout(cli: IncusCLI) -> None:
    command = cli.command(["list"])
    assert command.timeout_ms == DEFAULT_TIMEOUT_MS
    assert command.argv == ["incus", "list"]
    assert command.stdin is None


@pytest.mark.asyncio
async def test_cli_unavailable_spawns_nothing(cli: IncusCLI, prober: AsyncMock) -> None:
    """No command runs when the availability check fails."""
    prober.ensure_available.side_effect = UnavailableError()
    mock_run = AsyncMock()

    with patch("incus_mcp.services.cli.run_process", mock_run):
        with pytest.raises(UnavailableError):
            await cli.run_text(["list"])

    mock_run.assert_not_awaited()


@pytest.mark.asyncio
async def test_cli_run_text(cli: IncusCLI, prober: AsyncMock) -> None:
    """run_text waits for the prober and returns trimmed stdout."""
    mock_run = AsyncMock(return_value=ExecutionResult(0, "Instance started\n", ""))

    with patch("incus_mcp.services.cli.run_process", mock_run):
        text = await cli.run_text(["start", "web1"], timeout_ms=5_000)

    prober.ensure_available.assert_awaited_once()
    command = mock_run.await_args.args[0]
    assert command.argv == ["incus", "start", "web1"]
    assert command.timeout_ms == 5_000
    assert text == "Instance started"


@pytest.mark.asyncio
async def test_cli_run_json_appends_format(cli: IncusCLI) -> None:
    """run_json requests JSON output and decodes it."""
    mock_run = AsyncMock(return_value=ExecutionResult(0, '[{"name": "web1"}]', ""))

    with patch("incus_mcp.services.cli.run_process", mock_run):
        data = await cli.run_json(["list", "--all-projects"])

    command = mock_run.await_args.args[0]
    assert command.argv == ["incus", "list", "--all-projects", "--format", "json"]
    assert data == [{"name": "web1"}]


@pytest.mark.asyncio
async def test_cli_run_json_decode_failure(cli: IncusCLI) -> None:
    mock_run = AsyncMock(return_value=ExecutionResult(0, "not-json", ""))

    with patch("incus_mcp.services.cli.run_process", mock_run):
        with pytest.raises(DecodeError):
            await cli.run_json(["list"])


@pytest.mark.asyncio
async def test_cli_nonzero_exit_raises(cli: IncusCLI) -> None:
    mock_run = AsyncMock(return_value=ExecutionResult(1, "", "Error: not found\n"))

    with patch("incus_mcp.services.cli.run_process", mock_run):
        with pytest.raises(NonZeroExitError) as exc_info:
            await cli.run(["info", "ghost"])

    assert exc_info.value.user_message == "Error: not found"
    assert exc_info.value.argv == ["incus", "info", "ghost"]


@pytest.mark.asyncio
async def test_cli_passes_stdin(cli: IncusCLI) -> None:
    mock_run = AsyncMock(return_value=ExecutionResult(0, "", ""))

    with patch("incus_mcp.services.cli.run_process", mock_run):
        await cli.run(["profile", "edit", "web"], stdin="config: {}\n")

    assert mock_run.await_args.args[0].stdin == "config: {}\n"

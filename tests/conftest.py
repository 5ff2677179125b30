"""Shared fixtures for Incus MCP tests."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import pytest

from incus_mcp.models import ExecutionResult


@dataclass
class RunnerCall:
    method: str
    args: list[str]
    timeout_ms: int | None
    stdin: str | None


class RecordingRunner:
    """CommandRunner fake that records calls and returns canned output."""

    def __init__(self) -> None:
        self.calls: list[RunnerCall] = []
        self.text = ""
        self.json_data: Any = []
        self.result = ExecutionResult(returncode=0, stdout="", stderr="")
        self.error: Exception | None = None

    def _record(
        self,
        method: str,
        args: Sequence[str],
        timeout_ms: int | None,
        stdin: str | None,
    ) -> None:
        self.calls.append(RunnerCall(method, list(args), timeout_ms, stdin))
        if self.error is not None:
            raise self.error

    @property
    def last(self) -> RunnerCall:
        return self.calls[-1]

    async def run(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> ExecutionResult:
        self._record("run", args, timeout_ms, stdin)
        return self.result

    async def run_text(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> str:
        self._record("run_text", args, timeout_ms, stdin)
        return self.text

    async def run_json(
        self,
        args: Sequence[str],
        timeout_ms: int | None = None,
        stdin: str | None = None,
    ) -> Any:
        self._record("run_json", args, timeout_ms, stdin)
        return self.json_data


@pytest.fixture
def runner() -> RecordingRunner:
    """Create a recording command runner."""
    return RecordingRunner()

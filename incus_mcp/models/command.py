"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """A single invocation of the external binary."""

    binary: str
    args: tuple[str, ...]
    timeout_ms: int
    stdin: str | None = None

    @property
    def argv(self) -> list[str]:
        """Full argument vector, binary first."""
        return [self.binary, *self.args]


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a local command execution."""

    returncode: int
    stdout: str
    stderr: str

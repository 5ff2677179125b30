"""Normalization of raw execution results."""

import json
from collections.abc import Sequence
from typing import Any

from incus_mcp.models import Command, ExecutionResult
from incus_mcp.services.errors import DecodeError, NonZeroExitError

PREVIEW_LIMIT = 1_000
JSON_FORMAT_ARGS = ("--format", "json")


def diagnostic_text(result: ExecutionResult) -> str:
    """Trimmed stderr, or trimmed stdout when stderr is empty."""
    return result.stderr.strip() or result.stdout.strip()


def check_exit(command: Command, result: ExecutionResult) -> ExecutionResult:
    """Pass successful results through, convert failures.

    Raises:
        NonZeroExitError: For any nonzero exit status.
    """
    if result.returncode != 0:
        raise NonZeroExitError(command.argv, result.returncode, diagnostic_text(result))
    return result


def decode_text(result: ExecutionResult) -> str:
    """Trimmed stdout, falling back to stderr.

    incus occasionally prints confirmations on stderr even on success.
    """
    return result.stdout.strip() or result.stderr.strip()


def decode_json(result: ExecutionResult) -> Any:
    """Parse stdout as JSON.

    Raises:
        DecodeError: With at most ``PREVIEW_LIMIT`` characters of the payload.
    """
    try:
        return json.loads(result.stdout)
    except ValueError:
        raise DecodeError(result.stdout.strip()[:PREVIEW_LIMIT]) from None


def combined_output(result: ExecutionResult) -> str:
    """Right-trimmed stdout and stderr joined, empty parts dropped."""
    parts = [result.stdout.rstrip(), result.stderr.rstrip()]
    return "\n".join(part for part in parts if part)


def with_json_format(args: Sequence[str]) -> list[str]:
    """Append the machine-readable output flag."""
    return [*args, *JSON_FORMAT_ARGS]

"""Shell formatting utilities."""

import shlex
from collections.abc import Sequence


def format_command(argv: Sequence[str]) -> str:
    """Render an argument vector as a copy-pasteable shell line.

    Args:
        argv: Argument vector, binary first

    Returns:
        Shell-quoted command line
    """
    return shlex.join(argv)

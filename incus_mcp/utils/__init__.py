"""Utilities for Incus MCP."""

from incus_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from incus_mcp.utils.logfile import prepare_log_file
from incus_mcp.utils.shell import format_command

__all__ = [
    "ColorfulFormatter",
    "MCPRequestFormatter",
    "format_command",
    "prepare_log_file",
]

"""Data models for Incus MCP."""

from incus_mcp.models.command import Command, ExecutionResult
from incus_mcp.models.response import TextContent, ToolResponse
from incus_mcp.models.tool import OutputMode, ToolDescriptor

__all__ = [
    "Command",
    "ExecutionResult",
    "OutputMode",
    "TextContent",
    "ToolDescriptor",
    "ToolResponse",
]

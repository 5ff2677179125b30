"""Incus MCP: the incus CLI exposed as MCP tools."""

__version__ = "0.1.0"

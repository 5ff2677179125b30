"""Configuration module for Incus MCP."""

from incus_mcp.config.settings import Settings

__all__ = ["Settings"]

"""MCP tools for Incus MCP."""

from incus_mcp.models import ToolDescriptor
from incus_mcp.protocols import CommandRunner
from incus_mcp.tools import (
    images,
    instances,
    networks,
    profiles,
    projects,
    remotes,
    snapshots,
    storage,
)
from incus_mcp.tools.builders import (
    CommandBuilder,
    ProjectScope,
    add_project_flag,
    project_args,
    remote_target,
)
from incus_mcp.tools.registry import ToolRegistry

_TOOL_MODULES = (
    remotes,
    instances,
    images,
    networks,
    storage,
    profiles,
    projects,
    snapshots,
)


def all_tools() -> list[ToolDescriptor]:
    """Every tool descriptor, in registration order."""
    return [tool for module in _TOOL_MODULES for tool in module.TOOLS]


def build_registry(runner: CommandRunner, scope: ProjectScope | None = None) -> ToolRegistry:
    """Create a registry populated with every incus tool."""
    registry = ToolRegistry(runner, scope)
    registry.register_all(all_tools())
    return registry


__all__ = [
    "CommandBuilder",
    "ProjectScope",
    "ToolRegistry",
    "add_project_flag",
    "all_tools",
    "build_registry",
    "project_args",
    "remote_target",
]

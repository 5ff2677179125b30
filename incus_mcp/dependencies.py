"""Dependency injection container for Incus MCP.

Settings are read once; the strict-projects flag is threaded into the
tool registry here instead of being read from global state.
"""

from dataclasses import dataclass

from incus_mcp.config import Settings
from incus_mcp.services import AvailabilityProber, IncusCLI
from incus_mcp.tools import ProjectScope, ToolRegistry, build_registry


@dataclass
class Dependencies:
    """Container for Incus MCP dependencies.

    Example:
        deps = Dependencies.create()
        response = await deps.registry.invoke("instance-list", {})
    """

    settings: Settings
    cli: IncusCLI
    registry: ToolRegistry

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from the process environment."""
        return cls.from_settings(Settings.from_env())

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dependencies":
        """Create dependencies with custom settings.

        Args:
            settings: Settings instance

        Returns:
            Dependencies with a CLI facade and a populated registry
        """
        cli = IncusCLI(
            binary=settings.incus_binary,
            prober=AvailabilityProber(settings.incus_binary),
        )
        registry = build_registry(cli, ProjectScope(strict=settings.strict_projects))
        return cls(settings=settings, cli=cli, registry=registry)

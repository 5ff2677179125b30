"""Argument vector construction for incus subcommands.

Holds the remote addressing rule and the project scope policy. Both are
pure functions; ``CommandBuilder`` only binds the strict flag once.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass


def remote_target(remote: str | None = None, name: str | None = None) -> str:
    """Combine an optional remote and resource name.

    Examples:
        remote_target("prod", "web1") -> "prod:web1"
        remote_target("prod") -> "prod:"
        remote_target(None, "web1") -> "web1"
        remote_target() -> ""
    """
    if remote and name:
        return f"{remote}:{name}"
    if remote:
        return f"{remote}:"
    if name:
        return name
    return ""


def project_args(
    project: str | None,
    *,
    strict: bool,
    all_projects: bool = False,
) -> list[str]:
    """Project scoping arguments for a command.

    An explicit project always wins. Without one, strict mode appends
    nothing and cross-project listings get ``--all-projects``.
    """
    if project:
        return ["--project", project]
    if strict:
        return []
    if all_projects:
        return ["--all-projects"]
    return []


def add_project_flag(
    args: Sequence[str],
    project: str | None,
    *,
    strict: bool,
    all_projects: bool = False,
) -> list[str]:
    """Return ``args`` followed by the project scoping arguments."""
    return [*args, *project_args(project, strict=strict, all_projects=all_projects)]


def key_value_args(values: Mapping[str, str] | None, flag: str | None = None) -> list[str]:
    """Render ``key=value`` pairs in insertion order.

    Args:
        values: Mapping to render (None renders nothing)
        flag: Optional flag repeated before each pair, e.g. "-c"
    """
    if not values:
        return []
    args: list[str] = []
    for key, value in values.items():
        if flag:
            args.append(flag)
        args.append(f"{key}={value}")
    return args


@dataclass(frozen=True)
class ProjectScope:
    """Process-wide project scoping policy, fixed at startup."""

    strict: bool = False


class CommandBuilder:
    """Builds argument vectors under a fixed project scope."""

    def __init__(self, scope: ProjectScope | None = None) -> None:
        self.scope = scope or ProjectScope()

    @property
    def strict(self) -> bool:
        return self.scope.strict

    def target(self, remote: str | None = None, name: str | None = None) -> str:
        return remote_target(remote, name)

    def listing(self, *subcommand: str, remote: str | None = None) -> list[str]:
        """Subcommand followed by ``remote:`` when a remote is given."""
        args = list(subcommand)
        if target := remote_target(remote):
            args.append(target)
        return args

    def project(
        self,
        args: Sequence[str],
        project: str | None,
        all_projects: bool = False,
    ) -> list[str]:
        return add_project_flag(
            args, project, strict=self.scope.strict, all_projects=all_projects
        )

    def key_values(
        self, values: Mapping[str, str] | None, flag: str | None = None
    ) -> list[str]:
        return key_value_args(values, flag)

"""Network tools."""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NamedInput, NonEmptyStr, ScopedInput


class NetworkCreateInput(NamedInput):
    type: NonEmptyStr | None = None
    config: dict[str, str] | None = None


def _list(p: ScopedInput, b: CommandBuilder) -> list[str]:
    return b.project(
        b.listing("network", "list", remote=p.remote), p.project, all_projects=True
    )


def _show(p: NamedInput, b: CommandBuilder) -> list[str]:
    return b.project(["network", "show", b.target(p.remote, p.name)], p.project)


def _create(p: NetworkCreateInput, b: CommandBuilder) -> list[str]:
    args = ["network", "create", b.target(p.remote, p.name)]
    if p.type:
        args += ["--type", p.type]
    args += b.key_values(p.config)
    return b.project(args, p.project)


def _delete(p: NamedInput, b: CommandBuilder) -> list[str]:
    return b.project(["network", "delete", b.target(p.remote, p.name)], p.project)


TOOLS = [
    ToolDescriptor(
        name="network-list",
        description="List networks",
        schema=ScopedInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="network-info",
        description="Show network details",
        schema=NamedInput,
        build=_show,
    ),
    ToolDescriptor(
        name="network-create",
        description="Create a network",
        schema=NetworkCreateInput,
        build=_create,
    ),
    ToolDescriptor(
        name="network-delete",
        description="Delete a network",
        schema=NamedInput,
        build=_delete,
    ),
]

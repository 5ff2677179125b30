"""Project tools.

Projects are never themselves project-scoped, so these tools take no
``project`` field and add no project flags.
"""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NonEmptyStr, RemoteInput


class ProjectInput(RemoteInput):
    name: NonEmptyStr


class ProjectCreateInput(ProjectInput):
    description: NonEmptyStr | None = None
    config: dict[str, str] | None = None


def _list(p: RemoteInput, b: CommandBuilder) -> list[str]:
    return b.listing("project", "list", remote=p.remote)


def _show(p: ProjectInput, b: CommandBuilder) -> list[str]:
    return ["project", "show", b.target(p.remote, p.name)]


def _create(p: ProjectCreateInput, b: CommandBuilder) -> list[str]:
    args = ["project", "create", b.target(p.remote, p.name)]
    if p.description:
        args += ["--description", p.description]
    return args + b.key_values(p.config, "-c")


def _delete(p: ProjectInput, b: CommandBuilder) -> list[str]:
    return ["project", "delete", b.target(p.remote, p.name)]


TOOLS = [
    ToolDescriptor(
        name="project-list",
        description="List projects",
        schema=RemoteInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="project-info",
        description="Show project details",
        schema=ProjectInput,
        build=_show,
    ),
    ToolDescriptor(
        name="project-create",
        description="Create a project",
        schema=ProjectCreateInput,
        build=_create,
    ),
    ToolDescriptor(
        name="project-delete",
        description="Delete a project",
        schema=ProjectInput,
        build=_delete,
    ),
]

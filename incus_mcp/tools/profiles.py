"""Profile tools."""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NamedInput, NonEmptyStr, ScopedInput


class ProfileCreateInput(NamedInput):
    description: NonEmptyStr | None = None


class ProfileEditInput(NamedInput):
    yaml: NonEmptyStr


def _list(p: ScopedInput, b: CommandBuilder) -> list[str]:
    return b.project(
        b.listing("profile", "list", remote=p.remote), p.project, all_projects=True
    )


def _verb(verb: str):
    def build(p: NamedInput, b: CommandBuilder) -> list[str]:
        return b.project(["profile", verb, b.target(p.remote, p.name)], p.project)

    return build


def _create(p: ProfileCreateInput, b: CommandBuilder) -> list[str]:
    args = ["profile", "create", b.target(p.remote, p.name)]
    if p.description:
        args += ["--description", p.description]
    return b.project(args, p.project)


TOOLS = [
    ToolDescriptor(
        name="profile_list",
        description=(
            "List profiles on a remote/project. Use this to discover profile names "
            "before launching instances or applying configuration changes."
        ),
        schema=ScopedInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="profile_info",
        description=(
            "Show full YAML for a profile (config and devices). Helpful for "
            "auditing shared defaults applied to instances."
        ),
        schema=NamedInput,
        build=_verb("show"),
    ),
    ToolDescriptor(
        name="profile_create",
        description=(
            "Create a new profile, optionally with a description. Use profiles to "
            "share common config/devices across many instances."
        ),
        schema=ProfileCreateInput,
        build=_create,
    ),
    ToolDescriptor(
        name="profile_edit",
        description=(
            "Replace a profile's configuration using YAML (equivalent to "
            "`incus profile edit`). Use when making multiple config/device "
            "changes at once."
        ),
        schema=ProfileEditInput,
        build=_verb("edit"),
        mode=OutputMode.MESSAGE,
        stdin=lambda p: p.yaml,
        message="Profile updated.",
    ),
    ToolDescriptor(
        name="profile_delete",
        description=(
            "Delete a profile by name. This fails if the profile is in use by "
            "instances."
        ),
        schema=NamedInput,
        build=_verb("delete"),
    ),
]

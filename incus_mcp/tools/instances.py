"""Instance tools: list, inspect, lifecycle and guest exec."""

from typing import Annotated

from pydantic import Field

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.services.executors import EXEC_TIMEOUT_MS, LAUNCH_TIMEOUT_MS
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NamedInput, NonEmptyStr, ScopedInput


class InstanceLaunchInput(NamedInput):
    image: NonEmptyStr
    vm: bool | None = None
    profile: NonEmptyStr | None = None
    network: NonEmptyStr | None = None
    storage: NonEmptyStr | None = None
    config: dict[str, str] | None = None


class InstanceForceInput(NamedInput):
    force: bool | None = None


class InstanceExecInput(NamedInput):
    command: Annotated[list[NonEmptyStr], Field(min_length=1)]
    cwd: NonEmptyStr | None = None
    env: dict[str, str] | None = None


class InstanceRebuildInput(InstanceForceInput):
    image: NonEmptyStr


def _list(p: ScopedInput, b: CommandBuilder) -> list[str]:
    return b.project(b.listing("list", remote=p.remote), p.project, all_projects=True)


def _info(p: NamedInput, b: CommandBuilder) -> list[str]:
    return b.project(["list", b.target(p.remote, p.name)], p.project, all_projects=True)


def _launch(p: InstanceLaunchInput, b: CommandBuilder) -> list[str]:
    args = ["launch", p.image, b.target(p.remote, p.name)]
    if p.vm:
        args.append("--vm")
    if p.profile:
        args += ["-p", p.profile]
    if p.network:
        args += ["-n", p.network]
    if p.storage:
        args += ["-s", p.storage]
    args += b.key_values(p.config, "-c")
    return b.project(args, p.project)


def _start(p: NamedInput, b: CommandBuilder) -> list[str]:
    return b.project(["start", b.target(p.remote, p.name)], p.project)


def _forced(verb: str):
    def build(p: InstanceForceInput, b: CommandBuilder) -> list[str]:
        args = [verb, b.target(p.remote, p.name)]
        if p.force:
            args.append("--force")
        return b.project(args, p.project)

    return build


def _exec(p: InstanceExecInput, b: CommandBuilder) -> list[str]:
    args = ["exec", b.target(p.remote, p.name), "-T"]
    if p.cwd:
        args += ["--cwd", p.cwd]
    args += b.key_values(p.env, "--env")
    return [*b.project(args, p.project), "--", *p.command]


def _rebuild(p: InstanceRebuildInput, b: CommandBuilder) -> list[str]:
    args = ["rebuild", p.image, b.target(p.remote, p.name)]
    if p.force:
        args.append("--force")
    return b.project(args, p.project)


TOOLS = [
    ToolDescriptor(
        name="instance-list",
        description="List instances",
        schema=ScopedInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="instance-info",
        description="Get instance info",
        schema=NamedInput,
        build=_info,
        mode=OutputMode.JSON_FIRST,
    ),
    ToolDescriptor(
        name="instance-launch",
        description="Launch a new instance",
        schema=InstanceLaunchInput,
        build=_launch,
        timeout_ms=LAUNCH_TIMEOUT_MS,
    ),
    ToolDescriptor(
        name="instance-start",
        description="Start an instance",
        schema=NamedInput,
        build=_start,
    ),
    ToolDescriptor(
        name="instance-stop",
        description="Stop an instance",
        schema=InstanceForceInput,
        build=_forced("stop"),
    ),
    ToolDescriptor(
        name="instance-delete",
        description="Delete an instance",
        schema=InstanceForceInput,
        build=_forced("delete"),
    ),
    ToolDescriptor(
        name="instance-exec",
        description="Execute a command in an instance",
        schema=InstanceExecInput,
        build=_exec,
        mode=OutputMode.COMBINED,
        timeout_ms=EXEC_TIMEOUT_MS,
    ),
    ToolDescriptor(
        name="instance-rebuild",
        description="Rebuild an instance from an image",
        schema=InstanceRebuildInput,
        build=_rebuild,
        timeout_ms=LAUNCH_TIMEOUT_MS,
    ),
]

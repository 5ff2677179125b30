"""Instance snapshot tools."""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NonEmptyStr, ScopedInput


class SnapshotListInput(ScopedInput):
    instance: NonEmptyStr


class SnapshotCreateInput(SnapshotListInput):
    name: NonEmptyStr | None = None
    stateful: bool | None = None


class SnapshotInput(SnapshotListInput):
    name: NonEmptyStr


class SnapshotRestoreInput(SnapshotInput):
    stateful: bool | None = None


def _list(p: SnapshotListInput, b: CommandBuilder) -> list[str]:
    return b.project(["snapshot", "list", b.target(p.remote, p.instance)], p.project)


def _create(p: SnapshotCreateInput, b: CommandBuilder) -> list[str]:
    args = ["snapshot", "create", b.target(p.remote, p.instance)]
    if p.name:
        args.append(p.name)
    if p.stateful:
        args.append("--stateful")
    return b.project(args, p.project)


def _restore(p: SnapshotRestoreInput, b: CommandBuilder) -> list[str]:
    args = ["snapshot", "restore", b.target(p.remote, p.instance), p.name]
    if p.stateful:
        args.append("--stateful")
    return b.project(args, p.project)


def _delete(p: SnapshotInput, b: CommandBuilder) -> list[str]:
    args = ["snapshot", "delete", b.target(p.remote, p.instance), p.name]
    return b.project(args, p.project)


TOOLS = [
    ToolDescriptor(
        name="snapshot-list",
        description="List instance snapshots",
        schema=SnapshotListInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="snapshot-create",
        description="Create an instance snapshot",
        schema=SnapshotCreateInput,
        build=_create,
    ),
    ToolDescriptor(
        name="snapshot-restore",
        description="Restore an instance snapshot",
        schema=SnapshotRestoreInput,
        build=_restore,
    ),
    ToolDescriptor(
        name="snapshot-delete",
        description="Delete an instance snapshot",
        schema=SnapshotInput,
        build=_delete,
    ),
]

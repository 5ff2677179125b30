"""Storage pool and volume tools."""

from pydantic import Field

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NamedInput, NonEmptyStr, ScopedInput


class PoolInput(ScopedInput):
    pool: NonEmptyStr


class VolumeInput(PoolInput):
    volume: NonEmptyStr


class VolumeCreateInput(PoolInput):
    name: NonEmptyStr
    content_type: NonEmptyStr | None = Field(default=None, alias="contentType")
    config: dict[str, str] | None = None


def _pool_list(p: ScopedInput, b: CommandBuilder) -> list[str]:
    return b.project(
        b.listing("storage", "list", remote=p.remote), p.project, all_projects=True
    )


def _pool_show(p: NamedInput, b: CommandBuilder) -> list[str]:
    args = ["storage", "show", b.target(p.remote, p.name)]
    return b.project(args, p.project, all_projects=True)


def _volume_list(p: PoolInput, b: CommandBuilder) -> list[str]:
    args = ["storage", "volume", "list", b.target(p.remote, p.pool)]
    return b.project(args, p.project)


def _volume_verb(verb: str):
    def build(p: VolumeInput, b: CommandBuilder) -> list[str]:
        args = ["storage", "volume", verb, b.target(p.remote, p.pool), p.volume]
        return b.project(args, p.project)

    return build


def _volume_create(p: VolumeCreateInput, b: CommandBuilder) -> list[str]:
    args = ["storage", "volume", "create", b.target(p.remote, p.pool), p.name]
    if p.content_type:
        args += ["--content-type", p.content_type]
    args += b.key_values(p.config)
    return b.project(args, p.project)


TOOLS = [
    ToolDescriptor(
        name="storage_pool_list",
        description=(
            "List storage pools on a remote. Use this to discover pool names and "
            "drivers (e.g., dir, zfs, btrfs, lvm) before creating volumes or "
            "launching instances."
        ),
        schema=ScopedInput,
        build=_pool_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="storage_pool_info",
        description=(
            "Show full YAML for a storage pool (driver, config, and status). "
            "Helpful for troubleshooting capacity, backend settings, and pool "
            "features."
        ),
        schema=NamedInput,
        build=_pool_show,
    ),
    ToolDescriptor(
        name="storage_volume_list",
        description=(
            "List storage volumes in a pool. Use to discover volume names and "
            "types before attaching, copying, or deleting volumes."
        ),
        schema=PoolInput,
        build=_volume_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="storage_volume_info",
        description=(
            "Show full YAML for a storage volume (config, description, used-by). "
            "Useful when debugging mounts, quotas, and how a volume is referenced."
        ),
        schema=VolumeInput,
        build=_volume_verb("show"),
    ),
    ToolDescriptor(
        name="storage_volume_create",
        description=(
            "Create a new custom storage volume in a pool, with optional "
            "`contentType` and config key/values (e.g., size/quota depending on "
            "driver)."
        ),
        schema=VolumeCreateInput,
        build=_volume_create,
    ),
    ToolDescriptor(
        name="storage_volume_delete",
        description=(
            "Delete a storage volume from a pool. This fails if the volume is in "
            "use (e.g., attached to an instance or referenced by a profile)."
        ),
        schema=VolumeInput,
        build=_volume_verb("delete"),
    ),
]

"""Image tools."""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.builders import CommandBuilder
from incus_mcp.tools.schemas import NonEmptyStr, ScopedInput


class ImageInput(ScopedInput):
    fingerprint: NonEmptyStr


def _list(p: ScopedInput, b: CommandBuilder) -> list[str]:
    return b.project(
        b.listing("image", "list", remote=p.remote), p.project, all_projects=True
    )


def _info(p: ImageInput, b: CommandBuilder) -> list[str]:
    args = ["image", "list", b.target(p.remote, p.fingerprint)]
    return b.project(args, p.project, all_projects=True)


def _delete(p: ImageInput, b: CommandBuilder) -> list[str]:
    return b.project(["image", "delete", b.target(p.remote, p.fingerprint)], p.project)


TOOLS = [
    ToolDescriptor(
        name="image_list",
        description=(
            "List images available on a remote (by fingerprint, aliases, size, "
            "and other metadata). Use this to find an image fingerprint or "
            "confirm an image exists before launching."
        ),
        schema=ScopedInput,
        build=_list,
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="image_info",
        description=(
            "Get details for a specific image fingerprint (metadata, properties, "
            "aliases). Useful when debugging image selection or pinning an exact "
            "fingerprint."
        ),
        schema=ImageInput,
        build=_info,
        mode=OutputMode.JSON_FIRST,
    ),
    ToolDescriptor(
        name="image_delete",
        description=(
            "Delete an image by fingerprint from a remote. Use to clean up unused "
            "images; this does not delete instances that were created from the image."
        ),
        schema=ImageInput,
        build=_delete,
    ),
]

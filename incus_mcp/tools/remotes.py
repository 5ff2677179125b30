"""Remote tools."""

from incus_mcp.models import OutputMode, ToolDescriptor
from incus_mcp.tools.schemas import StrictInput


class NoInput(StrictInput):
    pass


TOOLS = [
    ToolDescriptor(
        name="remote-list",
        description="List configured Incus remotes",
        schema=NoInput,
        build=lambda p, b: ["remote", "list"],
        mode=OutputMode.JSON,
    ),
    ToolDescriptor(
        name="remote-get-default",
        description="Get the default Incus remote",
        schema=NoInput,
        build=lambda p, b: ["remote", "get-default"],
    ),
]

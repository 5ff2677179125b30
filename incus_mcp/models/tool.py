"""Tool descriptor data models."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from incus_mcp.tools.builders import CommandBuilder


class OutputMode(str, Enum):
    """How a tool turns a finished command into response text."""

    TEXT = "text"
    JSON = "json"
    JSON_FIRST = "json_first"
    COMBINED = "combined"
    MESSAGE = "message"

    @property
    def structured(self) -> bool:
        return self in (OutputMode.JSON, OutputMode.JSON_FIRST)


ArgBuilder = Callable[[Any, "CommandBuilder"], list[str]]
StdinBuilder = Callable[[Any], str]


@dataclass(frozen=True)
class ToolDescriptor:
    """Binds a stable tool name to its schema and argument builder.

    Attributes:
        name: Unique tool name exposed to MCP clients.
        description: Human readable description.
        schema: Strict pydantic model validating the raw input.
        build: Turns validated params into incus arguments.
        mode: How output is decoded.
        timeout_ms: Deadline tier applied to the command.
        stdin: Optional payload builder for edit-style tools.
        message: Fixed confirmation text for ``OutputMode.MESSAGE``.
    """

    name: str
    description: str
    schema: type[BaseModel]
    build: ArgBuilder
    mode: OutputMode = OutputMode.TEXT
    timeout_ms: int | None = None
    stdin: StdinBuilder | None = None
    message: str | None = None

    def input_schema(self) -> dict[str, Any]:
        """JSON schema advertised as the tool's ``inputSchema``."""
        schema = self.schema.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema

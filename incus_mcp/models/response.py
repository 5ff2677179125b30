"""Uniform response envelope returned by the tool dispatcher."""

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class TextContent:
    """A single text content block."""

    text: str
    type: Literal["text"] = "text"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResponse:
    """Envelope shared by successful and failed tool calls.

    Successful and failed calls carry the same shape, a sequence of
    content blocks, with ``is_error`` set on failures.
    """

    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResponse":
        """Build a successful single-block response."""
        return cls(content=[TextContent(text)])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        """Build a failed single-block response."""
        return cls(content=[TextContent(message)], is_error=True)

    @property
    def joined_text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the MCP ``CallToolResult`` wire shape."""
        data: dict[str, Any] = {"content": [block.to_dict() for block in self.content]}
        if self.is_error:
            data["isError"] = True
        return data

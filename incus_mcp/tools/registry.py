"""Tool registry and dispatcher.

Binds tool names to descriptors and runs every call through one generic
pipeline: validate, build arguments, execute, decode, wrap. This is the
only place pipeline errors are caught; ``invoke`` never raises.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import BaseModel, ValidationError

from incus_mcp.models import OutputMode, ToolDescriptor, ToolResponse
from incus_mcp.protocols import CommandRunner
from incus_mcp.services.decode import combined_output
from incus_mcp.services.errors import (
    ErrorKind,
    IncusToolError,
    InputValidationError,
)
from incus_mcp.tools.builders import CommandBuilder, ProjectScope

logger = logging.getLogger(__name__)


def _format_problems(error: ValidationError) -> list[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        problems.append(f"{location}: {item['msg']}")
    return problems


def _to_json_text(data: Any) -> str:
    return json.dumps(data, indent=2)


class ToolRegistry:
    """Registry of incus tools with a uniform dispatch boundary."""

    def __init__(
        self,
        runner: CommandRunner,
        scope: ProjectScope | None = None,
    ) -> None:
        self.runner = runner
        self.builder = CommandBuilder(scope)
        self._tools: dict[str, ToolDescriptor] = {}

    def register(self, descriptor: ToolDescriptor) -> None:
        """Register a tool descriptor.

        Raises:
            ValueError: If a tool with the same name already exists.
        """
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: {descriptor.name}")
        self._tools[descriptor.name] = descriptor
        logger.debug("Registered tool: %s", descriptor.name)

    def register_all(self, descriptors: Iterable[ToolDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def validate(self, descriptor: ToolDescriptor, raw_input: Any) -> BaseModel:
        """Validate raw input against the tool's strict schema.

        Raises:
            InputValidationError: On any schema mismatch.
        """
        if raw_input is None:
            raw_input = {}
        try:
            return descriptor.schema.model_validate(raw_input)
        except ValidationError as e:
            raise InputValidationError(descriptor.name, _format_problems(e)) from e

    def build_args(self, descriptor: ToolDescriptor, params: BaseModel) -> list[str]:
        """Argument vector for validated params (binary not included)."""
        return descriptor.build(params, self.builder)

    async def _execute(self, descriptor: ToolDescriptor, params: BaseModel) -> str:
        args = self.build_args(descriptor, params)
        stdin = descriptor.stdin(params) if descriptor.stdin else None
        timeout_ms = descriptor.timeout_ms
        mode = descriptor.mode

        if mode is OutputMode.JSON:
            data = await self.runner.run_json(args, timeout_ms, stdin)
            return _to_json_text(data)
        if mode is OutputMode.JSON_FIRST:
            data = await self.runner.run_json(args, timeout_ms, stdin)
            first = data[0] if isinstance(data, list) and data else None
            return _to_json_text(first)
        if mode is OutputMode.COMBINED:
            result = await self.runner.run(args, timeout_ms, stdin)
            return combined_output(result)
        if mode is OutputMode.MESSAGE:
            await self.runner.run(args, timeout_ms, stdin)
            return descriptor.message or "Done."
        return await self.runner.run_text(args, timeout_ms, stdin)

    async def invoke(self, name: str, raw_input: Any = None) -> ToolResponse:
        """Run a tool by name and wrap the outcome in a response envelope.

        Args:
            name: Registered tool name
            raw_input: Unvalidated tool arguments

        Returns:
            ToolResponse; ``is_error`` is set for every failure.
        """
        descriptor = self._tools.get(name)
        if descriptor is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResponse.error(f"Unknown tool: {name}")

        try:
            params = self.validate(descriptor, raw_input)
            text = await self._execute(descriptor, params)
        except IncusToolError as e:
            if e.kind is ErrorKind.VALIDATION:
                logger.info("Rejected %s input: %s", name, e)
            else:
                logger.warning("Tool %s failed (%s): %s", name, e.kind.value, e)
            return ToolResponse.error(e.user_message)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return ToolResponse.error(f"Unexpected error: {type(e).__name__}: {e}")

        return ToolResponse.text(text)

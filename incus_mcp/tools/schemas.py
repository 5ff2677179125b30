"""Shared pydantic building blocks for tool input schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class StrictInput(BaseModel):
    """Base for tool inputs: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", populate_by_name=False, frozen=True)


class RemoteInput(StrictInput):
    remote: NonEmptyStr | None = None


class ScopedInput(RemoteInput):
    """Input addressing a remote and optionally a project."""

    project: NonEmptyStr | None = None


class NamedInput(ScopedInput):
    name: NonEmptyStr

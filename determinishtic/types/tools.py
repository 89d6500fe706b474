"""Tool types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ToolSchema(Protocol):
    def parse(self, raw: Any) -> Any: ...
    def to_json_schema(self) -> dict: ...


@runtime_checkable
class OutputSchema(Protocol):
    def dump(self, value: Any) -> str: ...
    def to_json_schema(self) -> dict: ...


@dataclass
class ToolDefinition:
    name: str
    description: str
    parameters: ToolSchema
    returns: OutputSchema
    execute: Any  # (input) -> Any | Awaitable[Any]
    mentioned: bool = False

    def spec(self) -> ToolSpec:
        return ToolSpec(
            name=self.name,
            description=self.description,
            input_schema=self.parameters.to_json_schema(),
            output_schema=self.returns.to_json_schema(),
        )


@dataclass(frozen=True)
class ToolSpec:
    """What the engine is told about a tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)
    output_schema: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolInvocation:
    id: str
    name: str
    arguments: str | dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResponse:
    id: str
    name: str
    output: str | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def content(self) -> str:
        return self.error if self.error is not None else (self.output or "")

"""Remote engine interface.

An engine receives the rendered prompt and tool declarations, then emits
tool invocations one at a time. Each invocation must be answered with a
ToolResponse before the next one is requested. ``next_request`` returns
None when the engine ends the exchange.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..types import ToolInvocation, ToolResponse, ToolSpec


@runtime_checkable
class EngineSession(Protocol):
    async def next_request(self) -> ToolInvocation | None: ...
    async def respond(self, response: ToolResponse) -> None: ...
    async def close(self) -> None: ...


@runtime_checkable
class Engine(Protocol):
    async def open(self, prompt: str, tools: list[ToolSpec]) -> EngineSession: ...

"""ThinkBuilder — compose a prompt, expose tools, await a typed result.

Example::

    name = "Alice"
    greeting: str = await (
        d.think(str)
        .text("Say hello to")
        .display(name)
        .text("in a friendly way.")
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from typing import Any, Generic, TypeVar

from pydantic.errors import PydanticUserError

from .engine import Engine
from .errors import ConfigurationError
from .prompt import RenderedPrompt, render, tool_marker
from .session import Session
from .tools import ResultTool, ToolRegistry, define_tool
from .types import Literal, Rendered, RepresentationKind, Segment, SpacingMode

logger = logging.getLogger(__name__)

Output = TypeVar("Output")


class ThinkBuilder(Generic[Output]):
    """Accumulates segments and tools for one session. Awaiting it runs the session once."""

    def __init__(self, engine: Engine, output_type: type[Output] | Any = str) -> None:
        self._engine = engine
        self._output_type = output_type
        self._segments: list[Segment] = []
        self._registry = ToolRegistry()
        self._spacing = SpacingMode.AUTO
        self._consumed = False
        try:
            self._result_tool = ResultTool.for_type(output_type)
            self._result_tool.spec()
        except PydanticUserError as e:
            raise ConfigurationError(f"unsupported result type {output_type!r}: {e}", e) from e

    # -- Segments --

    def text(self, text: str) -> ThinkBuilder[Output]:
        self._segments.append(Literal(text, spacing=self._spacing))
        return self

    def textln(self, text: str) -> ThinkBuilder[Output]:
        return self.text(text + "\n")

    def display(self, value: Any) -> ThinkBuilder[Output]:
        """Append ``str(value)``."""
        return self._rendered(value, RepresentationKind.PRIMARY)

    def debug(self, value: Any) -> ThinkBuilder[Output]:
        """Append ``repr(value)``."""
        return self._rendered(value, RepresentationKind.DIAGNOSTIC)

    def explicit_spacing(self) -> ThinkBuilder[Output]:
        self._spacing = SpacingMode.EXPLICIT
        return self

    def auto_spacing(self) -> ThinkBuilder[Output]:
        self._spacing = SpacingMode.AUTO
        return self

    def _rendered(self, value: Any, kind: RepresentationKind) -> ThinkBuilder[Output]:
        self._segments.append(Rendered.capture(value, kind, spacing=self._spacing))
        return self

    # -- Tools --

    def tool(
        self,
        name: str,
        description: str,
        callback: Callable[..., Any],
        *,
        parameters: Any = None,
        returns: Any = None,
    ) -> ThinkBuilder[Output]:
        """Register a tool and mention it in the prompt at this position."""
        self._register(name, description, callback, parameters, returns, mentioned=True)
        self._segments.append(Literal(tool_marker(name), spacing=self._spacing))
        return self

    def define_tool(
        self,
        name: str,
        description: str,
        callback: Callable[..., Any],
        *,
        parameters: Any = None,
        returns: Any = None,
    ) -> ThinkBuilder[Output]:
        """Register a tool without mentioning it in the prompt."""
        self._register(name, description, callback, parameters, returns, mentioned=False)
        return self

    def _register(
        self,
        name: str,
        description: str,
        callback: Callable[..., Any],
        parameters: Any,
        returns: Any,
        mentioned: bool,
    ) -> None:
        try:
            definition = define_tool(
                name, description, callback,
                parameters=parameters, returns=returns, mentioned=mentioned,
            )
            definition.spec()
        except PydanticUserError as e:
            raise ConfigurationError(f"unsupported schema for tool '{name}': {e}", e) from e
        self._registry.register(definition)

    # -- Inspection --

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def tools(self) -> ToolRegistry:
        return self._registry

    @property
    def output_type(self) -> Any:
        return self._output_type

    def render(self) -> RenderedPrompt:
        return render(self._segments, self._registry, self._result_tool)

    # -- Execution --

    async def run(self) -> Output:
        if self._consumed:
            raise ConfigurationError("this think builder has already been awaited")
        rendered = self.render()
        self._consumed = True
        logger.debug(
            "starting session: %d chars, %d tool(s)", len(rendered.prompt), len(rendered.tools)
        )
        session = Session(self._engine, rendered, self._registry, self._result_tool)
        return await session.run()

    def __await__(self) -> Generator[Any, None, Output]:
        return self.run().__await__()

"""Tool registry and define_tool helper."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, get_type_hints

from pydantic import ValidationError

from ..errors import ConfigurationError, DecodeError, DeterminishticError, ToolFailure
from ..types import ToolDefinition, ToolInvocation, ToolResponse, ToolSpec
from .result import RESULT_TOOL_NAME
from .schema import input_schema, output_schema

logger = logging.getLogger(__name__)


_EMPTY_OBJECT = {"type": "object", "properties": {}}


def _infer_types(fn: Callable[..., Any]) -> tuple[Any, Any, bool]:
    """Return (input type, output type, takes_input) from the callback's signature."""
    try:
        hints = get_type_hints(fn)
    except Exception:
        hints = {}
    try:
        sig_params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return Any, hints.get("return", Any), True
    params = [
        p for p in sig_params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    if not params:
        return dict(_EMPTY_OBJECT), hints.get("return", Any), False
    return hints.get(params[0].name, Any), hints.get("return", Any), True


def define_tool(
    name: str,
    description: str,
    execute: Callable[..., Any],
    parameters: Any = None,
    returns: Any = None,
    mentioned: bool = False,
) -> ToolDefinition:
    """Build a ToolDefinition, inferring missing types from the callback's annotations.

    Callbacks take the decoded input as their only argument, or no argument
    at all for tools without input.
    """
    inferred_in, inferred_out, takes_input = _infer_types(execute)
    if not takes_input:
        fn = execute
        execute = lambda _input: fn()  # noqa: E731
    return ToolDefinition(
        name=name,
        description=description,
        parameters=input_schema(parameters if parameters is not None else inferred_in),
        returns=output_schema(returns if returns is not None else inferred_out),
        execute=execute,
        mentioned=mentioned,
    )


class ToolRegistry:
    """Ordered tool table for one builder. Names are unique; ``return_result`` is reserved."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        if tool.name == RESULT_TOOL_NAME:
            raise ConfigurationError(f"tool name '{RESULT_TOOL_NAME}' is reserved")
        if tool.name in self._tools:
            raise ConfigurationError(f"tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool
        logger.debug("registered tool %s (mentioned=%s)", tool.name, tool.mentioned)

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def list(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def specs(self) -> list[ToolSpec]:
        return [t.spec() for t in self._tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def execute(self, call: ToolInvocation) -> ToolResponse:
        """Run one invocation and answer it.

        Bad input, unknown names, recoverable callback failures and failed
        nested sessions are answered with an error response. A non-recoverable
        ToolFailure is raised to the caller.
        """
        tool = self._tools.get(call.name)
        if not tool:
            logger.warning("engine called unknown tool %s", call.name)
            return ToolResponse(id=call.id, name=call.name, error=f"unknown tool '{call.name}'")

        try:
            parsed = tool.parameters.parse(call.arguments)
        except (ValidationError, ValueError) as e:
            err = DecodeError(call.name, f"invalid input for tool '{call.name}': {e}", e)
            logger.warning("%s", err)
            return ToolResponse(id=call.id, name=call.name, error=str(err))

        try:
            result = tool.execute(parsed)
            if inspect.isawaitable(result):
                result = await result
        except ToolFailure as e:
            if not e.recoverable:
                e.tool_name = e.tool_name or call.name
                raise
            logger.warning("tool %s failed: %s", call.name, e)
            return ToolResponse(id=call.id, name=call.name, error=str(e))
        except DeterminishticError as e:
            # Usually a nested session awaited by the callback.
            logger.warning("tool %s failed: %s", call.name, e)
            return ToolResponse(id=call.id, name=call.name, error=str(e))
        except Exception as e:
            logger.exception("Tool execution error: %s", call.name)
            return ToolResponse(id=call.id, name=call.name, error=f"{type(e).__name__}: {e}")

        try:
            output = tool.returns.dump(result)
        except Exception as e:
            logger.warning("tool %s returned an invalid value: %s", call.name, e)
            return ToolResponse(
                id=call.id, name=call.name, error=f"tool '{call.name}' returned invalid output: {e}"
            )
        return ToolResponse(id=call.id, name=call.name, output=output)

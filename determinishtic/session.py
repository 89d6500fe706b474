"""Session driver — one request/response exchange with the engine.

INIT -> AWAITING -> COMPLETED | FAILED. Tool calls are dispatched one at a
time in arrival order. Recoverable problems (bad tool input, unknown tool,
recoverable callback failure) are answered to the engine and the session
keeps waiting. Everything else ends the session and is raised to the caller.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from .engine import Engine, EngineSession
from .errors import (
    DeterminishticError,
    IncompleteError,
    SessionAbortedError,
    ToolFailure,
    TransportError,
)
from .prompt import RenderedPrompt
from .tools import RESULT_TOOL_NAME, ResultTool, ToolRegistry

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    INIT = "init"
    AWAITING = "awaiting"
    COMPLETED = "completed"
    FAILED = "failed"


class Session:
    def __init__(
        self,
        engine: Engine,
        rendered: RenderedPrompt,
        registry: ToolRegistry,
        result_tool: ResultTool,
    ) -> None:
        self.engine = engine
        self.rendered = rendered
        self.registry = registry
        self.result_tool = result_tool
        self.state = SessionState.INIT
        self.error: DeterminishticError | None = None
        self.tool_calls = 0

    async def run(self) -> Any:
        if self.state is not SessionState.INIT:
            raise RuntimeError(f"session already {self.state.value}")
        handle: EngineSession | None = None
        try:
            try:
                handle = await self.engine.open(self.rendered.prompt, self.rendered.tools)
            except DeterminishticError:
                raise
            except Exception as e:
                raise TransportError(f"engine failure: {e}", e) from e
            self._transition(SessionState.AWAITING)
            value = await self._await_result(handle)
        except DeterminishticError as e:
            self.error = e
            self._transition(SessionState.FAILED)
            raise
        except BaseException:
            self._transition(SessionState.FAILED)
            raise
        finally:
            # Also runs on cancellation: the engine session is released either way.
            if handle is not None:
                await self._close(handle)
        self._transition(SessionState.COMPLETED)
        logger.info("session completed after %d tool call(s)", self.tool_calls)
        return value

    async def _await_result(self, handle: EngineSession) -> Any:
        while True:
            try:
                call = await handle.next_request()
            except DeterminishticError:
                raise
            except Exception as e:
                raise TransportError(f"engine failure: {e}", e) from e
            if call is None:
                raise IncompleteError()

            if call.name == RESULT_TOOL_NAME:
                logger.debug("engine returned result (call %s)", call.id)
                return self.result_tool.decode(call.arguments)

            self.tool_calls += 1
            logger.debug("dispatching tool %s (call %s)", call.name, call.id)
            try:
                response = await self.registry.execute(call)
            except ToolFailure as e:
                logger.warning("tool %s failed unrecoverably: %s", call.name, e)
                raise SessionAbortedError(e) from e
            try:
                await handle.respond(response)
            except DeterminishticError:
                raise
            except Exception as e:
                raise TransportError(f"engine failure: {e}", e) from e

    async def _close(self, handle: EngineSession) -> None:
        try:
            await handle.close()
        except Exception:
            logger.warning("failed to close engine session", exc_info=True)

    def _transition(self, state: SessionState) -> None:
        logger.debug("session %s -> %s", self.state.value, state.value)
        self.state = state

"""Engine adapter that drives an LLM provider through tool calls."""

from __future__ import annotations

import logging
from collections import deque

from ..config import EngineConfig
from ..errors import ConnectionClosedError, TransportError
from ..types import (
    AssistantMessage,
    CompletionParams,
    LLMProvider,
    Message,
    SystemMessage,
    ToolCall,
    ToolInvocation,
    ToolMessage,
    ToolResponse,
    ToolSpec,
    UserMessage,
)

logger = logging.getLogger(__name__)


class ProviderEngine:
    """Opens one conversation with the provider per session.

    The provider client may be shared between engines and between
    concurrent sessions; no extra locking is added here.
    """

    def __init__(self, provider: LLMProvider, config: EngineConfig | None = None) -> None:
        self.provider = provider
        self.config = config or EngineConfig()

    async def open(self, prompt: str, tools: list[ToolSpec]) -> ProviderSession:
        return ProviderSession(self.provider, self.config, prompt, tools)


class ProviderSession:
    """Hands out a completion's tool calls one at a time.

    The provider is asked again only after every queued call of the previous
    completion has been answered. A completion without tool calls, or running
    out of turns, ends the exchange.
    """

    def __init__(
        self, provider: LLMProvider, config: EngineConfig, prompt: str, tools: list[ToolSpec]
    ) -> None:
        self._provider = provider
        self._config = config
        self._tools = tools
        self._messages: list[Message] = [
            SystemMessage(content=config.system_prompt),
            UserMessage(content=prompt),
        ]
        self._queue: deque[ToolCall] = deque()
        self._outstanding: str | None = None
        self._turns = 0
        self._closed = False

    @property
    def messages(self) -> list[Message]:
        return self._messages

    @property
    def turns(self) -> int:
        return self._turns

    async def next_request(self) -> ToolInvocation | None:
        if self._closed:
            raise ConnectionClosedError()
        if self._outstanding is not None:
            raise TransportError(f"tool call {self._outstanding} has not been answered")

        if not self._queue:
            if self._turns >= self._config.max_turns:
                logger.warning("engine reached max turns (%d)", self._config.max_turns)
                return None
            self._turns += 1
            result = await self._provider.complete(
                CompletionParams(
                    messages=self._messages,
                    tools=self._tools,
                    max_tokens=self._config.max_tokens,
                    temperature=self._config.temperature,
                )
            )
            self._messages.append(
                AssistantMessage(content=result.content, tool_calls=list(result.tool_calls))
            )
            if not result.tool_calls:
                logger.debug("engine ended turn %d without tool calls", self._turns)
                return None
            self._queue.extend(result.tool_calls)

        tc = self._queue.popleft()
        self._outstanding = tc.id
        return ToolInvocation(id=tc.id, name=tc.name, arguments=tc.arguments)

    async def respond(self, response: ToolResponse) -> None:
        if self._closed:
            raise ConnectionClosedError()
        if response.id != self._outstanding:
            raise TransportError(f"response to unexpected tool call {response.id}")
        self._messages.append(
            ToolMessage(content=response.content, tool_call_id=response.id, is_error=response.is_error)
        )
        self._outstanding = None

    async def close(self) -> None:
        self._closed = True
        self._queue.clear()

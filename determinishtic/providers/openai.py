"""OpenAI-compatible LLM provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

import openai

from ..errors import LLMError
from ..types import (
    CompletionParams,
    CompletionResult,
    Message,
    TokenUsage,
    ToolCall,
    ToolSpec,
)
from .base import BaseLLMProvider, error_code, transient_status

if TYPE_CHECKING:
    from ..config import EngineConfig


def _msg_to_dict(m: Message) -> dict:
    d: dict = {"role": m.role, "content": m.content}
    if getattr(m, "tool_calls", None):
        d["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.name, "arguments": tc.arguments},
            }
            for tc in m.tool_calls
        ]
    if hasattr(m, "tool_call_id"):
        d["tool_call_id"] = m.tool_call_id
    return d


def _tools_to_dicts(tools: list[ToolSpec]) -> list[dict]:
    return [
        {
            "type": "function",
            "function": {
                "name": t.name,
                "description": t.description,
                "parameters": t.input_schema,
            },
        }
        for t in tools
    ]


class OpenAIProvider(BaseLLMProvider):
    name = "openai"

    def __init__(self, config: EngineConfig, client=None, **kwargs) -> None:
        super().__init__(retry=config.retry, circuit_breaker=config.circuit_breaker, **kwargs)
        if client is None:
            # Retries happen in BaseLLMProvider, not in the SDK.
            client = openai.AsyncOpenAI(
                api_key=config.api_key, base_url=config.base_url, max_retries=0
            )
        self._client = client
        self._model = config.model

    async def aclose(self) -> None:
        await self._client.close()

    def _is_transient(self, err: Exception) -> bool:
        if isinstance(err, openai.APIConnectionError):
            return True
        return isinstance(err, openai.APIStatusError) and transient_status(err.status_code)

    def _classify(self, err: Exception) -> LLMError | None:
        if isinstance(err, openai.APIStatusError):
            return LLMError(error_code(err.status_code), self.name, err.message, err.status_code, err)
        if isinstance(err, openai.APIConnectionError):
            return LLMError(error_code(None), self.name, err.message, cause=err)
        if isinstance(err, openai.APIError):
            return LLMError("LLM_ERROR", self.name, err.message, cause=err)
        return super()._classify(err)

    async def _do_complete(self, params: CompletionParams) -> CompletionResult:
        kwargs: dict = {
            "model": self._model,
            "messages": [_msg_to_dict(m) for m in params.messages],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }
        if params.tools:
            kwargs["tools"] = _tools_to_dicts(params.tools)
        resp = await self._client.chat.completions.create(**kwargs)
        choice = resp.choices[0]
        tool_calls = []
        if choice.message.tool_calls:
            tool_calls = [
                ToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
                for tc in choice.message.tool_calls
            ]
        usage = TokenUsage()
        if resp.usage:
            usage = TokenUsage(
                prompt_tokens=resp.usage.prompt_tokens,
                completion_tokens=resp.usage.completion_tokens,
                total_tokens=resp.usage.total_tokens,
            )
        return CompletionResult(
            content=choice.message.content or "",
            tool_calls=tool_calls,
            usage=usage,
            finish_reason="tool_calls" if tool_calls else "stop",
        )

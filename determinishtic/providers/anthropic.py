"""Anthropic Messages API provider."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import anthropic

from ..errors import LLMError
from ..types import CompletionParams, CompletionResult, Message, TokenUsage, ToolCall, ToolSpec
from .base import BaseLLMProvider, error_code, transient_status

if TYPE_CHECKING:
    from ..config import EngineConfig


def _msg_to_dict(m: Message) -> dict:
    # ToolMessage → Anthropic tool_result (must be role=user)
    if m.role == "tool":
        block = {"type": "tool_result", "tool_use_id": m.tool_call_id, "content": m.content}
        if m.is_error:
            block["is_error"] = True
        return {"role": "user", "content": [block]}
    # AssistantMessage with tool_calls → mixed content blocks
    if getattr(m, "tool_calls", None):
        blocks: list[dict] = []
        if m.content:
            blocks.append({"type": "text", "text": m.content})
        for tc in m.tool_calls:
            blocks.append(
                {"type": "tool_use", "id": tc.id, "name": tc.name, "input": json.loads(tc.arguments or "{}")}
            )
        return {"role": "assistant", "content": blocks}
    return {"role": m.role, "content": m.content}


def _msgs_to_dicts(messages: list[Message]) -> list[dict]:
    """Convert messages, merging consecutive tool results into one user turn."""
    out: list[dict] = []
    for m in messages:
        if m.role == "system":
            continue
        d = _msg_to_dict(m)
        if (
            m.role == "tool"
            and out
            and out[-1]["role"] == "user"
            and isinstance(out[-1]["content"], list)
            and out[-1]["content"][-1].get("type") == "tool_result"
        ):
            out[-1]["content"].extend(d["content"])
        else:
            out.append(d)
    return out


def _tools_to_dicts(tools: list[ToolSpec]) -> list[dict]:
    return [
        {"name": t.name, "description": t.description, "input_schema": t.input_schema}
        for t in tools
    ]


class AnthropicProvider(BaseLLMProvider):
    name = "anthropic"

    def __init__(self, config: EngineConfig, client=None, **kwargs) -> None:
        super().__init__(retry=config.retry, circuit_breaker=config.circuit_breaker, **kwargs)
        if client is None:
            client = anthropic.AsyncAnthropic(
                api_key=config.api_key, base_url=config.base_url, max_retries=0
            )
        self._client = client
        self._model = config.model

    async def aclose(self) -> None:
        await self._client.close()

    def _is_transient(self, err: Exception) -> bool:
        if isinstance(err, anthropic.APIConnectionError):
            return True
        return isinstance(err, anthropic.APIStatusError) and transient_status(err.status_code)

    def _classify(self, err: Exception) -> LLMError | None:
        if isinstance(err, anthropic.APIStatusError):
            return LLMError(error_code(err.status_code), self.name, err.message, err.status_code, err)
        if isinstance(err, anthropic.APIConnectionError):
            return LLMError(error_code(None), self.name, err.message, cause=err)
        if isinstance(err, anthropic.APIError):
            return LLMError("LLM_ERROR", self.name, err.message, cause=err)
        return super()._classify(err)

    async def _do_complete(self, params: CompletionParams) -> CompletionResult:
        system = "\n\n".join(m.content for m in params.messages if m.role == "system")
        kwargs: dict = {
            "model": self._model,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
            "messages": _msgs_to_dicts(params.messages),
        }
        if system:
            kwargs["system"] = system
        if params.tools:
            kwargs["tools"] = _tools_to_dicts(params.tools)
        resp = await self._client.messages.create(**kwargs)
        text, tool_calls = "", []
        for block in resp.content:
            if block.type == "text":
                text += block.text
            elif block.type == "tool_use":
                tool_calls.append(ToolCall(id=block.id, name=block.name, arguments=json.dumps(block.input)))
        usage = TokenUsage()
        if resp.usage:
            usage = TokenUsage(
                prompt_tokens=resp.usage.input_tokens,
                completion_tokens=resp.usage.output_tokens,
                total_tokens=resp.usage.input_tokens + resp.usage.output_tokens,
            )
        return CompletionResult(
            content=text,
            tool_calls=tool_calls,
            usage=usage,
            finish_reason="tool_calls" if tool_calls else "stop",
        )

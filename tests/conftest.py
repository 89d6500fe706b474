"""
Pytest Configuration and Fixtures
"""

import json
import uuid

import pytest

from determinishtic import Determinishtic, EngineConfig
from determinishtic.engine import ProviderEngine
from determinishtic.types import CompletionResult, ToolCall, ToolInvocation


def tool_call(name, args=None, id=None):
    """A provider-side tool call with JSON arguments."""
    return ToolCall(id=id or f"call_{uuid.uuid4().hex[:8]}", name=name, arguments=json.dumps(args or {}))


def calls(*tool_calls):
    """A completion that asks for the given tool calls."""
    return CompletionResult(content="", tool_calls=list(tool_calls), finish_reason="tool_calls")


def result(value):
    """A completion that calls return_result with ``value``."""
    return calls(tool_call("return_result", {"result": value}))


class ScriptedProvider:
    """Returns preset completions in order and records what it was asked."""

    def __init__(self, responses=None):
        self._responses = list(responses or [])
        self.requests = []

    async def complete(self, params):
        self.requests.append(
            {"messages": list(params.messages), "tools": list(params.tools)}
        )
        if not self._responses:
            return CompletionResult(content="nothing left to say")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class ScriptedEngine:
    """An engine whose tool invocations are given up front. It is its own session."""

    def __init__(self, script=None):
        self._script = list(script or [])
        self.prompt = None
        self.tools = None
        self.responses = []
        self.closed = False

    async def open(self, prompt, tools):
        self.prompt = prompt
        self.tools = tools
        return self

    async def next_request(self):
        if not self._script:
            return None
        item = self._script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def respond(self, response):
        self.responses.append(response)

    async def close(self):
        self.closed = True


def invoke(name, args=None, id=None):
    return ToolInvocation(id=id or f"inv_{uuid.uuid4().hex[:8]}", name=name, arguments=args or {})


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def make_determinishtic():
    """Build a Determinishtic over a scripted provider."""

    def _make(responses, **config):
        p = ScriptedProvider(responses)
        return Determinishtic(ProviderEngine(p, EngineConfig(**config))), p

    return _make

"""
Determinishtic — blend deterministic Python with LLM-powered reasoning.

Compose a prompt from text and values, expose Python callables as tools,
and await a typed result::

    from pydantic import BaseModel
    from determinishtic import Determinishtic, EngineConfig

    class Summary(BaseModel):
        title: str
        bullets: list[str]

    async with Determinishtic.from_config(EngineConfig.from_env()) as d:
        def read_file(path: str) -> str:
            return open(path).read()

        summary = await (
            d.think(Summary)
            .text("Summarize the file")
            .display("notes.md")
            .text("using")
            .tool("read_file", "Read a file from disk", read_file)
            .text(".")
        )
"""

from .config import CircuitBreakerConfig, EngineConfig, RetryConfig
from .core import Determinishtic
from .errors import (
    ConfigurationError,
    ConnectionClosedError,
    DecodeError,
    DeterminishticError,
    IncompleteError,
    LLMError,
    RenderError,
    ResultError,
    SessionAbortedError,
    ToolFailure,
    TransportError,
)
from .prompt import RenderedPrompt
from .session import Session, SessionState
from .think import ThinkBuilder
from .tools import RESULT_TOOL_NAME

__all__ = [
    "Determinishtic",
    "ThinkBuilder",
    "Session",
    "SessionState",
    "RenderedPrompt",
    "RESULT_TOOL_NAME",
    "EngineConfig",
    "RetryConfig",
    "CircuitBreakerConfig",
    "DeterminishticError",
    "ConfigurationError",
    "RenderError",
    "DecodeError",
    "ResultError",
    "TransportError",
    "ConnectionClosedError",
    "IncompleteError",
    "SessionAbortedError",
    "ToolFailure",
    "LLMError",
]

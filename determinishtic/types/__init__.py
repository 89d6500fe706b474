"""Core type definitions — re-exported from sub-modules."""

from .prompt import Literal, Rendered, RepresentationKind, Segment, SpacingMode
from .messages import (
    Message, SystemMessage, UserMessage, AssistantMessage, ToolMessage, ToolCall,
)
from .tools import (
    ToolSchema, OutputSchema, ToolDefinition, ToolSpec, ToolInvocation, ToolResponse,
)
from .llm import CompletionParams, CompletionResult, TokenUsage, LLMProvider, FinishReason

__all__ = [
    "Literal", "Rendered", "RepresentationKind", "Segment", "SpacingMode",
    "Message", "SystemMessage", "UserMessage", "AssistantMessage", "ToolMessage", "ToolCall",
    "ToolSchema", "OutputSchema", "ToolDefinition", "ToolSpec", "ToolInvocation", "ToolResponse",
    "CompletionParams", "CompletionResult", "TokenUsage", "LLMProvider", "FinishReason",
]

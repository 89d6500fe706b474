"""Prompt rendering: segments to text, tools to engine declarations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..tools import ResultTool, ToolRegistry
from ..types import Literal, Segment, SpacingMode, ToolSpec
from .spacing import needs_space

TOOL_MARKER = "<tool>{name}</tool>"


def tool_marker(name: str) -> str:
    return TOOL_MARKER.format(name=name)


@dataclass(frozen=True)
class RenderedPrompt:
    prompt: str
    tools: list[ToolSpec] = field(default_factory=list)


def render_text(segments: Sequence[Segment]) -> str:
    """Join segments, spacing each one according to the mode it was appended under."""
    parts: list[str] = []
    previous: str | None = None
    for segment in segments:
        text = segment.render()
        if (
            previous is not None
            and segment.spacing is SpacingMode.AUTO
            and needs_space(previous, text, isinstance(segment, Literal))
        ):
            parts.append(" ")
        parts.append(text)
        previous = text
    return "".join(parts)


def render(
    segments: Sequence[Segment], registry: ToolRegistry, result_tool: ResultTool
) -> RenderedPrompt:
    return RenderedPrompt(
        prompt=render_text(segments),
        tools=[*registry.specs(), result_tool.spec()],
    )

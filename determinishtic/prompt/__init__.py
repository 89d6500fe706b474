"""Prompt composition: spacing policy and rendering."""

from .render import TOOL_MARKER, RenderedPrompt, render, render_text, tool_marker
from .spacing import NO_SPACE_BEFORE, needs_space

__all__ = [
    "TOOL_MARKER", "RenderedPrompt", "render", "render_text", "tool_marker",
    "NO_SPACE_BEFORE", "needs_space",
]

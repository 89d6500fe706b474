"""Prompt segment types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import RenderError


class RepresentationKind(str, Enum):
    PRIMARY = "primary"  # str()
    DIAGNOSTIC = "diagnostic"  # repr()


class SpacingMode(str, Enum):
    AUTO = "auto"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class Literal:
    text: str
    spacing: SpacingMode = SpacingMode.AUTO

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Rendered:
    """A value rendered through ``str()`` or ``repr()``.

    The text is captured when the segment is created. If the value cannot
    produce it, the failure is kept and raised by ``render()``.
    """

    value: Any
    kind: RepresentationKind
    spacing: SpacingMode = SpacingMode.AUTO
    text: str | None = None
    error: Exception | None = None

    @classmethod
    def capture(
        cls, value: Any, kind: RepresentationKind, spacing: SpacingMode = SpacingMode.AUTO
    ) -> Rendered:
        fn = str if kind is RepresentationKind.PRIMARY else repr
        try:
            text = fn(value)
        except Exception as e:
            return cls(value=value, kind=kind, spacing=spacing, error=e)
        return cls(value=value, kind=kind, spacing=spacing, text=text)

    def render(self) -> str:
        if self.error is not None:
            raise RenderError(
                f"cannot render {type(self.value).__name__} as {self.kind.value} text: {self.error}",
                self.error,
            )
        return self.text or ""


Segment = Literal | Rendered

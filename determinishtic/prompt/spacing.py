"""Automatic spacing between adjacent prompt segments."""

from __future__ import annotations

# Literal text starting with one of these attaches to the previous segment.
NO_SPACE_BEFORE = frozenset(".,:;")


def needs_space(previous: str, current: str, current_is_literal: bool) -> bool:
    """Decide whether one space goes between two adjacent rendered segments."""
    if previous[-1:].isspace():
        return False
    if current_is_literal and current[:1] in NO_SPACE_BEFORE:
        return False
    return True

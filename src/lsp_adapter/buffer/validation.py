"""Validation helpers for positions handed over by the host surface."""

from __future__ import annotations

from typing import Sequence

from .positions import Position


class PositionError(RuntimeError):
    """Raised when a host reports a position outside the buffer."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_position(lines: Sequence[str], position: Position) -> Position:
    if position.line < 0 or position.line >= len(lines):
        raise PositionError("Line out of range", position=position)
    if position.ch < 0 or position.ch > len(lines[position.line]):
        raise PositionError("Character out of range", position=position)
    return position


__all__ = ["PositionError", "ensure_position"]

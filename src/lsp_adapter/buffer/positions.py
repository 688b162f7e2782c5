"""Editor positions and their LSP ``{line, character}`` counterparts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from lsp_adapter.errors import MalformedResponseError


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line / character offset in the current buffer."""

    line: int
    ch: int

    @classmethod
    def from_lsp(cls, payload: Any) -> "Position":
        if not isinstance(payload, Mapping):
            raise MalformedResponseError("position must be an object", payload=payload)
        line = payload.get("line")
        character = payload.get("character")
        if not _is_offset(line) or not _is_offset(character):
            raise MalformedResponseError(
                "position needs non-negative 'line' and 'character'", payload=payload
            )
        return cls(line=line, ch=character)

    def to_lsp(self) -> dict[str, int]:
        return {"line": self.line, "character": self.ch}


@dataclass(frozen=True, slots=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def from_lsp(cls, payload: Any) -> "Range":
        if not isinstance(payload, Mapping):
            raise MalformedResponseError("range must be an object", payload=payload)
        return cls(
            start=Position.from_lsp(payload.get("start")),
            end=Position.from_lsp(payload.get("end")),
        )

    @classmethod
    def at(cls, position: Position) -> "Range":
        return cls(position, position)

    def to_lsp(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_lsp(), "end": self.end.to_lsp()}

    def contains_on_line(self, position: Position) -> bool:
        """True when ``position`` sits on a single-line span of this range."""

        if position.line != self.start.line or position.line != self.end.line:
            return False
        return self.start.ch <= position.ch <= self.end.ch

    def touches(self, position: Position) -> bool:
        """Loose check used for diagnostics: either boundary line, column inside."""

        if position.line not in (self.start.line, self.end.line):
            return False
        return self.start.ch <= position.ch <= self.end.ch


@dataclass(frozen=True, slots=True)
class ScreenPoint:
    """Pixel (or cell) coordinate local to the editor wrapper."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


def _is_offset(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


__all__ = ["Position", "Range", "ScreenPoint", "Size"]

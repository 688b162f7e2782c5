"""Editor surface contract consumed by the adapter.

Hosts (a Textual widget, a test double, ...) implement this protocol. The
adapter never stores positions across calls; it asks the surface again on
every event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from lsp_adapter.buffer import Position, ScreenPoint
from lsp_adapter.completion import HintList
from lsp_adapter.diagnostics import TextMark
from lsp_adapter.overlay import OverlayContent, OverlayHandle
from lsp_adapter.runtime import Disposer

EDITOR_EVENTS = (
    "change",
    "refresh",
    "scroll",
    "focus",
    "pointermove",
    "pointerleave",
    "contextmenu",
)
DOCUMENT_EVENTS = ("click",)


@dataclass(slots=True)
class PointerEvent:
    """Pointer activity in window coordinates.

    ``target`` is whatever element object the host hit-tested; the adapter only
    passes it back to ``is_inside_editor`` and to overlay handles.
    """

    x: float
    y: float
    target: object | None = None
    native: object | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class EditorSurface(Protocol):
    def get_value(self) -> str:
        ...

    def get_line(self, line: int) -> str:
        ...

    def get_cursor(self) -> Position:
        ...

    def position_at(self, event: PointerEvent) -> Position:
        """Document position under the pointer."""
        ...

    def token_at(self, position: Position) -> str:
        """Text of the rendered token at ``position`` (empty over blank space)."""
        ...

    def is_inside_editor(self, target: object | None) -> bool:
        ...

    def char_coords(self, position: Position) -> ScreenPoint:
        """Local coordinates of ``position`` before scrolling is applied."""
        ...

    def scroll_offset(self) -> ScreenPoint:
        ...

    def line_height(self) -> float:
        ...

    def mark_text(self, start: Position, end: Position, class_name: str) -> TextMark:
        ...

    def set_gutter_marker(self, line: int, title: str) -> TextMark:
        ...

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        ...

    def set_cursor(self, position: Position) -> None:
        ...

    def scroll_into_view(self, position: Position) -> None:
        ...

    def mount_overlay(
        self, content: OverlayContent, point: ScreenPoint
    ) -> OverlayHandle:
        ...

    def after_layout(self, callback: Callable[[], None]) -> None:
        ...

    def show_hints(self, hints: HintList) -> None:
        ...

    def close_hints(self) -> None:
        ...

    def on(self, event: str, callback: Callable[..., None]) -> Disposer:
        """Subscribe to an editor-level event from ``EDITOR_EVENTS``."""
        ...

    def on_document(self, event: str, callback: Callable[..., None]) -> Disposer:
        """Subscribe to a global event (``DOCUMENT_EVENTS``)."""
        ...


__all__ = ["DOCUMENT_EVENTS", "EDITOR_EVENTS", "EditorSurface", "PointerEvent"]

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest

from lsp_adapter.buffer import Position, ScreenPoint, Size, TokenInfo, is_word_character
from lsp_adapter.completion import HintList
from lsp_adapter.host import PointerEvent
from lsp_adapter.overlay import OverlayContent
from lsp_adapter.runtime import Disposer, EventBus

EDITOR = "editor"
OUTSIDE = "outside"


class ManualClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@dataclass(eq=False)
class FakeMark:
    class_name: str
    start: Optional[Position] = None
    end: Optional[Position] = None
    line: Optional[int] = None
    title: Optional[str] = None
    cleared: bool = False

    def clear(self) -> None:
        self.cleared = True


@dataclass(eq=False)
class FakeOverlayHandle:
    content: OverlayContent
    point: ScreenPoint
    size: Size = Size(40, 30)
    moves: List[ScreenPoint] = field(default_factory=list)
    removed: bool = False

    def move_to(self, point: ScreenPoint) -> None:
        self.moves.append(point)
        self.point = point

    def measure(self) -> Size:
        return self.size

    def contains(self, target: object) -> bool:
        return target is self

    def remove(self) -> None:
        self.removed = True


class FakeSurface:
    """Recording editor surface; layout callbacks run only on ``run_layout``."""

    def __init__(self, text: str = "", *, line_height: float = 10.0, char_width: float = 5.0) -> None:
        self.text = text
        self.cursor = Position(0, 0)
        self.scroll = ScreenPoint(0, 0)
        self._line_height = line_height
        self._char_width = char_width
        self.editor_bus = EventBus()
        self.document_bus = EventBus()
        self.marks: List[FakeMark] = []
        self.gutter: List[FakeMark] = []
        self.overlays: List[FakeOverlayHandle] = []
        self.pending_layout: List[Callable[[], None]] = []
        self.hints: List[HintList] = []
        self.hint_closes = 0
        self.replacements: List[Tuple[str, Position, Position]] = []
        self.cursor_moves: List[Position] = []
        self.scrolled_to: List[Position] = []

    # text
    def get_value(self) -> str:
        return self.text

    def get_line(self, line: int) -> str:
        return self.text.split("\n")[line]

    def get_cursor(self) -> Position:
        return self.cursor

    def position_at(self, event: PointerEvent) -> Position:
        assert isinstance(event.native, Position)
        return event.native

    def token_at(self, position: Position) -> str:
        line = self.get_line(position.line)
        start = end = min(position.ch, len(line))
        while start > 0 and is_word_character(line[start - 1]):
            start -= 1
        while end < len(line) and is_word_character(line[end]):
            end += 1
        return line[start:end]

    def is_inside_editor(self, target: object | None) -> bool:
        return target == EDITOR

    def char_coords(self, position: Position) -> ScreenPoint:
        return ScreenPoint(position.ch * self._char_width, position.line * self._line_height)

    def scroll_offset(self) -> ScreenPoint:
        return self.scroll

    def line_height(self) -> float:
        return self._line_height

    # decorations
    def mark_text(self, start: Position, end: Position, class_name: str) -> FakeMark:
        mark = FakeMark(class_name, start=start, end=end)
        self.marks.append(mark)
        return mark

    def set_gutter_marker(self, line: int, title: str) -> FakeMark:
        marker = FakeMark("gutter", line=line, title=title)
        self.gutter.append(marker)
        return marker

    def active_marks(self, class_name: str) -> List[FakeMark]:
        return [m for m in self.marks if not m.cleared and m.class_name == class_name]

    def active_gutter(self) -> List[FakeMark]:
        return [m for m in self.gutter if not m.cleared]

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        self.replacements.append((text, start, end))

    def set_cursor(self, position: Position) -> None:
        self.cursor_moves.append(position)

    def scroll_into_view(self, position: Position) -> None:
        self.scrolled_to.append(position)

    # overlays
    def mount_overlay(self, content: OverlayContent, point: ScreenPoint) -> FakeOverlayHandle:
        handle = FakeOverlayHandle(content, point)
        self.overlays.append(handle)
        return handle

    def open_overlays(self) -> List[FakeOverlayHandle]:
        return [handle for handle in self.overlays if not handle.removed]

    def after_layout(self, callback: Callable[[], None]) -> None:
        self.pending_layout.append(callback)

    def run_layout(self) -> None:
        callbacks, self.pending_layout = self.pending_layout, []
        for callback in callbacks:
            callback()

    def show_hints(self, hints: HintList) -> None:
        self.hints.append(hints)

    def close_hints(self) -> None:
        self.hint_closes += 1

    # events
    def on(self, event: str, callback: Callable[..., None]) -> Disposer:
        return self.editor_bus.subscribe(event, callback)

    def on_document(self, event: str, callback: Callable[..., None]) -> Disposer:
        return self.document_bus.subscribe(event, callback)

    def listener_count(self) -> int:
        return self.editor_bus.listener_count() + self.document_bus.listener_count()

    def type_text(self, text: str, cursor: Position) -> None:
        self.text = text
        self.cursor = cursor
        self.editor_bus.emit("change")

    def hover_at(self, position: Position, target: object = EDITOR) -> PointerEvent:
        event = PointerEvent(position.ch * self._char_width, position.line * self._line_height, target=target, native=position)
        self.editor_bus.emit("pointermove", event)
        return event


class FakeConnection:
    """Records every request; ``dispatch`` plays a server response back."""

    def __init__(
        self,
        *,
        uri: str = "file:///project/main.py",
        completion_characters: Sequence[str] = (".",),
        signature_characters: Sequence[str] = ("(",),
        definition: bool = True,
        type_definition: bool = True,
        references: bool = True,
    ) -> None:
        self.uri = uri
        self.completion_characters = list(completion_characters)
        self.signature_characters = list(signature_characters)
        self.definition = definition
        self.type_definition = type_definition
        self.references = references
        self.bus = EventBus()
        self.calls: List[Tuple[Any, ...]] = []

    def on(self, event: str, callback: Callable[..., Any]) -> Disposer:
        return self.bus.subscribe(event, callback)

    def dispatch(self, event: str, *payload: Any) -> None:
        self.bus.emit(event, *payload)

    def requests(self, name: str) -> List[Tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    def send_change(self) -> None:
        self.calls.append(("send_change",))

    def get_hover_tooltip(self, position: Position) -> None:
        self.calls.append(("hover", position))

    def get_completion(
        self,
        position: Position,
        token: Optional[TokenInfo],
        trigger_character: str,
        trigger_kind: Any,
    ) -> None:
        self.calls.append(("completion", position, token, trigger_character, trigger_kind))

    def get_signature_help(self, position: Position) -> None:
        self.calls.append(("signature", position))

    def get_definition(self, position: Position) -> None:
        self.calls.append(("definition", position))

    def get_type_definition(self, position: Position) -> None:
        self.calls.append(("type_definition", position))

    def get_references(self, position: Position) -> None:
        self.calls.append(("references", position))

    def is_definition_supported(self) -> bool:
        return self.definition

    def is_type_definition_supported(self) -> bool:
        return self.type_definition

    def is_references_supported(self) -> bool:
        return self.references

    def get_language_completion_characters(self) -> List[str]:
        return self.completion_characters

    def get_language_signature_characters(self) -> List[str]:
        return self.signature_characters

    def get_document_uri(self) -> str:
        return self.uri


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()

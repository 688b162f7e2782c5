"""``EditorSurface`` implementation on top of Textual's ``TextArea``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

try:  # pragma: no cover - imported only when the Textual host is used
    from textual import events
    from textual.app import ComposeResult
    from textual.containers import Vertical
    from textual.widget import Widget
    from textual.widgets import Markdown, OptionList, Static, TextArea
    from textual.widgets.option_list import Option
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use lsp_adapter.adapters.textual"
    ) from exc

from lsp_adapter.buffer import Position, ScreenPoint, Size, is_word_character
from lsp_adapter.completion import HintEntry, HintList
from lsp_adapter.host import PointerEvent
from lsp_adapter.overlay import ContextMenu, OverlayContent, Tooltip
from lsp_adapter.runtime import Disposer, EventBus


@dataclass(eq=False)
class TextualMark:
    """Recorded text decoration; ``clear`` forgets it and repaints."""

    owner: "TextualEditorSurface"
    start: Position
    end: Position
    class_name: str

    def clear(self) -> None:
        self.owner._forget_mark(self)


@dataclass(eq=False)
class GutterMarker:
    owner: "TextualEditorSurface"
    line: int
    title: str

    def clear(self) -> None:
        self.owner._forget_gutter(self)


class LspTextArea(TextArea):
    """TextArea that re-emits its activity on an ``EventBus``."""

    def __init__(self, text: str = "", *, bus: EventBus | None = None, **kwargs: Any) -> None:
        super().__init__(text, **kwargs)
        self.bus = bus or EventBus()

    def on_mount(self) -> None:
        self.watch(self, "scroll_y", self._scrolled, init=False)

    def _scrolled(self) -> None:
        self.bus.emit("scroll")

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.bus.emit("change")

    def on_resize(self, event: events.Resize) -> None:
        self.bus.emit("refresh")

    def on_focus(self, event: events.Focus) -> None:
        self.bus.emit("focus")

    def on_mouse_move(self, event: events.MouseMove) -> None:
        self.bus.emit(
            "pointermove", PointerEvent(event.x, event.y, target=self, native=event)
        )

    def on_leave(self, event: events.Leave) -> None:
        self.bus.emit("pointerleave")

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 3:
            return
        pointer = PointerEvent(event.x, event.y, target=self, native=event)
        self.bus.emit("contextmenu", pointer)
        if pointer.default_prevented:
            event.stop()


class TooltipOverlay(Vertical):
    DEFAULT_CSS = """
    TooltipOverlay {
        position: absolute;
        overlay: screen;
        width: auto;
        max-width: 80;
        height: auto;
        background: $panel;
        border: round $accent;
        padding: 0 1;
    }
    TooltipOverlay > .lsp-diagnostic {
        color: $warning;
    }
    """

    def __init__(self, content: Tooltip) -> None:
        super().__init__()
        self.content = content

    def compose(self) -> ComposeResult:
        for section in self.content.sections:
            text = "\n".join(section.lines)
            if section.is_markup:
                yield Markdown(text, classes=f"lsp-{section.role}")
            else:
                yield Static(text, markup=False, classes=f"lsp-{section.role}")

    def on_markdown_link_clicked(self, event: Markdown.LinkClicked) -> None:
        event.stop()
        if self.content.on_link is not None:
            self.content.on_link(event.href)


class MenuOverlay(OptionList):
    DEFAULT_CSS = """
    MenuOverlay {
        position: absolute;
        overlay: screen;
        width: auto;
        height: auto;
    }
    """

    def __init__(self, menu: ContextMenu) -> None:
        super().__init__(*(Option(entry.label) for entry in menu.entries))
        self.menu = menu

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.menu.choose(self.menu.entries[event.option_index].label)


class HintMenu(OptionList):
    DEFAULT_CSS = """
    HintMenu {
        position: absolute;
        overlay: screen;
        width: auto;
        max-height: 12;
    }
    """

    def __init__(self, hints: HintList, on_pick: Callable[[HintEntry], object]) -> None:
        super().__init__(*(Option(_hint_prompt(entry)) for entry in hints.entries))
        self.hints = hints
        self._on_pick = on_pick

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self._on_pick(self.hints.entries[event.option_index])


def _hint_prompt(entry: HintEntry) -> str:
    if entry.description:
        return f"{entry.display_text}  {entry.description}"
    return entry.display_text


class _WidgetOverlay:
    def __init__(self, surface: "TextualEditorSurface", widget: Widget) -> None:
        self._surface = surface
        self.widget = widget

    def move_to(self, point: ScreenPoint) -> None:
        self.widget.styles.offset = self._surface.to_screen(point)

    def measure(self) -> Size:
        size = self.widget.outer_size
        return Size(size.width, size.height)

    def contains(self, target: object) -> bool:
        return _within(self.widget, target)

    def remove(self) -> None:
        self.widget.remove()


def _within(widget: Widget, target: object) -> bool:
    if not isinstance(target, Widget):
        return False
    return target is widget or widget in target.ancestors


class TextualEditorSurface:
    """Adapts an ``LspTextArea`` to the surface contract the router drives.

    Text marks and gutter markers are kept as records on the surface; hosts
    read them back through ``marks`` and ``gutter_title``.
    """

    def __init__(self, area: LspTextArea) -> None:
        self.area = area
        self.document_bus = EventBus()
        self.marks: List[TextualMark] = []
        self.gutter: Dict[int, GutterMarker] = {}
        self.on_hint: Optional[Callable[[HintEntry], object]] = None
        self._hint_menu: Optional[HintMenu] = None

    # text
    def get_value(self) -> str:
        return self.area.text

    def get_line(self, line: int) -> str:
        return self.area.document.get_line(line)

    def get_cursor(self) -> Position:
        row, column = self.area.cursor_location
        return Position(row, column)

    def position_at(self, event: PointerEvent) -> Position:
        if isinstance(event.native, events.MouseEvent):
            row, column = self.area.get_target_document_location(event.native)
            return Position(row, column)
        scroll = self.area.scroll_offset
        row = min(max(int(event.y) + scroll.y, 0), self.area.document.line_count - 1)
        column = int(event.x) - self.area.gutter_width + scroll.x
        return Position(row, min(max(column, 0), len(self.get_line(row))))

    def token_at(self, position: Position) -> str:
        line = self.get_line(position.line)
        start = end = min(position.ch, len(line))
        while start > 0 and is_word_character(line[start - 1]):
            start -= 1
        while end < len(line) and is_word_character(line[end]):
            end += 1
        return line[start:end]

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        self.area.replace(text, (start.line, start.ch), (end.line, end.ch))

    def set_cursor(self, position: Position) -> None:
        self.area.cursor_location = (position.line, position.ch)

    def scroll_into_view(self, position: Position) -> None:
        self.set_cursor(position)
        self.area.scroll_cursor_visible(center=True)

    # geometry
    def is_inside_editor(self, target: object | None) -> bool:
        return _within(self.area, target)

    def char_coords(self, position: Position) -> ScreenPoint:
        return ScreenPoint(position.ch + self.area.gutter_width, position.line)

    def scroll_offset(self) -> ScreenPoint:
        offset = self.area.scroll_offset
        return ScreenPoint(offset.x, offset.y)

    def line_height(self) -> float:
        return 1.0

    def to_screen(self, point: ScreenPoint) -> tuple[int, int]:
        region = self.area.content_region
        return int(region.x + point.x), int(region.y + point.y)

    # decorations
    def mark_text(self, start: Position, end: Position, class_name: str) -> TextualMark:
        mark = TextualMark(self, start, end, class_name)
        self.marks.append(mark)
        self.area.refresh()
        return mark

    def set_gutter_marker(self, line: int, title: str) -> GutterMarker:
        marker = GutterMarker(self, line, title)
        self.gutter[line] = marker
        self.area.refresh()
        return marker

    def gutter_title(self, line: int) -> Optional[str]:
        marker = self.gutter.get(line)
        return marker.title if marker is not None else None

    def _forget_mark(self, mark: TextualMark) -> None:
        if mark in self.marks:
            self.marks.remove(mark)
            self.area.refresh()

    def _forget_gutter(self, marker: GutterMarker) -> None:
        if self.gutter.get(marker.line) is marker:
            del self.gutter[marker.line]
            self.area.refresh()

    # overlays
    def mount_overlay(self, content: OverlayContent, point: ScreenPoint) -> _WidgetOverlay:
        widget: Widget
        if isinstance(content, Tooltip):
            widget = TooltipOverlay(content)
        else:
            widget = MenuOverlay(content)
        handle = _WidgetOverlay(self, widget)
        handle.move_to(point)
        self.area.screen.mount(widget)
        return handle

    def after_layout(self, callback: Callable[[], None]) -> None:
        self.area.call_after_refresh(callback)

    def show_hints(self, hints: HintList) -> None:
        self.close_hints()
        menu = HintMenu(hints, self._pick_hint)
        anchor = self.char_coords(hints.start)
        scroll = self.scroll_offset()
        menu.styles.offset = self.to_screen(
            ScreenPoint(anchor.x - scroll.x, anchor.y - scroll.y + self.line_height())
        )
        self._hint_menu = menu
        self.area.screen.mount(menu)

    def close_hints(self) -> None:
        menu, self._hint_menu = self._hint_menu, None
        if menu is not None:
            menu.remove()

    def _pick_hint(self, entry: HintEntry) -> None:
        if self.on_hint is not None:
            self.on_hint(entry)
        self.area.focus()

    # events
    def on(self, event: str, callback: Callable[..., None]) -> Disposer:
        return self.area.bus.subscribe(event, callback)

    def on_document(self, event: str, callback: Callable[..., None]) -> Disposer:
        return self.document_bus.subscribe(event, callback)


__all__ = [
    "GutterMarker",
    "HintMenu",
    "LspTextArea",
    "MenuOverlay",
    "TextualEditorSurface",
    "TextualMark",
    "TooltipOverlay",
]

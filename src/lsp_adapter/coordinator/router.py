"""Event router: editor activity in, protocol requests out, responses rendered.

Hover, completion, signature, and context-menu handling are independent
tracks sharing one overlay slot. Requests are never cancelled, so every
response path re-checks the current state before touching the surface.
"""

from __future__ import annotations

import time
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from lsprotocol.types import CompletionTriggerKind

from lsp_adapter.buffer import (
    Position,
    Range,
    ScreenPoint,
    TokenInfo,
    is_word_character,
    token_ending_at,
)
from lsp_adapter.completion import (
    CompletionCandidate,
    HintEntry,
    HintList,
    apply_hint,
    build_hint_list,
    parse_completion_response,
    rank_completions,
)
from lsp_adapter.diagnostics import DiagnosticEntry, DiagnosticsTracker, TextMark
from lsp_adapter.errors import MalformedResponseError
from lsp_adapter.host import EditorSurface, LspConnection, PointerEvent
from lsp_adapter.overlay import (
    ContextMenu,
    OverlayPresenter,
    Tooltip,
    TooltipSection,
    normalize_hover_contents,
)
from lsp_adapter.runtime import DisposerStack, EventBus, TimerGroup, telemetry
from lsp_adapter.runtime.debounce import Clock

from .context_menu import build_menu_entries
from .navigation import parse_locations, split_by_document
from .options import AdapterOptions

HOVER_CLASS = "lsp-hover"
HIGHLIGHT_CLASS = "lsp-highlight"
LOGGER_NAME = "lsp_adapter.router"


class LspEditorAdapter:
    """Owns every listener, timer, mark, and overlay for one editor/connection pair."""

    def __init__(
        self,
        surface: EditorSurface,
        connection: LspConnection,
        options: AdapterOptions | Mapping[str, Any] | None = None,
        *,
        snippets: Iterable[Any] = (),
        clock: Clock = time.monotonic,
    ) -> None:
        if surface is None:
            raise TypeError("LspEditorAdapter requires an editor surface")
        if connection is None:
            raise TypeError("LspEditorAdapter requires a connection")
        self.surface = surface
        self.connection = connection
        self.options = AdapterOptions.fill_defaults(options)
        self.snippets: List[CompletionCandidate] = [
            CompletionCandidate.from_lsp(item) for item in snippets
        ]
        self.signals = EventBus()
        self.presenter = OverlayPresenter(surface)
        self.diagnostics = DiagnosticsTracker(
            surface,
            mark_class_name=self.options.diagnostic_mark_class_name,
            gutter_marks=self.options.enable_gutter_marks,
        )

        self._timers = TimerGroup(clock=clock)
        self._change_timer = self._timers.debounce(
            "change",
            self.options.debounce_suggestions_while_typing,
            self._handle_settled_change,
        )
        self._hover_timer = self._timers.debounce(
            "hover", self.options.quick_suggestions_delay, self._request_hover
        )
        self._listeners = DisposerStack()
        self._token: Optional[TokenInfo] = None
        self._hover_position: Optional[Position] = None
        self._hover_pending = False
        self._hover_mark: Optional[TextMark] = None
        self._highlights: List[TextMark] = []
        self._hints: Optional[HintList] = None
        self._removed = False

        self._add_listeners()

    # -- public API -----------------------------------------------------
    @property
    def removed(self) -> bool:
        return self._removed

    @property
    def token(self) -> Optional[TokenInfo]:
        return self._token

    @property
    def hover_position(self) -> Optional[Position]:
        return self._hover_position

    @property
    def highlight_count(self) -> int:
        return len(self._highlights)

    def update_options(self, options: AdapterOptions | Mapping[str, Any]) -> None:
        self.options = AdapterOptions.fill_defaults(options)
        self._change_timer.delay_ms = self.options.debounce_suggestions_while_typing
        self._hover_timer.delay_ms = self.options.quick_suggestions_delay
        self.diagnostics.mark_class_name = self.options.diagnostic_mark_class_name
        self.diagnostics.gutter_marks = self.options.enable_gutter_marks
        if not self.options.enable_gutter_marks:
            self.diagnostics.clear_gutter()
        if not self.options.enable_diagnostics:
            self.diagnostics.clear()

    def update_snippets(self, snippets: Iterable[Any]) -> None:
        self.snippets = [CompletionCandidate.from_lsp(item) for item in snippets]

    def process_timeouts(self) -> List[str]:
        """Run debounced work whose quiet period has elapsed."""

        if self._removed:
            return []
        return self._timers.poll()

    def pick_hint(self, entry: HintEntry) -> Optional[Position]:
        hints = self._hints
        if self._removed or hints is None:
            return None
        cursor = apply_hint(self.surface, hints, entry)
        self._hints = None
        self.presenter.close_hints()
        return cursor

    def remove(self) -> None:
        """Detach every listener and clear every decoration, synchronously."""

        if self._removed:
            return
        with telemetry.span(
            "router::remove",
            logger_name=LOGGER_NAME,
            component="router",
            metadata={"listeners": len(self._listeners)},
        ):
            self._removed = True
            self._timers.cancel_all()
            self._clear_hover_mark()
            self.presenter.dispose()
            self._hints = None
            self.diagnostics.clear()
            self._unhighlight()
            self._listeners.dispose()

    # -- wiring ---------------------------------------------------------
    def _add_listeners(self) -> None:
        surface = self.surface
        add = self._listeners.add
        add(surface.on("change", lambda *_: self._change_timer()))
        add(surface.on("refresh", lambda *_: self.handle_refresh()))
        add(surface.on("pointerleave", lambda *_: self.handle_pointer_leave()))
        add(surface.on("scroll", lambda *_: self.handle_scroll()))
        add(surface.on("pointermove", self.handle_pointer_move))
        add(surface.on("contextmenu", self.handle_context_menu))
        add(surface.on("focus", lambda *_: self.handle_focus()))
        add(surface.on_document("click", self.handle_document_click))

        connection = self.connection
        add(connection.on("hover", self.handle_hover))
        add(connection.on("completion", self.handle_completion))
        add(connection.on("signature", self.handle_signature))
        add(connection.on("diagnostic", self.handle_diagnostic))
        add(connection.on("goTo", self.handle_go_to))
        add(connection.on("highlight", self.handle_highlight))

    # -- editor events --------------------------------------------------
    def _handle_settled_change(self) -> None:
        if self._removed:
            return
        position = self.surface.get_cursor()
        self.connection.send_change()

        completion_chars = list(self.connection.get_language_completion_characters())
        signature_chars = list(self.connection.get_language_signature_characters())
        line = self.surface.get_line(position.line)
        typed = line[position.ch - 1] if 0 < position.ch <= len(line) else None

        if typed is None:
            self._token = None
            self._clear_signature()
        elif typed in completion_chars:
            self._token = token_ending_at(
                self.surface.get_value(), position, completion_chars
            )
            self._record("request.completion", position, trigger=typed)
            self.connection.get_completion(
                position,
                self._token,
                typed,
                CompletionTriggerKind.TriggerCharacter,
            )
        elif typed in signature_chars:
            self._token = token_ending_at(
                self.surface.get_value(), position, signature_chars
            )
            self._record("request.signature", position, trigger=typed)
            self.connection.get_signature_help(position)
        elif is_word_character(typed):
            self._record("request.completion", position, trigger="")
            self.connection.get_completion(
                position, self._token, "", CompletionTriggerKind.Invoked
            )
            self._token = token_ending_at(
                self.surface.get_value(), position, completion_chars + signature_chars
            )
        else:
            self._token = None
            self._clear_signature()

    def handle_pointer_move(self, event: PointerEvent) -> None:
        if self._removed:
            return
        if self.presenter.contains(event.target):
            return
        if not self.surface.is_inside_editor(event.target):
            self._clear_hover()
            return
        position = self.surface.position_at(event)
        if not self.surface.token_at(position):
            return
        if self._hover_position == position:
            return
        self._hover_position = position
        self._hover_timer(position)

    def handle_pointer_leave(self) -> None:
        if not self._removed:
            self._clear_hover()

    def handle_scroll(self) -> None:
        if not self._removed:
            self._clear_hover()

    def handle_refresh(self) -> None:
        if not self._removed:
            self._clear_hover()

    def handle_focus(self) -> None:
        if not self._removed:
            self._unhighlight()

    def handle_document_click(self, event: PointerEvent) -> None:
        if not self._removed:
            self.presenter.handle_outside_click(event.target)

    def handle_context_menu(self, event: PointerEvent) -> None:
        if self._removed or not self.options.enable_context_menu:
            return
        if not self.surface.is_inside_editor(event.target):
            return
        position = self.surface.position_at(event)
        if not self.surface.token_at(position):
            return
        entries = build_menu_entries(
            self.connection, position, on_chosen=self.presenter.remove
        )
        if not entries:
            return
        event.prevent_default()
        provider = self.options.context_menu_provider
        if provider is not None:
            provider(event, tuple(entries))
            return
        self.presenter.show(
            ContextMenu(tuple(entries)), ScreenPoint(event.x - 4, event.y + 8)
        )

    def _request_hover(self, position: Position) -> None:
        if self._removed:
            return
        if not (self.options.enable_hover_info or self.options.enable_diagnostics):
            return
        self._hover_pending = True
        self._record("request.hover", position)
        self.connection.get_hover_tooltip(position)

    # -- connection responses -------------------------------------------
    def handle_hover(self, response: Any, position: Optional[Position] = None) -> None:
        if self._removed:
            return
        target = position if position is not None else self._hover_position
        with telemetry.span(
            "router::hover", logger_name=LOGGER_NAME, component="router"
        ) as handle:
            if (
                not self._hover_pending
                or target is None
                or target != self._hover_position
            ):
                self._record("hover.stale", target)
                handle.cancel("stale")
                return
            self._hover_pending = False
            self._render_hover(response, target)

    def _render_hover(self, response: Any, position: Position) -> None:
        self._clear_hover_mark()
        self.presenter.remove()
        diagnostic = self._diagnostic_section(position)

        if not self.options.enable_hover_info or not isinstance(response, Mapping):
            self._show_diagnostic_only(diagnostic)
            return
        try:
            hover = normalize_hover_contents(response.get("contents"))
            raw_range = response.get("range")
            hover_range = (
                Range.from_lsp(raw_range) if raw_range is not None else None
            )
        except MalformedResponseError as exc:
            self._record("hover.malformed", position, level="warning", reason=str(exc))
            self._show_diagnostic_only(diagnostic)
            return
        if hover is None:
            self._show_diagnostic_only(diagnostic)
            return

        if hover_range is not None:
            self._hover_mark = self.surface.mark_text(
                hover_range.start, hover_range.end, HOVER_CLASS
            )
        else:
            hover_range = Range.at(position)
        if not hover_range.contains_on_line(position):
            self._show_diagnostic_only(diagnostic)
            return

        anchor = self._screen_point(hover_range.start)
        section = TooltipSection("hover", (hover.text,), is_markup=hover.is_markup)
        sections = (section,)
        if diagnostic is not None and diagnostic[1] == anchor:
            sections = (diagnostic[0], section)
        on_link = self._open_link if hover.is_markup else None
        self.presenter.show(Tooltip(sections, on_link=on_link), anchor)

    def handle_completion(self, response: Any) -> None:
        if self._removed or not self.options.suggest:
            return
        token = self._token
        if token is None:
            self._record("completion.stale", None)
            return
        try:
            completions = parse_completion_response(response)
        except MalformedResponseError as exc:
            self._record("completion.malformed", token.end, level="warning", reason=str(exc))
            return
        best = rank_completions(token.text, completions, match_whole_word=False)
        snippets = rank_completions(token.text, self.snippets, match_whole_word=True)
        start = token.end if token.is_single_non_word else token.start
        hints = build_hint_list(start, token.end, snippets, best)
        if not hints.entries:
            self._hints = None
            self.presenter.close_hints()
            return
        self._hints = hints
        self.presenter.show_hints(hints)

    def handle_signature(self, response: Any) -> None:
        if self._removed:
            return
        self._clear_signature()
        self.presenter.remove()
        token = self._token
        if not self.options.enable_signatures or token is None:
            return
        labels = _signature_labels(response)
        if not labels:
            return
        self.presenter.show(
            Tooltip((TooltipSection("signature", labels),)),
            self._screen_point(token.start),
        )

    def handle_diagnostic(self, response: Any) -> None:
        if self._removed or not self.options.enable_diagnostics:
            return
        if not isinstance(response, Mapping):
            self._record("diagnostic.malformed", None, level="warning")
            return
        uri = response.get("uri")
        if isinstance(uri, str) and uri != self.connection.get_document_uri():
            return
        diagnostics = response.get("diagnostics")
        if not isinstance(diagnostics, Sequence) or isinstance(diagnostics, str):
            self._record("diagnostic.malformed", None, level="warning")
            return
        with telemetry.span(
            "router::diagnostic",
            logger_name=LOGGER_NAME,
            component="router",
            metadata={"count": len(diagnostics)},
        ) as handle:
            handle.add_metadata("entries", self.diagnostics.publish(diagnostics))
        self.signals.emit("diagnostics", list(diagnostics))

    def handle_go_to(self, response: Any) -> None:
        if self._removed:
            return
        self.presenter.remove()
        if response is None:
            return
        try:
            locations = parse_locations(response)
        except MalformedResponseError as exc:
            self._record("goto.malformed", None, level="warning", reason=str(exc))
            return
        local, external = split_by_document(
            locations, self.connection.get_document_uri()
        )
        if external:
            self.signals.emit("goto.external", external)
        self._highlight([location.range for location in local])
        if local:
            self.surface.scroll_into_view(local[0].range.start)

    def handle_highlight(self, response: Any) -> None:
        if self._removed:
            return
        if response is None:
            response = ()
        if not isinstance(response, Sequence) or isinstance(response, str):
            self._record("highlight.malformed", None, level="warning")
            return
        ranges: List[Range] = []
        for item in response:
            raw = item.get("range") if isinstance(item, Mapping) else None
            try:
                ranges.append(Range.from_lsp(raw))
            except MalformedResponseError:
                continue
        self._highlight(ranges)

    # -- helpers --------------------------------------------------------
    def _screen_point(self, position: Position) -> ScreenPoint:
        coords = self.surface.char_coords(position)
        scroll = self.surface.scroll_offset()
        return ScreenPoint(coords.x - scroll.x, coords.y - scroll.y)

    def _diagnostic_section(
        self, position: Position
    ) -> Optional[tuple[TooltipSection, ScreenPoint]]:
        entries: List[DiagnosticEntry] = self.diagnostics.entries_at(position)
        if not entries:
            return None
        entry = entries[-1]
        section = TooltipSection("diagnostic", tuple(entry.messages))
        return section, self._screen_point(entry.start)

    def _show_diagnostic_only(
        self, diagnostic: Optional[tuple[TooltipSection, ScreenPoint]]
    ) -> None:
        if diagnostic is not None:
            self.presenter.show(Tooltip((diagnostic[0],)), diagnostic[1])

    def _open_link(self, href: str) -> None:
        if not self._removed:
            self.signals.emit("open", href)

    def _clear_hover(self) -> None:
        self._hover_timer.cancel()
        self._hover_pending = False
        self._hover_position = None
        self._clear_hover_mark()
        self.presenter.remove()

    def _clear_hover_mark(self) -> None:
        if self._hover_mark is not None:
            self._hover_mark.clear()
            self._hover_mark = None

    def _clear_signature(self) -> None:
        content = self.presenter.content
        if isinstance(content, Tooltip) and "signature" in content.roles:
            self.presenter.remove()

    def _highlight(self, ranges: Sequence[Range]) -> None:
        self._unhighlight()
        for item in ranges:
            self._highlights.append(
                self.surface.mark_text(item.start, item.end, HIGHLIGHT_CLASS)
            )

    def _unhighlight(self) -> None:
        for mark in self._highlights:
            mark.clear()
        self._highlights = []

    def _record(
        self,
        name: str,
        position: Optional[Position],
        *,
        level: str = "debug",
        **fields: object,
    ) -> None:
        data: dict[str, object] = dict(fields)
        if position is not None:
            data["line"] = position.line
            data["ch"] = position.ch
        telemetry.record_event(name, level=level, data=data, logger_name=LOGGER_NAME)


def _signature_labels(response: Any) -> tuple[str, ...]:
    if not isinstance(response, Mapping):
        return ()
    signatures = response.get("signatures")
    if not isinstance(signatures, Sequence) or isinstance(signatures, str):
        return ()
    return tuple(
        item["label"]
        for item in signatures
        if isinstance(item, Mapping) and isinstance(item.get("label"), str)
    )


__all__ = ["HIGHLIGHT_CLASS", "HOVER_CLASS", "LspEditorAdapter"]

"""Textual app that hosts one document wired to a language server."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use lsp_adapter.adapters.textual.app"
    ) from exc

from lsp_adapter.coordinator import AdapterOptions, LspEditorAdapter
from lsp_adapter.host import LspConnection, PointerEvent
from lsp_adapter.runtime import telemetry

from .surface import LspTextArea, TextualEditorSurface


class LspEditorApp(App[None]):
    """Single editor plus a status line showing diagnostics under the cursor."""

    CSS = """
	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    TIMER_INTERVAL = 0.05

    def __init__(
        self,
        connection: LspConnection,
        *,
        text: str = "",
        language: str | None = None,
        options: AdapterOptions | Mapping[str, Any] | None = None,
        snippets: Iterable[Any] = (),
    ) -> None:
        super().__init__()
        self.connection = connection
        self._text = text
        self._language = language
        self._options = options
        self._snippets = tuple(snippets)
        self.surface: TextualEditorSurface | None = None
        self.adapter: LspEditorAdapter | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield LspTextArea(self._text, language=self._language, id="editor")
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        area = self.query_one("#editor", LspTextArea)
        self.surface = TextualEditorSurface(area)
        self.adapter = LspEditorAdapter(
            self.surface,
            self.connection,
            self._options,
            snippets=self._snippets,
        )
        self.surface.on_hint = self.adapter.pick_hint
        signals = self.adapter.signals
        signals.subscribe("diagnostics", lambda _items: self._update_status())
        signals.subscribe("open", self._open_link)
        signals.subscribe("goto.external", self._report_external)
        self.set_interval(self.TIMER_INTERVAL, self._process_timeouts)
        telemetry.record_event("app.mounted", data={"uri": self.connection.get_document_uri()})
        area.focus()

    def on_unmount(self) -> None:
        if self.adapter is not None:
            self.adapter.remove()
            self.adapter = None

    def _process_timeouts(self) -> None:
        if self.adapter is not None:
            self.adapter.process_timeouts()

    def on_click(self, event: events.Click) -> None:
        if self.surface is None or event.button != 1:
            return
        self.surface.document_bus.emit(
            "click",
            PointerEvent(event.screen_x, event.screen_y, target=event.widget, native=event),
        )

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        self._update_status()

    def _update_status(self) -> None:
        if self.surface is None or self.adapter is None or self._status_widget is None:
            return
        line = self.surface.get_cursor().line
        title: Optional[str] = self.surface.gutter_title(line)
        count = len(self.adapter.diagnostics.entries)
        summary = f"{count} diagnostic{'s' if count != 1 else ''}"
        self._status_widget.update(f"{summary} | {title}" if title else summary)

    def _open_link(self, href: str) -> None:
        self.open_url(href)

    def _report_external(self, locations: Any) -> None:
        for location in locations:
            self.notify(f"{location.uri}:{location.range.start.line + 1}")


__all__ = ["LspEditorApp"]

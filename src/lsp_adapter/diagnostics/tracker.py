"""Snapshot-based diagnostics store.

Every publication replaces the previous one wholesale. Diagnostics sharing an
identical range collapse into one entry (and one underline) carrying all of
their messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Protocol

from lsp_adapter.buffer import Position, Range
from lsp_adapter.errors import MalformedResponseError
from lsp_adapter.runtime import telemetry


class TextMark(Protocol):
    def clear(self) -> None:
        ...


class MarkSurface(Protocol):
    def mark_text(self, start: Position, end: Position, class_name: str) -> TextMark:
        ...

    def set_gutter_marker(self, line: int, title: str) -> TextMark:
        ...


@dataclass(slots=True)
class DiagnosticEntry:
    range: Range
    messages: List[str] = field(default_factory=list)

    @property
    def start(self) -> Position:
        return self.range.start

    @property
    def end(self) -> Position:
        return self.range.end


class DiagnosticsTracker:
    def __init__(
        self,
        surface: MarkSurface,
        *,
        mark_class_name: str,
        gutter_marks: bool,
    ) -> None:
        self._surface = surface
        self.mark_class_name = mark_class_name
        self.gutter_marks = gutter_marks
        self._entries: Dict[Range, DiagnosticEntry] = {}
        self._marks: List[TextMark] = []
        self._gutter: Dict[int, TextMark] = {}
        self._gutter_titles: Dict[int, str] = {}

    @property
    def entries(self) -> tuple[DiagnosticEntry, ...]:
        return tuple(self._entries.values())

    @property
    def mark_count(self) -> int:
        return len(self._marks)

    @property
    def gutter_titles(self) -> Dict[int, str]:
        return dict(self._gutter_titles)

    def publish(self, diagnostics: Iterable[Any]) -> int:
        """Replace all marks with ``diagnostics``; return the entry count."""

        self.clear()
        for diagnostic in diagnostics:
            try:
                diag_range, message = _parse_diagnostic(diagnostic)
            except MalformedResponseError as exc:
                telemetry.record_event(
                    "diagnostic.malformed",
                    level="warning",
                    data={"reason": str(exc)},
                )
                continue
            self._add(diag_range, message)
        return len(self._entries)

    def _add(self, diag_range: Range, message: str) -> None:
        entry = self._entries.get(diag_range)
        if entry is None:
            self._entries[diag_range] = DiagnosticEntry(diag_range, [message])
            self._marks.append(
                self._surface.mark_text(
                    diag_range.start, diag_range.end, self.mark_class_name
                )
            )
        else:
            entry.messages.append(message)

        if self.gutter_marks:
            line = diag_range.start.line
            previous = self._gutter.pop(line, None)
            if previous is not None:
                previous.clear()
            self._gutter[line] = self._surface.set_gutter_marker(line, message)
            self._gutter_titles[line] = message

    def clear(self) -> None:
        for mark in self._marks:
            mark.clear()
        self.clear_gutter()
        self._marks = []
        self._entries = {}

    def clear_gutter(self) -> None:
        for marker in self._gutter.values():
            marker.clear()
        self._gutter = {}
        self._gutter_titles = {}

    def entries_at(self, position: Position) -> List[DiagnosticEntry]:
        return [entry for entry in self._entries.values() if entry.range.touches(position)]


def _parse_diagnostic(payload: Any) -> tuple[Range, str]:
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("diagnostic must be an object", payload=payload)
    message = payload.get("message")
    if not isinstance(message, str):
        raise MalformedResponseError("diagnostic needs a message", payload=payload)
    return Range.from_lsp(payload.get("range")), message


__all__ = ["DiagnosticEntry", "DiagnosticsTracker", "MarkSurface", "TextMark"]

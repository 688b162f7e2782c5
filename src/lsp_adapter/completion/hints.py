"""Hint-list entries shown by the editor's completion popup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from lsprotocol.types import CompletionItemKind

from lsp_adapter.buffer import Position

from .items import CompletionCandidate

CURSOR_MARKER = "$0"

_ICONS: dict[CompletionItemKind, str] = {
    CompletionItemKind.Method: "method",
    CompletionItemKind.Function: "method",
    CompletionItemKind.Constructor: "method",
    CompletionItemKind.Field: "field",
    CompletionItemKind.Variable: "variable",
    CompletionItemKind.Class: "class",
    CompletionItemKind.Struct: "structure",
    CompletionItemKind.Interface: "interface",
    CompletionItemKind.Module: "namespace",
    CompletionItemKind.Property: "property",
    CompletionItemKind.Event: "event",
    CompletionItemKind.Operator: "operator",
    CompletionItemKind.Unit: "ruler",
    CompletionItemKind.Constant: "constant",
    CompletionItemKind.Enum: "enum",
    CompletionItemKind.Value: "enum",
    CompletionItemKind.EnumMember: "enum-member",
    CompletionItemKind.Keyword: "keyword",
    CompletionItemKind.Snippet: "snippet",
    CompletionItemKind.Text: "string",
    CompletionItemKind.Color: "color",
    CompletionItemKind.File: "file",
    CompletionItemKind.Folder: "file",
    CompletionItemKind.Reference: "misc",
    CompletionItemKind.TypeParameter: "parameter",
}


def icon_for_kind(kind: Optional[CompletionItemKind]) -> str:
    if kind is None:
        return "property"
    return _ICONS.get(kind, "property")


@dataclass(frozen=True, slots=True)
class HintEntry:
    text: str
    display_text: str
    icon: str
    description: Optional[str] = None

    @classmethod
    def from_candidate(cls, candidate: CompletionCandidate) -> "HintEntry":
        return cls(
            text=candidate.text,
            display_text=candidate.label,
            icon=f"icon-symbol-{icon_for_kind(candidate.kind)}",
            description=candidate.description,
        )


@dataclass(frozen=True, slots=True)
class HintList:
    start: Position
    end: Position
    entries: tuple[HintEntry, ...]


class HintTarget(Protocol):
    def replace_range(self, text: str, start: Position, end: Position) -> None:
        ...

    def set_cursor(self, position: Position) -> None:
        ...


def build_hint_list(
    start: Position,
    end: Position,
    snippets: Sequence[CompletionCandidate],
    completions: Sequence[CompletionCandidate],
) -> HintList:
    entries = [HintEntry.from_candidate(item) for item in snippets]
    entries.extend(HintEntry.from_candidate(item) for item in completions)
    return HintList(start=start, end=end, entries=tuple(entries))


def apply_hint(target: HintTarget, hints: HintList, entry: HintEntry) -> Position:
    """Insert ``entry`` over the hint range; return the resulting cursor."""

    text = entry.text
    target.replace_range(text.replace(CURSOR_MARKER, ""), hints.start, hints.end)
    marker = text.rfind(CURSOR_MARKER)
    if marker < 0:
        lines = text.split("\n")
    else:
        lines = text[:marker].replace(CURSOR_MARKER, "").split("\n")
    if len(lines) == 1:
        cursor = Position(hints.start.line, hints.start.ch + len(lines[0]))
    else:
        cursor = Position(hints.start.line + len(lines) - 1, len(lines[-1]))
    if marker >= 0:
        target.set_cursor(cursor)
    return cursor


__all__ = [
    "CURSOR_MARKER",
    "HintEntry",
    "HintList",
    "HintTarget",
    "apply_hint",
    "build_hint_list",
    "icon_for_kind",
]

"""Overlay payloads handed to the host for rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from lsprotocol.types import MarkupKind

from lsp_adapter.errors import MalformedResponseError


@dataclass(frozen=True, slots=True)
class HoverText:
    """Hover contents resolved to one string plus its markup flag."""

    text: str
    is_markup: bool = False


def normalize_hover_contents(contents: Any) -> Optional[HoverText]:
    """Collapse the hover ``contents`` union into a single ``HoverText``.

    Accepted shapes: a plain string, ``MarkupContent`` (``{kind, value}``),
    a ``MarkedString`` object (``{language, value}``), or a list of those, in
    which case the first entry wins. Empty contents yield ``None``.
    """

    if contents is None:
        return None
    if isinstance(contents, (list, tuple)):
        if not contents:
            return None
        return normalize_hover_contents(contents[0])
    if isinstance(contents, str):
        return HoverText(contents) if contents else None
    if isinstance(contents, Mapping):
        value = contents.get("value")
        if not isinstance(value, str):
            raise MalformedResponseError(
                "hover contents need a string 'value'", payload=contents
            )
        if not value:
            return None
        kind = contents.get("kind")
        return HoverText(value, is_markup=kind == MarkupKind.Markdown.value)
    raise MalformedResponseError("unsupported hover contents", payload=contents)


@dataclass(frozen=True, slots=True)
class TooltipSection:
    """One block inside a tooltip; ``role`` is diagnostic, hover or signature."""

    role: str
    lines: tuple[str, ...]
    is_markup: bool = False


@dataclass(frozen=True, slots=True)
class Tooltip:
    sections: tuple[TooltipSection, ...]
    on_link: Optional[Callable[[str], None]] = None

    @property
    def roles(self) -> tuple[str, ...]:
        return tuple(section.role for section in self.sections)


@dataclass(frozen=True, slots=True)
class MenuEntry:
    label: str
    action: Callable[[], None]


@dataclass(frozen=True, slots=True)
class ContextMenu:
    entries: tuple[MenuEntry, ...]

    def choose(self, label: str) -> None:
        for entry in self.entries:
            if entry.label == label:
                entry.action()
                return
        raise KeyError(f"No menu entry labelled '{label}'")


OverlayContent = Union[Tooltip, ContextMenu]

__all__ = [
    "ContextMenu",
    "HoverText",
    "MenuEntry",
    "OverlayContent",
    "Tooltip",
    "TooltipSection",
    "normalize_hover_contents",
]

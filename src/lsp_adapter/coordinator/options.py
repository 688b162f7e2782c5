"""Adapter configuration snapshot."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from lsp_adapter.host.surface import PointerEvent
from lsp_adapter.overlay import MenuEntry

ContextMenuProvider = Callable[[PointerEvent, Sequence[MenuEntry]], None]

_CAMEL_ALIASES = {
    "enableHoverInfo": "enable_hover_info",
    "enableDiagnostics": "enable_diagnostics",
    "enableSignatures": "enable_signatures",
    "enableGutterMarks": "enable_gutter_marks",
    "enableContextMenu": "enable_context_menu",
    "debounceSuggestionsWhileTyping": "debounce_suggestions_while_typing",
    "quickSuggestionsDelay": "quick_suggestions_delay",
    "diagnosticMarkClassName": "diagnostic_mark_class_name",
    "contextMenuProvider": "context_menu_provider",
}


@dataclass(frozen=True, slots=True)
class AdapterOptions:
    enable_hover_info: bool = True
    enable_diagnostics: bool = True
    enable_signatures: bool = True
    enable_gutter_marks: bool = True
    enable_context_menu: bool = True
    suggest: bool = True
    debounce_suggestions_while_typing: int = 200
    quick_suggestions_delay: int = 200
    diagnostic_mark_class_name: str = "lsp-diagnostic"
    context_menu_provider: Optional[ContextMenuProvider] = None

    def __post_init__(self) -> None:
        for name in ("debounce_suggestions_while_typing", "quick_suggestions_delay"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer (ms)")
        if self.context_menu_provider is not None and not callable(
            self.context_menu_provider
        ):
            raise TypeError("context_menu_provider must be callable")

    @classmethod
    def fill_defaults(
        cls, options: Union["AdapterOptions", Mapping[str, Any], None] = None
    ) -> "AdapterOptions":
        """Start from defaults and replace whatever ``options`` provides."""

        if options is None:
            return cls()
        if isinstance(options, AdapterOptions):
            return options
        return cls(**_normalize_keys(options))

    def merged(self, **changes: Any) -> "AdapterOptions":
        return replace(self, **_normalize_keys(changes))


_FIELD_NAMES = frozenset(field.name for field in fields(AdapterOptions))


def _normalize_keys(options: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        name = _CAMEL_ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            raise ValueError(f"Unknown adapter option '{key}'")
        normalized[name] = value
    return normalized


__all__ = ["AdapterOptions", "ContextMenuProvider"]

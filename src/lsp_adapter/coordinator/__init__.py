"""Wires an editor surface to a language-server connection."""

from .context_menu import (
    FIND_REFERENCES,
    GO_TO_DEFINITION,
    GO_TO_TYPE_DEFINITION,
    build_menu_entries,
)
from .navigation import Location, parse_location, parse_locations, split_by_document
from .options import AdapterOptions, ContextMenuProvider
from .router import HIGHLIGHT_CLASS, HOVER_CLASS, LspEditorAdapter

__all__ = [
    "AdapterOptions",
    "ContextMenuProvider",
    "FIND_REFERENCES",
    "GO_TO_DEFINITION",
    "GO_TO_TYPE_DEFINITION",
    "HIGHLIGHT_CLASS",
    "HOVER_CLASS",
    "Location",
    "LspEditorAdapter",
    "build_menu_entries",
    "parse_location",
    "parse_locations",
    "split_by_document",
]

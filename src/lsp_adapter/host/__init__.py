"""Contracts for the two collaborators the adapter drives."""

from .connection import CONNECTION_EVENTS, LspConnection
from .surface import DOCUMENT_EVENTS, EDITOR_EVENTS, EditorSurface, PointerEvent

__all__ = [
    "CONNECTION_EVENTS",
    "DOCUMENT_EVENTS",
    "EDITOR_EVENTS",
    "EditorSurface",
    "LspConnection",
    "PointerEvent",
]

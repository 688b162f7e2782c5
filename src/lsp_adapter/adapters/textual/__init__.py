"""Textual host: a ``TextArea`` that speaks the editor surface contract."""

from .app import LspEditorApp
from .surface import LspTextArea, TextualEditorSurface

__all__ = ["LspEditorApp", "LspTextArea", "TextualEditorSurface"]

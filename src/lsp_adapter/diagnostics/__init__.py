"""Diagnostic range tracking, underline marks, and gutter markers."""

from .tracker import DiagnosticEntry, DiagnosticsTracker, MarkSurface, TextMark

__all__ = ["DiagnosticEntry", "DiagnosticsTracker", "MarkSurface", "TextMark"]

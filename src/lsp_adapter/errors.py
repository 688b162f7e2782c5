"""Errors raised at the protocol boundary."""

from __future__ import annotations


class MalformedResponseError(ValueError):
    """Raised when a server payload does not have the expected shape.

    The router catches this on every response path and leaves the UI
    untouched; it never escapes the adapter.
    """

    def __init__(self, message: str, *, payload: object | None = None) -> None:
        super().__init__(message)
        self.payload = payload


__all__ = ["MalformedResponseError"]

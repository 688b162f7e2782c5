"""UI-agnostic bridge between editor interaction and a language server."""

__all__ = [
    "adapters",
    "buffer",
    "completion",
    "coordinator",
    "diagnostics",
    "host",
    "overlay",
    "runtime",
]

__version__ = "0.1.0"

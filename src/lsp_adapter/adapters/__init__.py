"""Concrete editor hosts for the adapter."""

__all__ = ["textual"]

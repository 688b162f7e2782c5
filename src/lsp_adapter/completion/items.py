"""Normalized completion candidates built from server or snippet payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from lsprotocol.types import CompletionItemKind

from lsp_adapter.errors import MalformedResponseError


@dataclass(frozen=True, slots=True)
class CompletionCandidate:
    label: str
    filter_text: Optional[str] = None
    insert_text: Optional[str] = None
    kind: Optional[CompletionItemKind] = None
    description: Optional[str] = None

    @classmethod
    def from_lsp(cls, payload: Any) -> "CompletionCandidate":
        if isinstance(payload, CompletionCandidate):
            return payload
        if not isinstance(payload, Mapping):
            raise MalformedResponseError(
                "completion item must be an object", payload=payload
            )
        label = payload.get("label")
        if not isinstance(label, str):
            raise MalformedResponseError(
                "completion item needs a string label", payload=payload
            )
        return cls(
            label=label,
            filter_text=_optional_str(payload.get("filterText")),
            insert_text=_optional_str(payload.get("insertText")),
            kind=_kind(payload.get("kind")),
            description=_label_details(payload.get("labelDetails")),
        )

    @property
    def text(self) -> str:
        return self.insert_text or self.label


def parse_completion_response(payload: Any) -> list[CompletionCandidate]:
    """Accept ``CompletionItem[]`` or a ``CompletionList``; skip broken items."""

    if payload is None:
        return []
    if isinstance(payload, Mapping):
        items = payload.get("items")
        if items is None:
            raise MalformedResponseError(
                "completion list is missing 'items'", payload=payload
            )
        payload = items
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Iterable):
        raise MalformedResponseError(
            "completion response must be a list", payload=payload
        )
    candidates: list[CompletionCandidate] = []
    for item in payload:
        try:
            candidates.append(CompletionCandidate.from_lsp(item))
        except MalformedResponseError:
            continue
    return candidates


def _optional_str(value: object) -> Optional[str]:
    return value if isinstance(value, str) else None


def _kind(value: object) -> Optional[CompletionItemKind]:
    if isinstance(value, CompletionItemKind):
        return value
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    try:
        return CompletionItemKind(value)
    except ValueError:
        return None


def _label_details(value: object) -> Optional[str]:
    if isinstance(value, str):
        return value or None
    if isinstance(value, Mapping):
        parts = [
            part
            for part in (value.get("detail"), value.get("description"))
            if isinstance(part, str) and part
        ]
        return " ".join(parts) or None
    return None


__all__ = ["CompletionCandidate", "parse_completion_response"]

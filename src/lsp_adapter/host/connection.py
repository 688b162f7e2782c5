"""Language-server connection contract.

Requests are fire-and-forget. Responses come back later as events keyed by
kind (``hover``, ``completion``, ...), never by request id, and in no
guaranteed order.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from lsprotocol.types import CompletionTriggerKind

from lsp_adapter.buffer import Position, TokenInfo
from lsp_adapter.runtime import Disposer

CONNECTION_EVENTS = (
    "hover",
    "completion",
    "signature",
    "diagnostic",
    "goTo",
    "highlight",
)


class LspConnection(Protocol):
    def on(self, event: str, callback: Callable[..., Any]) -> Disposer:
        ...

    def send_change(self) -> None:
        ...

    def get_hover_tooltip(self, position: Position) -> None:
        ...

    def get_completion(
        self,
        position: Position,
        token: Optional[TokenInfo],
        trigger_character: str,
        trigger_kind: CompletionTriggerKind,
    ) -> None:
        ...

    def get_signature_help(self, position: Position) -> None:
        ...

    def get_definition(self, position: Position) -> None:
        ...

    def get_type_definition(self, position: Position) -> None:
        ...

    def get_references(self, position: Position) -> None:
        ...

    def is_definition_supported(self) -> bool:
        ...

    def is_type_definition_supported(self) -> bool:
        ...

    def is_references_supported(self) -> bool:
        ...

    def get_language_completion_characters(self) -> Sequence[str]:
        ...

    def get_language_signature_characters(self) -> Sequence[str]:
        ...

    def get_document_uri(self) -> str:
        ...


__all__ = ["CONNECTION_EVENTS", "LspConnection"]

"""Navigation entries offered on right-click."""

from __future__ import annotations

from typing import Callable, Optional

from lsp_adapter.buffer import Position
from lsp_adapter.host import LspConnection
from lsp_adapter.overlay import MenuEntry

GO_TO_DEFINITION = "Go to Definition"
GO_TO_TYPE_DEFINITION = "Go to Type Definition"
FIND_REFERENCES = "Find all References"


def build_menu_entries(
    connection: LspConnection,
    position: Position,
    *,
    on_chosen: Optional[Callable[[], None]] = None,
) -> list[MenuEntry]:
    """Entries for every supported capability; empty when none is supported."""

    def action(request: Callable[[Position], None]) -> Callable[[], None]:
        def run() -> None:
            request(position)
            if on_chosen is not None:
                on_chosen()

        return run

    entries: list[MenuEntry] = []
    if connection.is_definition_supported():
        entries.append(MenuEntry(GO_TO_DEFINITION, action(connection.get_definition)))
    if connection.is_type_definition_supported():
        entries.append(
            MenuEntry(GO_TO_TYPE_DEFINITION, action(connection.get_type_definition))
        )
    if connection.is_references_supported():
        entries.append(MenuEntry(FIND_REFERENCES, action(connection.get_references)))
    return entries


__all__ = [
    "FIND_REFERENCES",
    "GO_TO_DEFINITION",
    "GO_TO_TYPE_DEFINITION",
    "build_menu_entries",
]

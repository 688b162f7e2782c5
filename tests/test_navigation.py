import pytest

from conftest import FakeConnection
from lsp_adapter.buffer import Position, Range
from lsp_adapter.coordinator import (
    FIND_REFERENCES,
    GO_TO_DEFINITION,
    GO_TO_TYPE_DEFINITION,
    Location,
    build_menu_entries,
    parse_location,
    parse_locations,
    split_by_document,
)
from lsp_adapter.errors import MalformedResponseError

LSP_RANGE = {
    "start": {"line": 1, "character": 0},
    "end": {"line": 1, "character": 4},
}


def make_location(uri: str, line: int = 1) -> Location:
    return Location(uri, Range(Position(line, 0), Position(line, 4)))


def test_parse_location_and_location_link() -> None:
    plain = parse_location({"uri": "file:///a.py", "range": LSP_RANGE})
    link = parse_location(
        {"targetUri": "file:///a.py", "targetRange": LSP_RANGE, "originSelectionRange": LSP_RANGE}
    )

    assert plain == link == make_location("file:///a.py")


def test_parse_locations_accepts_single_list_and_null() -> None:
    single = {"uri": "file:///a.py", "range": LSP_RANGE}

    assert parse_locations(None) == []
    assert parse_locations(single) == [make_location("file:///a.py")]
    assert parse_locations([single, single]) == [make_location("file:///a.py")] * 2


@pytest.mark.parametrize(
    "payload",
    ["file:///a.py", 3, [{"range": LSP_RANGE}], [{"uri": "file:///a.py"}]],
)
def test_parse_locations_rejects_malformed(payload: object) -> None:
    with pytest.raises(MalformedResponseError):
        parse_locations(payload)


def test_split_by_document_preserves_order() -> None:
    locations = [
        make_location("file:///b.py", 1),
        make_location("file:///a.py", 2),
        make_location("file:///a.py", 3),
    ]

    local, external = split_by_document(locations, "file:///a.py")

    assert [loc.range.start.line for loc in local] == [2, 3]
    assert [loc.uri for loc in external] == ["file:///b.py"]


def test_menu_entries_follow_capabilities() -> None:
    connection = FakeConnection(type_definition=False)
    closed: list[bool] = []

    entries = build_menu_entries(
        connection, Position(2, 3), on_chosen=lambda: closed.append(True)
    )

    assert [entry.label for entry in entries] == [GO_TO_DEFINITION, FIND_REFERENCES]
    entries[1].action()
    assert connection.calls == [("references", Position(2, 3))]
    assert closed == [True]


def test_menu_entries_all_capabilities() -> None:
    entries = build_menu_entries(FakeConnection(), Position(0, 0))

    assert [entry.label for entry in entries] == [
        GO_TO_DEFINITION,
        GO_TO_TYPE_DEFINITION,
        FIND_REFERENCES,
    ]
    assert build_menu_entries(
        FakeConnection(definition=False, type_definition=False, references=False),
        Position(0, 0),
    ) == []

import pytest

from lsp_adapter.buffer import (
    Position,
    PositionError,
    Range,
    TokenInfo,
    is_word_character,
    token_ending_at,
)
from lsp_adapter.errors import MalformedResponseError


def make_range(start: tuple[int, int], end: tuple[int, int]) -> Range:
    return Range(Position(*start), Position(*end))


def test_token_after_word_stops_at_split_character() -> None:
    token = token_ending_at("a.b", Position(0, 3), {"."})

    assert token == TokenInfo(text="b", start=Position(0, 2), end=Position(0, 3))


def test_split_character_before_cursor_is_its_own_token() -> None:
    token = token_ending_at("a.b", Position(0, 2), {"."})

    assert token == TokenInfo(text=".", start=Position(0, 1), end=Position(0, 2))
    assert token.is_single_non_word


def test_token_scans_back_over_the_whole_word() -> None:
    token = token_ending_at("x = value_1", Position(0, 11), {"."})

    assert token.text == "value_1"
    assert token.start == Position(0, 4)
    assert not token.is_single_non_word


def test_token_on_a_later_line() -> None:
    token = token_ending_at("first\n  sec", Position(1, 5), [])

    assert token.text == "sec"
    assert token.start == Position(1, 2)
    assert token.end == Position(1, 5)


def test_token_after_punctuation_is_empty() -> None:
    token = token_ending_at("call(", Position(0, 5), {"."})

    assert token.text == ""
    assert token.start == token.end == Position(0, 5)


def test_token_at_line_start_is_empty() -> None:
    token = token_ending_at("abc", Position(0, 0), {"."})

    assert token.text == ""


def test_token_rejects_cursor_outside_buffer() -> None:
    with pytest.raises(PositionError) as excinfo:
        token_ending_at("abc", Position(0, 7), {"."})

    assert excinfo.value.position == Position(0, 7)

    with pytest.raises(PositionError):
        token_ending_at("abc", Position(3, 0), {"."})


def test_word_character_classification() -> None:
    assert is_word_character("a")
    assert is_word_character("_")
    assert is_word_character("7")
    assert not is_word_character(".")
    assert not is_word_character(" ")
    assert not is_word_character("")


def test_position_from_lsp_round_trip() -> None:
    position = Position.from_lsp({"line": 4, "character": 2})

    assert position == Position(4, 2)
    assert position.to_lsp() == {"line": 4, "character": 2}


@pytest.mark.parametrize(
    "payload",
    [None, {"line": 1}, {"line": -1, "character": 0}, {"line": True, "character": 0}],
)
def test_position_from_lsp_rejects_malformed(payload: object) -> None:
    with pytest.raises(MalformedResponseError) as excinfo:
        Position.from_lsp(payload)

    assert excinfo.value.payload == payload


def test_range_from_lsp() -> None:
    payload = {
        "start": {"line": 0, "character": 1},
        "end": {"line": 0, "character": 4},
    }

    assert Range.from_lsp(payload) == make_range((0, 1), (0, 4))
    assert Range.from_lsp(payload).to_lsp() == payload


def test_range_contains_on_line_requires_single_line() -> None:
    single = make_range((2, 3), (2, 8))
    multi = make_range((2, 3), (3, 8))

    assert single.contains_on_line(Position(2, 3))
    assert single.contains_on_line(Position(2, 8))
    assert not single.contains_on_line(Position(2, 9))
    assert not multi.contains_on_line(Position(2, 5))


def test_range_touches_either_boundary_line() -> None:
    multi = make_range((2, 3), (4, 8))

    assert multi.touches(Position(2, 5))
    assert multi.touches(Position(4, 5))
    assert not multi.touches(Position(3, 5))
    assert not multi.touches(Position(2, 9))

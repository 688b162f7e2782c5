"""Find the word (or trigger character) that ends at the cursor."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Collection

from .positions import Position
from .validation import ensure_position

NON_WORD = re.compile(r"\W")


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """Substring being completed plus its span; ``end`` is always the cursor."""

    text: str
    start: Position
    end: Position

    @property
    def is_single_non_word(self) -> bool:
        return len(self.text) == 1 and NON_WORD.match(self.text) is not None


def is_word_character(char: str) -> bool:
    return bool(char) and NON_WORD.match(char) is None


def token_ending_at(
    text: str, position: Position, split_characters: Collection[str]
) -> TokenInfo:
    """Return the token ending at ``position`` in ``text``.

    A split character right before the cursor is a token on its own. Otherwise
    the token is the run of word characters ending at the cursor, which may be
    empty when the preceding character is punctuation or whitespace.
    """

    lines = text.split("\n")
    ensure_position(lines, position)
    line = lines[position.line]
    if position.ch == 0:
        return TokenInfo(text="", start=position, end=position)

    typed = line[position.ch - 1]
    if typed in split_characters:
        return TokenInfo(
            text=typed,
            start=Position(position.line, position.ch - 1),
            end=position,
        )

    start = position.ch
    while start > 0 and is_word_character(line[start - 1]):
        start -= 1
    return TokenInfo(
        text=line[start : position.ch],
        start=Position(position.line, start),
        end=position,
    )


__all__ = ["NON_WORD", "TokenInfo", "is_word_character", "token_ending_at"]

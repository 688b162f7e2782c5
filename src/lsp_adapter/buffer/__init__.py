"""Buffer coordinates and token extraction."""

from .positions import Position, Range, ScreenPoint, Size
from .tokens import NON_WORD, TokenInfo, is_word_character, token_ending_at
from .validation import PositionError, ensure_position

__all__ = [
    "Position",
    "Range",
    "ScreenPoint",
    "Size",
    "TokenInfo",
    "NON_WORD",
    "is_word_character",
    "token_ending_at",
    "PositionError",
    "ensure_position",
]

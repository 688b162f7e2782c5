"""Prefix filtering and ordering of completion candidates."""

from __future__ import annotations

import re
from typing import Sequence

from .items import CompletionCandidate

_NON_WORD_RUN = re.compile(r"\W+")


def rank_completions(
    prefix: str,
    candidates: Sequence[CompletionCandidate] | None,
    *,
    match_whole_word: bool,
) -> list[CompletionCandidate]:
    """Filter ``candidates`` against the first word of ``prefix``.

    ``match_whole_word`` is true for static snippets and false for server
    results, so a server item whose label equals what is already typed is
    suppressed while an identical snippet stays visible. Items whose label
    starts with the word are moved ahead of items that only matched through
    their filter text; the order is otherwise preserved.
    """

    first_word = _NON_WORD_RUN.split(prefix)[0]
    if _NON_WORD_RUN.search(first_word) or not candidates:
        return []
    word = first_word.lower()
    kept = [item for item in candidates if _keep(item, word, match_whole_word)]
    return sorted(kept, key=lambda item: not item.label.lower().startswith(word))


def _keep(item: CompletionCandidate, word: str, match_whole_word: bool) -> bool:
    label = item.label.lower()
    if item.filter_text and item.filter_text.lower().startswith(word):
        return True
    if not match_whole_word and label == word:
        return False
    return label.startswith(word)


__all__ = ["rank_completions"]

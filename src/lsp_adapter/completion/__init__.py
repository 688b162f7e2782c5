"""Completion candidates, ranking, and hint-list construction."""

from .hints import HintEntry, HintList, apply_hint, build_hint_list, icon_for_kind
from .items import CompletionCandidate, parse_completion_response
from .ranker import rank_completions

__all__ = [
    "CompletionCandidate",
    "parse_completion_response",
    "rank_completions",
    "HintEntry",
    "HintList",
    "apply_hint",
    "build_hint_list",
    "icon_for_kind",
]

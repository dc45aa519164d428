"""Backends that translate or evaluate compiled search plans.

- ``sqlite``: parameterised SQL over the record store schema.
- ``memory``: direct evaluation against ``Record`` objects.
"""

from __future__ import annotations

from FuzzySearch.backends.memory import evaluate, like_match, score, search_records
from FuzzySearch.backends.sqlite import SqlQuery, compile_ranking, compile_select, compile_where

__all__ = [
    "SqlQuery",
    "compile_ranking",
    "compile_select",
    "compile_where",
    "evaluate",
    "like_match",
    "score",
    "search_records",
]

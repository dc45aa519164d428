"""In-memory evaluation of search plans against ``Record`` objects.

Matching folds ASCII letters only, like the default LIKE of the SQLite
backend: ``Tower`` matches ``TOWER`` but fullwidth or accented letters
match only their own case.
"""

from __future__ import annotations

import string
from datetime import datetime, timezone
from typing import Iterable, Sequence

from FuzzySearch.core.models import BODY, EXCERPT, META, TITLE, FieldSet, Record, SearchHit
from FuzzySearch.core.query import (
    And,
    Contains,
    Not,
    Or,
    PatternVariant,
    Predicate,
    RankingExpression,
    SearchPlan,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold_ascii(text: str) -> str:
    return text.translate(_ASCII_FOLD)


def like_match(pattern: PatternVariant, text: str) -> bool:
    """Return True if ``text`` matches ``pattern``.

    Non-anchored patterns require every segment to occur in order, without
    overlap. Anchored patterns require equality.
    """
    haystack = fold_ascii(text)
    if pattern.anchored:
        return haystack == fold_ascii(pattern.segments[0])
    pos = 0
    for segment in pattern.segments:
        needle = fold_ascii(segment)
        found = haystack.find(needle, pos)
        if found < 0:
            return False
        pos = found + len(needle)
    return True


def field_values(record: Record, field: str, meta_keys: Sequence[str] = ()) -> list[str]:
    """Return the texts a field test looks at for ``record``."""
    if field == TITLE:
        return [record.title]
    if field == EXCERPT:
        return [record.excerpt]
    if field == BODY:
        return [record.body]
    if field == META:
        keys = meta_keys or tuple(record.meta.keys())
        return [value for key in keys for value in record.meta.get(key, ())]
    raise ValueError(f"Unsupported field: {field}")


def _leaf_matches(leaf: Contains, record: Record, meta_keys: Sequence[str]) -> bool:
    return any(like_match(leaf.pattern, value) for value in field_values(record, leaf.field, meta_keys))


def evaluate(predicate: Predicate, record: Record, meta_keys: Sequence[str] = ()) -> bool:
    """Evaluate a predicate tree against one record.

    A META leaf holds if any metadata value under ``meta_keys`` (any key
    when empty) matches; its negation holds if none does.
    """
    if isinstance(predicate, Contains):
        return _leaf_matches(predicate, record, meta_keys)
    if isinstance(predicate, Not):
        return not evaluate(predicate.child, record, meta_keys)
    if isinstance(predicate, And):
        return all(evaluate(child, record, meta_keys) for child in predicate.children)
    if isinstance(predicate, Or):
        return any(evaluate(child, record, meta_keys) for child in predicate.children)
    raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")


def score(ranking: RankingExpression | None, record: Record, meta_keys: Sequence[str] = ()) -> int:
    """Count the ranking leaves ``record`` satisfies (0 without ranking)."""
    if ranking is None:
        return 0
    return sum(1 for leaf in ranking.leaves if _leaf_matches(leaf, record, meta_keys))


def search_records(
    plan: SearchPlan,
    records: Iterable[Record],
    fields: FieldSet,
    *,
    target_types: Sequence[str] = (),
    include_protected: bool = False,
) -> list[SearchHit]:
    """Filter and order records the way the SQLite backend does.

    Ordering: records whose title contains a title pattern first, then by
    rank descending, then newest first, then by id.
    """
    hits: list[SearchHit] = []
    for record in records:
        if target_types and record.type not in target_types:
            continue
        if record.protected and not include_protected:
            continue
        if not evaluate(plan.predicate, record, fields.meta_keys):
            continue
        hits.append(SearchHit(record=record, rank=score(plan.ranking, record, fields.meta_keys)))

    def sort_key(hit: SearchHit) -> tuple[int, int, float, int]:
        title_first = 0
        if plan.title_patterns and not any(like_match(p, hit.record.title) for p in plan.title_patterns):
            title_first = 1
        published = hit.record.published or _EPOCH
        if published.tzinfo is None:
            published = published.replace(tzinfo=timezone.utc)
        return (title_first, -hit.rank, -published.timestamp(), hit.record.id or 0)

    return sorted(hits, key=sort_key)

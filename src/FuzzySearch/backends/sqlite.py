"""SQLite query compiler.

Translates a ``SearchPlan`` into a parameterised ``SELECT`` over the
record store schema (see ``FuzzySearch.storage.db``).

Mapping
- TITLE   -> r.title
- EXCERPT -> r.excerpt
- BODY    -> r.body
- META    -> EXISTS (SELECT 1 FROM record_meta m WHERE m.record_id = r.id
             [AND m.meta_key IN (...)] AND m.meta_value LIKE ?)

Metadata is tested with a correlated sub-query instead of a join so a
record with several metadata rows is neither multiplied in the result nor
dropped when it has none, and no GROUP BY is needed.

Every pattern segment is escaped for LIKE (``\\`` is the escape
character), so user input containing ``%`` or ``_`` matches literally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from FuzzySearch.core.models import BODY, EXCERPT, META, TITLE, FieldSet
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

_COLUMNS: dict[str, str] = {
    TITLE: "r.title",
    EXCERPT: "r.excerpt",
    BODY: "r.body",
}

RECORD_COLUMNS = "r.id, r.type, r.title, r.excerpt, r.body, r.password, r.published_at"
MATCH_COUNT_COLUMN = "match_count"


@dataclass(frozen=True, slots=True)
class SqlQuery:
    """SQL text with its positional parameters."""

    sql: str
    params: tuple[Any, ...]


def escape_like(text: str) -> str:
    """Escape LIKE metacharacters in a literal segment."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def like_value(pattern: PatternVariant) -> str:
    """Render a pattern as a LIKE operand."""
    if pattern.anchored:
        return escape_like(pattern.segments[0])
    if pattern.matches_all:
        return "%"
    return "%" + "%".join(escape_like(s) for s in pattern.segments) + "%"


def _compile_leaf(leaf: Contains, meta_keys: Sequence[str], params: list[Any]) -> str:
    if leaf.field == META:
        sql = "EXISTS (SELECT 1 FROM record_meta m WHERE m.record_id = r.id"
        if meta_keys:
            sql += " AND m.meta_key IN (" + ", ".join("?" for _ in meta_keys) + ")"
            params.extend(meta_keys)
        params.append(like_value(leaf.pattern))
        return sql + " AND m.meta_value LIKE ? ESCAPE '\\')"

    column = _COLUMNS.get(leaf.field)
    if column is None:
        raise ValueError(f"Unsupported field for SQLite: {leaf.field}")
    params.append(like_value(leaf.pattern))
    return f"({column} LIKE ? ESCAPE '\\')"


def _compile_node(node: Predicate, meta_keys: Sequence[str], params: list[Any]) -> str:
    if isinstance(node, Contains):
        return _compile_leaf(node, meta_keys, params)
    if isinstance(node, Not):
        return "NOT " + _compile_node(node.child, meta_keys, params)
    if isinstance(node, And):
        if not node.children:
            return "1"
        return "(" + " AND ".join(_compile_node(c, meta_keys, params) for c in node.children) + ")"
    if isinstance(node, Or):
        if not node.children:
            return "0"
        return "(" + " OR ".join(_compile_node(c, meta_keys, params) for c in node.children) + ")"
    raise TypeError(f"Unsupported predicate node: {type(node).__name__}")


def compile_where(predicate: Predicate, fields: FieldSet) -> SqlQuery:
    """Compile a predicate into a WHERE condition.

    Args:
        predicate: Predicate tree.
        fields: Field set the predicate was built for; supplies META keys.

    Returns:
        Condition SQL (no ``WHERE`` keyword) and its parameters.
    """
    params: list[Any] = []
    sql = _compile_node(predicate, fields.meta_keys, params)
    return SqlQuery(sql=sql, params=tuple(params))


def compile_ranking(ranking: RankingExpression | None, fields: FieldSet) -> SqlQuery:
    """Compile a ranking expression into a match-count column expression."""
    if ranking is None or not ranking.leaves:
        return SqlQuery(sql="0", params=())
    params: list[Any] = []
    parts = [_compile_leaf(leaf, fields.meta_keys, params) for leaf in ranking.leaves]
    return SqlQuery(sql="(" + " + ".join(parts) + ")", params=tuple(params))


def compile_select(
    plan: SearchPlan,
    fields: FieldSet,
    *,
    target_types: Sequence[str] = (),
    include_protected: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> SqlQuery:
    """Compile a full search ``SELECT``.

    Args:
        plan: Compiled search plan.
        fields: Field set the plan was built for.
        target_types: Restrict to these record types; empty means any.
        include_protected: Include password-protected records.
        limit: Maximum rows, None for no limit.
        offset: Rows to skip.

    Returns:
        Query selecting ``RECORD_COLUMNS`` plus ``match_count``.
    """
    ranking = compile_ranking(plan.ranking, fields)
    where = compile_where(plan.predicate, fields)

    params: list[Any] = list(ranking.params)
    conditions = [where.sql]
    params.extend(where.params)
    if target_types:
        conditions.append("r.type IN (" + ", ".join("?" for _ in target_types) + ")")
        params.extend(target_types)
    if not include_protected:
        conditions.append("r.password = ''")

    order: list[str] = []
    if plan.title_patterns:
        tests = " OR ".join("r.title LIKE ? ESCAPE '\\'" for _ in plan.title_patterns)
        order.append(f"CASE WHEN {tests} THEN 0 ELSE 1 END")
        params.extend(like_value(p) for p in plan.title_patterns)
    if plan.ranking is not None:
        order.append(f"{MATCH_COUNT_COLUMN} DESC")
    order.extend(["r.published_at DESC", "r.id"])

    sql = (
        f"SELECT {RECORD_COLUMNS}, {ranking.sql} AS {MATCH_COUNT_COLUMN} "
        "FROM records r "
        f"WHERE {' AND '.join(conditions)} "
        f"ORDER BY {', '.join(order)}"
    )
    if limit is not None:
        sql += " LIMIT ? OFFSET ?"
        params.extend((limit, offset))
    return SqlQuery(sql=sql, params=tuple(params))

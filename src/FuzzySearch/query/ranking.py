"""Relevance ranking signal for expanded queries."""

from __future__ import annotations

from FuzzySearch.core.query import Predicate, RankingExpression, iter_leaves


def ranking_expression(predicate: Predicate) -> RankingExpression:
    """Collect the positive leaves of a predicate as a match-count signal.

    Negated leaves (excluded terms) are left out: a record that passes the
    predicate satisfies all of them, so they add nothing to the ordering.

    Args:
        predicate: Compiled predicate tree.

    Returns:
        Ranking expression over the positive leaves, in tree order.
    """
    return RankingExpression(
        leaves=tuple(leaf for leaf, negated in iter_leaves(predicate) if not negated)
    )

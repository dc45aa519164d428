"""Query compilation: term parsing, bigram expansion, predicate building."""

from __future__ import annotations

from typing import Iterable

from FuzzySearch.core.models import FieldSet
from FuzzySearch.core.query import SearchPlan
from FuzzySearch.query.builder import build_predicate
from FuzzySearch.query.expand import expand_term, fragments, is_expandable
from FuzzySearch.query.ranking import ranking_expression
from FuzzySearch.query.terms import DEFAULT_EXCLUSION_PREFIX, parse_term, parse_terms


def compile_query(
    tokens: Iterable[str],
    fields: FieldSet,
    *,
    exact: bool = False,
    expand: bool = False,
    exclusion_prefix: str = DEFAULT_EXCLUSION_PREFIX,
) -> SearchPlan:
    """Parse host tokens and build their search plan in one step."""
    terms = parse_terms(tokens, exclusion_prefix)
    return build_predicate(terms, fields, exact=exact, expand=expand)


__all__ = [
    "DEFAULT_EXCLUSION_PREFIX",
    "build_predicate",
    "compile_query",
    "expand_term",
    "fragments",
    "is_expandable",
    "parse_term",
    "parse_terms",
    "ranking_expression",
]

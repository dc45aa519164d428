"""Predicate builder.

Compiles parsed search terms into a ``SearchPlan``:

- Literal mode (``expand=False``): every term is one group. A normal term
  matches if any field contains it; an excluded term matches if no field
  contains it (``NOT (a OR b)`` written as ``NOT a AND NOT b``).
- Expansion mode (``expand=True``): a normal term is split into sub-terms,
  each sub-term into pattern variants, and the term matches if any
  ``variant x field`` pair does. Excluded terms stay literal. With
  ``exact``, sub-terms too short or too long to expand are matched whole.
  Expanded sub-terms ignore ``exact``.

Term groups are always combined with AND.
"""

from __future__ import annotations

from typing import Sequence

from FuzzySearch.core.models import FieldSet, RawTerm
from FuzzySearch.core.query import And, Contains, Not, Or, PatternVariant, Predicate, SearchPlan
from FuzzySearch.query.expand import expand_term, is_expandable
from FuzzySearch.query.ranking import ranking_expression
from FuzzySearch.text.segment import split_term
from FuzzySearch.utils.log import log


def _any_field(fields: FieldSet, variants: Sequence[PatternVariant]) -> Or:
    return Or(tuple(Contains(f, v) for v in variants for f in fields.fields))


def _no_field(fields: FieldSet, pattern: PatternVariant) -> And:
    return And(tuple(Not(Contains(f, pattern)) for f in fields.fields))


def _literal_group(term: RawTerm, fields: FieldSet, *, exact: bool) -> Predicate:
    if term.excluded:
        return _no_field(fields, PatternVariant.literal(term.text))
    return _any_field(fields, [PatternVariant.literal(term.text, anchored=exact)])


def _subterm_variants(subterm: str, *, exact: bool) -> list[PatternVariant]:
    if exact and not is_expandable(subterm):
        return [PatternVariant.literal(subterm, anchored=True)]
    return expand_term(subterm)


def _expanded_group(term: RawTerm, fields: FieldSet, *, exact: bool) -> Predicate | None:
    if term.excluded:
        return _no_field(fields, PatternVariant.literal(term.text))
    subterms = split_term(term.text)
    if not subterms:
        return None
    groups = tuple(_any_field(fields, _subterm_variants(sub, exact=exact)) for sub in subterms)
    if len(groups) == 1:
        return groups[0]
    return Or(groups)


def build_predicate(
    terms: Sequence[RawTerm],
    fields: FieldSet,
    *,
    exact: bool = False,
    expand: bool = False,
) -> SearchPlan:
    """Compile terms into a search plan.

    Args:
        terms: Parsed terms, in query order.
        fields: Fields to match against.
        exact: Match whole field values instead of substrings. Applies to
            non-excluded terms; in expansion mode only to sub-terms that
            are not expanded.
        expand: Enable segmentation and bigram expansion.

    Returns:
        Plan whose predicate ANDs one group per usable term. The ranking
        expression is present in expansion mode; title patterns are
        collected in literal, non-exact mode.
    """
    groups: list[Predicate] = []
    title_patterns: list[PatternVariant] = []

    for term in terms:
        if expand:
            group = _expanded_group(term, fields, exact=exact)
            if group is None:
                log.debug("Dropped term with no sub-terms: %r", term.text)
                continue
        else:
            group = _literal_group(term, fields, exact=exact)
            if not exact and not term.excluded:
                title_patterns.append(PatternVariant.literal(term.text))
        groups.append(group)

    predicate = And(tuple(groups))
    ranking = ranking_expression(predicate) if expand else None
    log.debug(
        "Built predicate: terms=%d groups=%d expand=%s exact=%s ranking_leaves=%s",
        len(terms),
        len(groups),
        expand,
        exact,
        len(ranking) if ranking is not None else "-",
    )
    return SearchPlan(predicate=predicate, ranking=ranking, title_patterns=tuple(title_patterns))


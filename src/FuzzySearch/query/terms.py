"""Parsing host-supplied search tokens into raw terms."""

from __future__ import annotations

from typing import Iterable

from FuzzySearch.core.models import RawTerm
from FuzzySearch.text.segment import trim

DEFAULT_EXCLUSION_PREFIX = "-"


def parse_term(token: str, exclusion_prefix: str = DEFAULT_EXCLUSION_PREFIX) -> RawTerm | None:
    """Parse one token.

    Args:
        token: Token as produced by the host tokenizer.
        exclusion_prefix: Marker that negates a term. Empty disables
            exclusion.

    Returns:
        Parsed term, or None when nothing is left after trimming and
        stripping the marker.
    """
    text = trim(token)
    excluded = bool(exclusion_prefix) and text.startswith(exclusion_prefix)
    if excluded:
        text = trim(text[len(exclusion_prefix):])
    if not text:
        return None
    return RawTerm(text=text, excluded=excluded)


def parse_terms(tokens: Iterable[str], exclusion_prefix: str = DEFAULT_EXCLUSION_PREFIX) -> list[RawTerm]:
    """Parse tokens into raw terms, dropping empty ones.

    Examples:
        >>> parse_terms(["foo", "-bar", "-", ""])
        [RawTerm(text='foo', excluded=False), RawTerm(text='bar', excluded=True)]
    """
    terms: list[RawTerm] = []
    for token in tokens:
        term = parse_term(token, exclusion_prefix)
        if term is not None:
            terms.append(term)
    return terms

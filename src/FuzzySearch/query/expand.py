"""Bigram expansion of sub-terms for typo-tolerant CJK matching.

A sub-term of moderate length is cut into fragments: runs of narrow
characters, and overlapping pairs of adjacent wide characters. Besides the
literal term, one pattern is emitted per fragment with that fragment left
out, so the term still matches when any single short unit is missing or
garbled (a typo, an OCR error, a variant kanji) while the rest appears in
order.

Example, for ``東京タワー`` (all wide)::

    fragments: 東京, 京タ, タワ, ワー
    variants:  %東京タワー%
               %京タ%タワ%ワー%
               %東京%タワ%ワー%
               %東京%京タ%ワー%
               %東京%京タ%タワ%
"""

from __future__ import annotations

from typing import Final

from FuzzySearch.core.query import PatternVariant
from FuzzySearch.text.width import WIDE, char_width

MIN_EXPAND_LENGTH: Final[int] = 4
MAX_EXPAND_LENGTH: Final[int] = 10
# Fragments longer than this (only narrow runs can be) are never left out.
MAX_DROPPABLE_LENGTH: Final[int] = 2


def is_expandable(subterm: str) -> bool:
    return MIN_EXPAND_LENGTH <= len(subterm) <= MAX_EXPAND_LENGTH


def fragments(subterm: str) -> list[str]:
    """Cut a sub-term into narrow runs and overlapping wide bigrams.

    A wide character without a wide successor produces no fragment of its
    own; it is still covered by the bigram that ends on it, if any.

    Examples:
        >>> fragments("ABCD")
        ['ABCD']
        >>> fragments("東京都庁")
        ['東京', '京都', '都庁']
        >>> fragments("JR東京駅")
        ['JR', '東京', '京駅']
    """
    widths = [char_width(ch) for ch in subterm]
    out: list[str] = []
    temp = ""
    for i, ch in enumerate(subterm):
        if widths[i] != WIDE:
            temp += ch
            continue
        if temp:
            out.append(temp)
            temp = ""
        if i + 1 < len(subterm) and widths[i + 1] == WIDE:
            out.append(ch + subterm[i + 1])
    if temp:
        out.append(temp)
    return out


def expand_term(subterm: str) -> list[PatternVariant]:
    """Expand a sub-term into its pattern variants.

    Args:
        subterm: Trimmed, non-empty sub-term.

    Returns:
        The literal variant first, then one variant per droppable fragment
        (length 2 or less), in fragment order. Sub-terms outside the
        expandable length window yield only the literal. An omission
        that leaves nothing (``東ab東``, whose only fragment is ``ab``)
        is the match-all pattern ``%``.
    """
    literal = PatternVariant.literal(subterm)
    if not is_expandable(subterm):
        return [literal]

    parts = fragments(subterm)
    variants = [literal]
    for j, dropped in enumerate(parts):
        if len(dropped) > MAX_DROPPABLE_LENGTH:
            continue
        kept = tuple(part for i, part in enumerate(parts) if i != j)
        variants.append(PatternVariant(segments=kept))
    return variants

"""Splitting raw terms on CJK bracket and punctuation boundaries."""

from __future__ import annotations

import re
import unicodedata
from typing import Final

BOUNDARY_CHARS: Final[str] = (
    "「『（［｛〈《【〔〖〘〚＜"
    "」』）］｝〉》】〕〗〙〛＞"
    "、，。．？！：・"
)

_BOUNDARY_RE: Final[re.Pattern[str]] = re.compile("[" + re.escape(BOUNDARY_CHARS) + "]+")


def _is_blank(ch: str) -> bool:
    # Unicode "Other" (Cc, Cf, Cs, Co, Cn) and "Separator" (Zs, Zl, Zp).
    return unicodedata.category(ch)[0] in ("C", "Z")


def trim(text: str) -> str:
    """Strip leading and trailing control or separator characters.

    Unlike ``str.strip`` this also removes format characters such as
    U+200B ZERO WIDTH SPACE and U+FEFF, and ideographic space U+3000.
    """
    start = 0
    end = len(text)
    while start < end and _is_blank(text[start]):
        start += 1
    while end > start and _is_blank(text[end - 1]):
        end -= 1
    return text[start:end]


def split_term(term: str) -> list[str]:
    """Split a term into sub-terms on boundary punctuation.

    Args:
        term: Raw term with any exclusion marker already removed.

    Returns:
        Trimmed, non-empty sub-terms in their original order. Duplicates
        are kept.

    Examples:
        >>> split_term("foo「bar」baz")
        ['foo', 'bar', 'baz']
        >>> split_term("　東京、大阪　")
        ['東京', '大阪']
    """
    pieces = (trim(piece) for piece in _BOUNDARY_RE.split(term))
    return [piece for piece in pieces if piece]

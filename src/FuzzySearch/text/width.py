"""Display-width classification of characters.

Wide (2) means the East Asian Width property is W or F: CJK ideographs,
kana, hangul syllables, fullwidth forms. Everything else, including
ambiguous and unassigned code points, is narrow (1).
"""

from __future__ import annotations

import unicodedata
from typing import Final

NARROW: Final[int] = 1
WIDE: Final[int] = 2

_WIDE_CLASSES: Final[frozenset[str]] = frozenset({"W", "F"})


def char_width(ch: str) -> int:
    """Return the display width of a single character.

    Args:
        ch: One code point.

    Returns:
        ``WIDE`` (2) or ``NARROW`` (1).
    """
    if len(ch) != 1:
        return NARROW
    return WIDE if unicodedata.east_asian_width(ch) in _WIDE_CLASSES else NARROW


def string_width(text: str) -> int:
    """Return the summed display width of ``text``."""
    return sum(char_width(ch) for ch in text)

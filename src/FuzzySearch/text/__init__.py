"""Text primitives: display width and term segmentation."""

from __future__ import annotations

from FuzzySearch.text.segment import BOUNDARY_CHARS, split_term, trim
from FuzzySearch.text.width import NARROW, WIDE, char_width, string_width

__all__ = [
    "BOUNDARY_CHARS",
    "NARROW",
    "WIDE",
    "char_width",
    "split_term",
    "string_width",
    "trim",
]

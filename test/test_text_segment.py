"""Tests for width classification and term segmentation."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FuzzySearch.text import NARROW, WIDE, char_width, split_term, string_width, trim


class TestCharWidth(unittest.TestCase):
    def test_cjk_kana_and_fullwidth_are_wide(self) -> None:
        for ch in ("東", "タ", "ー", "한", "Ａ", "　"):
            self.assertEqual(char_width(ch), WIDE, ch)

    def test_ascii_and_ambiguous_are_narrow(self) -> None:
        for ch in ("a", "Z", "1", " ", "é", "ｱ", "°"):
            self.assertEqual(char_width(ch), NARROW, ch)

    def test_string_width_sums_characters(self) -> None:
        self.assertEqual(string_width("JR東京駅"), 8)
        self.assertEqual(string_width(""), 0)


class TestTrim(unittest.TestCase):
    def test_strips_separators_and_format_characters(self) -> None:
        self.assertEqual(trim("　​foo bar﻿\n"), "foo bar")

    def test_keeps_inner_blanks(self) -> None:
        self.assertEqual(trim("  a　b  "), "a　b")

    def test_blank_only_becomes_empty(self) -> None:
        self.assertEqual(trim("\t　 "), "")


class TestSplitTerm(unittest.TestCase):
    def test_splits_on_brackets_in_order(self) -> None:
        self.assertEqual(split_term("foo「bar」baz"), ["foo", "bar", "baz"])

    def test_term_without_boundaries_is_single_subterm(self) -> None:
        self.assertEqual(split_term("  東京タワー "), ["東京タワー"])

    def test_runs_of_boundaries_and_blank_pieces_are_dropped(self) -> None:
        self.assertEqual(split_term("【東京】、、　・大阪。"), ["東京", "大阪"])

    def test_duplicates_are_kept(self) -> None:
        self.assertEqual(split_term("駅・駅"), ["駅", "駅"])

    def test_only_boundaries_yields_nothing(self) -> None:
        self.assertEqual(split_term("「」、。"), [])

    def test_ascii_punctuation_is_not_a_boundary(self) -> None:
        self.assertEqual(split_term("a,b.c"), ["a,b.c"])


if __name__ == "__main__":
    unittest.main()

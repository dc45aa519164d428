"""Tests for term parsing, predicate building and the ranking signal."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FuzzySearch.core.models import BODY, EXCERPT, META, TITLE, FieldSet, RawTerm
from FuzzySearch.core.query import And, Contains, Not, Or, PatternVariant, iter_leaves
from FuzzySearch.query import build_predicate, compile_query, parse_term, parse_terms

TITLE_BODY = FieldSet(fields=(TITLE, BODY))


def _lit(text: str) -> PatternVariant:
    return PatternVariant.literal(text)


class TestParseTerms(unittest.TestCase):
    def test_exclusion_marker_is_consumed(self) -> None:
        self.assertEqual(parse_term("-foo"), RawTerm(text="foo", excluded=True))
        self.assertEqual(parse_term(" foo "), RawTerm(text="foo", excluded=False))

    def test_empty_terms_are_dropped(self) -> None:
        self.assertEqual(parse_terms(["", "-", "　", "- ", "bar"]), [RawTerm(text="bar")])

    def test_custom_and_disabled_prefix(self) -> None:
        self.assertEqual(parse_term("!foo", "!"), RawTerm(text="foo", excluded=True))
        self.assertEqual(parse_term("-foo", ""), RawTerm(text="-foo", excluded=False))


class TestFieldSet(unittest.TestCase):
    def test_meta_keys_enable_meta(self) -> None:
        fields = FieldSet.from_options(target_meta=False, meta_keys=["location"])
        self.assertEqual(fields.fields, (TITLE, EXCERPT, BODY, META))
        self.assertEqual(fields.meta_keys, ("location",))
        self.assertTrue(fields.targets_meta)

    def test_without_meta(self) -> None:
        fields = FieldSet.from_options(target_meta=False)
        self.assertEqual(fields.fields, (TITLE, EXCERPT, BODY))
        self.assertFalse(fields.targets_meta)

    def test_invalid_field_sets_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            FieldSet(fields=())
        with self.assertRaises(ValueError):
            FieldSet(fields=(TITLE, "AUTHOR"))
        with self.assertRaises(ValueError):
            FieldSet(fields=(TITLE, TITLE))


class TestBuildLiteral(unittest.TestCase):
    def test_excluded_term_requires_no_field_to_match(self) -> None:
        plan = build_predicate([RawTerm(text="foo", excluded=True)], TITLE_BODY)

        expected = And((Not(Contains(TITLE, _lit("foo"))), Not(Contains(BODY, _lit("foo")))))
        self.assertEqual(plan.predicate, And((expected,)))
        self.assertIsNone(plan.ranking)
        self.assertEqual(plan.title_patterns, ())

    def test_terms_are_anded_and_fields_ored(self) -> None:
        plan = build_predicate([RawTerm(text="foo"), RawTerm(text="bar")], TITLE_BODY)

        expected = And(
            (
                Or((Contains(TITLE, _lit("foo")), Contains(BODY, _lit("foo")))),
                Or((Contains(TITLE, _lit("bar")), Contains(BODY, _lit("bar")))),
            )
        )
        self.assertEqual(plan.predicate, expected)
        self.assertEqual(plan.title_patterns, (_lit("foo"), _lit("bar")))

    def test_exact_mode_anchors_positive_terms_only(self) -> None:
        plan = build_predicate(
            [RawTerm(text="foo"), RawTerm(text="bar", excluded=True)],
            TITLE_BODY,
            exact=True,
        )

        positive, negative = plan.predicate.children
        self.assertTrue(all(leaf.pattern.anchored for leaf in positive.children))
        self.assertFalse(any(leaf.pattern.anchored for leaf, _ in iter_leaves(negative)))
        self.assertEqual(plan.title_patterns, ())

    def test_no_terms_yields_empty_plan(self) -> None:
        plan = build_predicate([], TITLE_BODY)
        self.assertTrue(plan.is_empty)
        self.assertEqual(plan.predicate, And(()))

    def test_build_is_deterministic(self) -> None:
        terms = [RawTerm(text="東京タワー"), RawTerm(text="夜景", excluded=True)]
        for expand in (False, True):
            first = build_predicate(terms, TITLE_BODY, expand=expand)
            second = build_predicate(list(terms), TITLE_BODY, expand=expand)
            self.assertEqual(first, second)


class TestBuildExpanded(unittest.TestCase):
    def test_variants_times_fields_in_one_or(self) -> None:
        plan = build_predicate([RawTerm(text="東京タワー")], TITLE_BODY, expand=True)

        (group,) = plan.predicate.children
        self.assertIsInstance(group, Or)
        self.assertEqual(len(group.children), 5 * 2)
        self.assertEqual(group.children[0], Contains(TITLE, _lit("東京タワー")))
        self.assertEqual(group.children[1], Contains(BODY, _lit("東京タワー")))
        self.assertEqual(plan.title_patterns, ())

    def test_subterms_are_ored(self) -> None:
        plan = build_predicate([RawTerm(text="東京「夜景」")], TITLE_BODY, expand=True)

        (group,) = plan.predicate.children
        self.assertEqual(
            group,
            Or(
                (
                    Or((Contains(TITLE, _lit("東京")), Contains(BODY, _lit("東京")))),
                    Or((Contains(TITLE, _lit("夜景")), Contains(BODY, _lit("夜景")))),
                )
            ),
        )

    def test_excluded_term_stays_literal(self) -> None:
        plan = build_predicate([RawTerm(text="東京タワー", excluded=True)], TITLE_BODY, expand=True)

        (group,) = plan.predicate.children
        self.assertEqual(
            group,
            And((Not(Contains(TITLE, _lit("東京タワー"))), Not(Contains(BODY, _lit("東京タワー"))))),
        )

    def test_exact_anchors_subterms_that_are_not_expanded(self) -> None:
        plan = build_predicate([RawTerm(text="東京「東京タワー」")], TITLE_BODY, exact=True, expand=True)

        (group,) = plan.predicate.children
        short, expanded = group.children
        self.assertEqual(
            short,
            Or(
                (
                    Contains(TITLE, PatternVariant.literal("東京", anchored=True)),
                    Contains(BODY, PatternVariant.literal("東京", anchored=True)),
                )
            ),
        )
        self.assertFalse(any(leaf.pattern.anchored for leaf in expanded.children))
        self.assertEqual(len(expanded.children), 5 * 2)

    def test_term_of_only_punctuation_is_dropped(self) -> None:
        plan = build_predicate([RawTerm(text="「」"), RawTerm(text="foo")], TITLE_BODY, expand=True)
        self.assertEqual(len(plan.predicate.children), 1)

    def test_ranking_counts_positive_leaves(self) -> None:
        plan = compile_query(["東京タワー", "-夜景"], TITLE_BODY, expand=True)

        self.assertIsNotNone(plan.ranking)
        self.assertEqual(len(plan.ranking), 10)
        self.assertNotIn(Contains(TITLE, _lit("夜景")), plan.ranking.leaves)

    def test_ranking_absent_without_expansion(self) -> None:
        plan = compile_query(["東京タワー"], TITLE_BODY, expand=False)
        self.assertIsNone(plan.ranking)


if __name__ == "__main__":
    unittest.main()

"""Tests for layered config parsing and validation."""

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FuzzySearch.config import merge_config_dicts, parse_config_dict
from FuzzySearch.core.models import META


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "search": {
            "expand": False,
            "exact": False,
            "exclusion_prefix": "-",
            "target_meta": False,
            "meta_keys": [],
            "target_types": [],
            "include_protected": False,
            "blank_query": True,
            "max_results": 20,
        },
        "pages": {
            "search_base": "search",
            "allow_slash": True,
            "custom_page": False,
            "slugs": {},
        },
        "storage": {"db_path": "database/records.db"},
        "output": {"base_dir": "output", "formats": ["console"], "show_sql": True},
    }


class TestConfigLayering(unittest.TestCase):
    def test_base_config_parses(self) -> None:
        cfg = parse_config_dict(_base_raw_config())

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.search.expand)
        self.assertEqual(cfg.search.max_results, 20)
        self.assertNotIn(META, cfg.search.fields.fields)
        self.assertEqual(cfg.pages.slugs, {})
        self.assertEqual(cfg.output.formats, ("console",))

    def test_meta_keys_turn_on_meta_search(self) -> None:
        raw = _base_raw_config()
        raw["search"]["meta_keys"] = [" location ", "location", ""]

        cfg = parse_config_dict(raw)

        self.assertTrue(cfg.search.target_meta)
        self.assertEqual(cfg.search.meta_keys, ("location",))
        self.assertEqual(cfg.search.fields.meta_keys, ("location",))
        self.assertIn(META, cfg.search.fields.fields)

    def test_single_string_type_is_accepted(self) -> None:
        raw = _base_raw_config()
        raw["search"]["target_types"] = "post"
        raw["pages"]["slugs"] = {"/news/": "post"}

        cfg = parse_config_dict(raw)

        self.assertEqual(cfg.search.target_types, ("post",))
        self.assertEqual(cfg.pages.slugs, {"news": ("post",)})

    def test_pages_section_is_optional(self) -> None:
        raw = _base_raw_config()
        del raw["pages"]

        cfg = parse_config_dict(raw)

        self.assertEqual(cfg.pages.search_base, "search")
        self.assertTrue(cfg.pages.allow_slash)

    def test_missing_required_keys_are_named(self) -> None:
        for section, key in (("search", "expand"), ("search", "max_results"), ("log", "level"), ("output", "formats")):
            raw = _base_raw_config()
            del raw[section][key]
            with self.assertRaisesRegex(ValueError, f"{section}.{key}"):
                parse_config_dict(raw)

    def test_wrong_types_are_named(self) -> None:
        raw = _base_raw_config()
        raw["search"]["expand"] = "yes"
        with self.assertRaisesRegex(TypeError, "search.expand"):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["search"]["max_results"] = True
        with self.assertRaisesRegex(TypeError, "search.max_results"):
            parse_config_dict(raw)

    def test_invalid_values_are_rejected(self) -> None:
        cases = [
            (("search", "max_results"), 0, "search.max_results"),
            (("search", "exclusion_prefix"), "--", "search.exclusion_prefix"),
            (("search", "exclusion_prefix"), " ", "search.exclusion_prefix"),
            (("log", "level"), "LOUD", "log.level"),
            (("output", "formats"), ["pdf"], "output.formats"),
            (("pages", "slugs"), {"Bad Slug": ["post"]}, "pages.slugs"),
            (("pages", "slugs"), {"news": []}, "pages.slugs.news"),
        ]
        for (section, key), value, message in cases:
            raw = _base_raw_config()
            raw[section][key] = value
            with self.assertRaisesRegex(ValueError, message):
                parse_config_dict(raw)

    def test_empty_exclusion_prefix_is_allowed(self) -> None:
        raw = _base_raw_config()
        raw["search"]["exclusion_prefix"] = ""
        self.assertEqual(parse_config_dict(raw).search.exclusion_prefix, "")

    def test_cross_domain_checks(self) -> None:
        raw = _base_raw_config()
        raw["output"]["formats"] = ["json"]
        raw["output"]["base_dir"] = " "
        with self.assertRaisesRegex(ValueError, "output.base_dir"):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["search"]["target_types"] = ["post"]
        raw["pages"]["slugs"] = {"events": ["event"]}
        with self.assertRaisesRegex(ValueError, "search.target_types"):
            parse_config_dict(raw)

    def test_merge_is_deep_and_replaces_lists(self) -> None:
        base = _base_raw_config()
        override = {"search": {"expand": True, "target_types": ["event"]}, "output": {"formats": ["json"]}}

        merged = merge_config_dicts(base, override)

        self.assertTrue(merged["search"]["expand"])
        self.assertEqual(merged["search"]["max_results"], 20)
        self.assertEqual(merged["search"]["target_types"], ["event"])
        self.assertEqual(merged["output"]["formats"], ["json"])
        self.assertEqual(merged["output"]["base_dir"], "output")
        self.assertEqual(base, _base_raw_config())

    def test_parse_does_not_mutate_input(self) -> None:
        raw = _base_raw_config()
        snapshot = deepcopy(raw)
        parse_config_dict(raw)
        self.assertEqual(raw, snapshot)


if __name__ == "__main__":
    unittest.main()

"""Tests for the search service and output renderers."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FuzzySearch.config.search import SearchConfig
from FuzzySearch.core.models import Record, SearchHit
from FuzzySearch.renderers import JsonFileWriter, plan_to_dict, render_predicate, render_text
from FuzzySearch.services.search import RecordSearchService
from FuzzySearch.storage.db import DatabaseManager
from FuzzySearch.storage.records import RecordStore


def _search_config(**overrides) -> SearchConfig:
    values = {
        "expand": False,
        "exact": False,
        "exclusion_prefix": "-",
        "target_meta": False,
        "meta_keys": (),
        "target_types": (),
        "include_protected": False,
        "blank_query": True,
        "max_results": 20,
    }
    values.update(overrides)
    return SearchConfig(**values)


class _RecordingStore:
    def __init__(self) -> None:
        self.queries = []

    def execute(self, query):
        self.queries.append(query)
        return []


class TestRecordSearchService(unittest.TestCase):
    def test_blank_query_lists_records_when_enabled(self) -> None:
        manager = DatabaseManager(":memory:")
        try:
            store = RecordStore(manager)
            store.save_records([Record(id=None, title="a"), Record(id=None, title="b")])
            service = RecordSearchService(config=_search_config(), store=store)

            self.assertEqual(len(service.search(["", "-"])), 2)
        finally:
            manager.close()

    def test_blank_query_returns_nothing_when_disabled(self) -> None:
        store = _RecordingStore()
        service = RecordSearchService(config=_search_config(blank_query=False), store=store)

        self.assertEqual(service.search(["　"]), [])
        self.assertEqual(store.queries, [])

    def test_configured_types_and_limit_are_defaults(self) -> None:
        store = _RecordingStore()
        service = RecordSearchService(
            config=_search_config(target_types=("post",), max_results=5),
            store=store,
        )

        service.search(["foo"])
        service.search(["foo"], types=["event"], limit=2, offset=4)

        first, second = store.queries
        self.assertIn("r.type IN (?)", first.sql)
        self.assertIn("post", first.params)
        self.assertEqual(first.params[-2:], (5, 0))
        self.assertEqual(second.params[-2:], (2, 4))
        self.assertIn("event", second.params)
        self.assertNotIn("post", second.params)

    def test_custom_exclusion_prefix(self) -> None:
        service = RecordSearchService(config=_search_config(exclusion_prefix="!"))

        plan = service.plan(["!foo", "-bar"])

        excluded, normal = plan.predicate.children
        self.assertIn("!~ %foo%", render_predicate(excluded))
        self.assertIn("~ %-bar%", render_predicate(normal))

    def test_search_without_store_raises(self) -> None:
        service = RecordSearchService(config=_search_config())
        with self.assertRaises(RuntimeError):
            service.search(["foo"])


class TestRenderers(unittest.TestCase):
    def test_render_predicate_tree(self) -> None:
        service = RecordSearchService(config=_search_config())
        plan = service.plan(["foo", "-bar"])

        self.assertEqual(
            render_predicate(plan.predicate),
            "AND\n"
            "  OR\n"
            "    TITLE ~ %foo%\n"
            "    EXCERPT ~ %foo%\n"
            "    BODY ~ %foo%\n"
            "  AND\n"
            "    TITLE !~ %bar%\n"
            "    EXCERPT !~ %bar%\n"
            "    BODY !~ %bar%\n",
        )

    def test_plan_to_dict(self) -> None:
        service = RecordSearchService(config=_search_config(expand=True))
        data = plan_to_dict(service.plan(["東京"]))

        self.assertEqual(
            data["predicate"],
            {"and": [{"or": [{"contains": [f, "%東京%"]} for f in ("TITLE", "EXCERPT", "BODY")]}]},
        )
        self.assertEqual(len(data["ranking"]), 3)
        self.assertEqual(data["title_patterns"], [])

    def test_render_text(self) -> None:
        self.assertEqual(render_text([]), "No matching records.\n")
        text = render_text([SearchHit(record=Record(id=7, title="Tower", excerpt="view"), rank=2)])
        self.assertIn("1. Tower  [post #7]", text)
        self.assertIn("Hits: 2", text)

    def test_json_writer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            writer = JsonFileWriter(tmp)
            writer.write_results([SearchHit(record=Record(id=1, title="東京", meta={"k": "v"}), rank=1)], ["東京"])
            writer.finalize("search")

            (path,) = list((Path(tmp) / "json").glob("search_*.json"))
            payload = json.loads(path.read_text(encoding="utf-8"))

        self.assertEqual(payload[0]["query"], ["東京"])
        self.assertEqual(payload[0]["records"][0]["title"], "東京")
        self.assertEqual(payload[0]["records"][0]["meta"], {"k": ["v"]})


if __name__ == "__main__":
    unittest.main()

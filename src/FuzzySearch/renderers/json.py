"""JSON renderers for predicates and search hits."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

from FuzzySearch.core.models import SearchHit
from FuzzySearch.core.query import And, Contains, Not, Or, Predicate, SearchPlan
from FuzzySearch.renderers.base import OutputWriter
from FuzzySearch.utils.log import log


def predicate_to_dict(node: Predicate) -> dict[str, Any]:
    """Convert a predicate tree to JSON-serializable nested dicts.

    Leaves become ``{"contains": [field, pattern]}``; inner nodes become
    ``{"and": [...]}``, ``{"or": [...]}`` or ``{"not": {...}}``.
    """
    if isinstance(node, Contains):
        return {"contains": [node.field, str(node.pattern)]}
    if isinstance(node, Not):
        return {"not": predicate_to_dict(node.child)}
    if isinstance(node, And):
        return {"and": [predicate_to_dict(c) for c in node.children]}
    if isinstance(node, Or):
        return {"or": [predicate_to_dict(c) for c in node.children]}
    raise TypeError(f"Unsupported predicate node: {type(node).__name__}")


def plan_to_dict(plan: SearchPlan) -> dict[str, Any]:
    return {
        "predicate": predicate_to_dict(plan.predicate),
        "ranking": [[leaf.field, str(leaf.pattern)] for leaf in plan.ranking.leaves]
        if plan.ranking is not None
        else None,
        "title_patterns": [str(p) for p in plan.title_patterns],
    }


def render_json(hits: Iterable[SearchHit]) -> list[dict]:
    """Render hits into JSON-serializable Python objects."""
    out: list[dict] = []
    for hit in hits:
        record = hit.record
        out.append(
            {
                "id": record.id,
                "type": record.type,
                "title": record.title,
                "excerpt": record.excerpt,
                "published": record.published.isoformat() if record.published else None,
                "meta": {k: list(v) for k, v in record.meta.items()},
                "hits": hit.rank,
            }
        )
    return out


class JsonFileWriter(OutputWriter):
    """Accumulate results and write them to a JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict] = []

    def write_results(self, hits: Sequence[SearchHit], tokens: Sequence[str]) -> None:
        self.all_results.append({"query": list(tokens), "records": render_json(hits)})

    def finalize(self, action: str) -> None:
        """Write accumulated results to ``<base_dir>/json/<action>_<ts>.json``."""
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)

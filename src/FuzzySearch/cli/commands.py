"""Command implementations for the FuzzySearch CLI.

Business logic for each command, separated from click parameter handling
and from resource management in ``CommandRunner``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from FuzzySearch.config import AppConfig
from FuzzySearch.renderers import OutputWriter, plan_to_dict, render_predicate
from FuzzySearch.routing import SearchPages, parse_request, resolve_request
from FuzzySearch.services.search import RecordSearchService
from FuzzySearch.storage import RecordStore, load_records_json
from FuzzySearch.utils.log import log

Echo = Callable[[str], None]


@dataclass(slots=True)
class CompileCommand:
    """Print the compiled predicate, ranking size and SQL for a query.

    With ``as_json`` the plan is printed as one JSON document instead, with
    the SQL under ``sql`` and ``params`` when ``output.show_sql`` is on.
    """

    config: AppConfig
    search_service: RecordSearchService
    echo: Echo
    as_json: bool = False

    def execute(self, tokens: Sequence[str], types: Sequence[str] = ()) -> None:
        plan = self.search_service.plan(tokens)
        if self.as_json:
            payload = plan_to_dict(plan)
            if self.config.output.show_sql:
                query = self.search_service.compile(plan, types=types)
                payload["sql"] = query.sql
                payload["params"] = list(query.params)
            self.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        self.echo(render_predicate(plan.predicate).rstrip("\n"))
        if plan.ranking is not None:
            self.echo(f"ranking: {len(plan.ranking)} leaves")
        if plan.title_patterns:
            self.echo("title priority: " + ", ".join(str(p) for p in plan.title_patterns))
        if self.config.output.show_sql:
            query = self.search_service.compile(plan, types=types)
            self.echo(f"sql: {query.sql}")
            self.echo(f"params: {list(query.params)}")


@dataclass(slots=True)
class LoadCommand:
    """Import records from a JSON file into the store."""

    store: RecordStore

    def execute(self, path: Path) -> int:
        records = load_records_json(path)
        log.info("Parsed %d records from %s", len(records), path)
        ids = self.store.save_records(records)
        log.info("Store now holds %d records", self.store.count())
        return len(ids)


@dataclass(slots=True)
class SearchCommand:
    """Run one search and hand the hits to the output writer."""

    search_service: RecordSearchService
    output_writer: OutputWriter

    def execute(self, tokens: Sequence[str], types: Sequence[str] = (), offset: int = 0) -> int:
        log.debug("Running search tokens=%s types=%s offset=%d", list(tokens), list(types), offset)
        hits = self.search_service.search(tokens, types=types, offset=offset)
        self.output_writer.write_results(hits, tokens)
        return len(hits)


@dataclass(slots=True)
class RoutesCommand:
    """Print rewrite rules, the redirect path for a query, or resolved request vars."""

    config: AppConfig
    echo: Echo

    def execute(
        self,
        query: str | None = None,
        types: Sequence[str] = (),
        request: str | None = None,
    ) -> None:
        if request is not None:
            resolved = resolve_request(
                parse_request(request),
                custom_page=self.config.pages.custom_page,
                allow_slash=self.config.pages.allow_slash,
            )
            for key, value in resolved.items():
                self.echo(f"{key}={value}")
            return
        pages = SearchPages.from_mapping(self.config.pages.slugs)
        if query is not None:
            self.echo(
                pages.redirect_path(
                    query,
                    types,
                    search_base=self.config.pages.search_base,
                    allow_slash=self.config.pages.allow_slash,
                )
            )
            return
        rules = pages.rewrite_rules(self.config.pages.search_base, blank_query=self.config.search.blank_query)
        for pattern, target in rules.items():
            self.echo(f"{pattern} => {target}")

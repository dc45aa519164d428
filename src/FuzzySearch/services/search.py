"""Search service: from user tokens to ordered record hits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from FuzzySearch.backends.sqlite import SqlQuery, compile_select
from FuzzySearch.config.search import SearchConfig
from FuzzySearch.core.models import SearchHit
from FuzzySearch.core.query import SearchPlan
from FuzzySearch.query import compile_query
from FuzzySearch.utils.log import log


class HitSource(Protocol):
    """Anything that can execute a compiled search query."""

    def execute(self, query: SqlQuery) -> list[SearchHit]:
        """Run the query and return hits in query order."""
        raise NotImplementedError


@dataclass(slots=True)
class RecordSearchService:
    """Application service running configured searches against a store."""

    config: SearchConfig
    store: HitSource | None = None

    def plan(self, tokens: Sequence[str]) -> SearchPlan:
        """Compile tokens with the configured options."""
        return compile_query(
            tokens,
            self.config.fields,
            exact=self.config.exact,
            expand=self.config.expand,
            exclusion_prefix=self.config.exclusion_prefix,
        )

    def compile(
        self,
        plan: SearchPlan,
        *,
        types: Sequence[str] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> SqlQuery:
        """Compile a plan to SQL with type and protection rules applied.

        Args:
            plan: Compiled search plan.
            types: Requested record types; falls back to the configured
                ``target_types`` when empty.
            limit: Maximum rows, defaults to ``max_results``.
            offset: Rows to skip.
        """
        return compile_select(
            plan,
            self.config.fields,
            target_types=tuple(types) or self.config.target_types,
            include_protected=self.config.include_protected,
            limit=limit if limit is not None else self.config.max_results,
            offset=offset,
        )

    def search(
        self,
        tokens: Sequence[str],
        *,
        types: Sequence[str] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SearchHit]:
        """Search records.

        An empty query (no usable term) lists records when ``blank_query``
        is enabled and returns nothing otherwise.

        Args:
            tokens: Host-tokenized search terms.
            types: Requested record types.
            limit: Maximum hits, defaults to ``max_results``.
            offset: Hits to skip.

        Returns:
            Hits ordered by title priority, match count and recency.

        Raises:
            RuntimeError: If the service has no store.
        """
        plan = self.plan(tokens)
        if plan.is_empty and not self.config.blank_query:
            log.info("Blank query ignored (search.blank_query=false)")
            return []

        if self.store is None:
            raise RuntimeError("No record store is configured")
        query = self.compile(plan, types=types, limit=limit, offset=offset)
        hits = self.store.execute(query)
        log.info("Search completed: terms=%d hits=%d", len(plan.predicate.children), len(hits))
        return hits

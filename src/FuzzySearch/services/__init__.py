"""Search service layer for FuzzySearch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from FuzzySearch.services.search import HitSource, RecordSearchService

if TYPE_CHECKING:
    from FuzzySearch.config import AppConfig


def create_search_service(config: AppConfig, store: HitSource | None = None) -> RecordSearchService:
    """Create a search service bound to ``store``.

    Args:
        config: Application configuration containing search settings.
        store: Query executor, usually a ``RecordStore``. Omit it for
            compile-only use.

    Returns:
        Configured RecordSearchService instance.
    """
    return RecordSearchService(config=config.search, store=store)


__all__ = [
    "HitSource",
    "RecordSearchService",
    "create_search_service",
]

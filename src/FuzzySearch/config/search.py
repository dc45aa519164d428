"""Search domain configuration: matching options and field set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from FuzzySearch.config.common import (
    expect_bool,
    expect_int,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_required_value,
    get_section,
)
from FuzzySearch.core.models import FieldSet


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search matching options.

    Attributes:
        expand: Enable CJK segmentation, bigram expansion and ranking.
        exact: Match whole field values (literal mode only).
        exclusion_prefix: Marker negating a term; empty disables exclusion.
        target_meta: Whether metadata values are searched.
        meta_keys: Metadata keys searched; empty means any key.
        target_types: Record types searched when the request names none.
        include_protected: Include password-protected records.
        blank_query: Whether an empty query lists records instead of
            returning nothing.
        max_results: Maximum hits returned per search.
    """

    expand: bool
    exact: bool
    exclusion_prefix: str
    target_meta: bool
    meta_keys: tuple[str, ...]
    target_types: tuple[str, ...]
    include_protected: bool
    blank_query: bool
    max_results: int

    @property
    def fields(self) -> FieldSet:
        return FieldSet.from_options(target_meta=self.target_meta, meta_keys=self.meta_keys)


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    A non-empty ``search.meta_keys`` switches ``target_meta`` on.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "search", required=True)
    meta_keys = _clean_list(get_optional_value(section, "meta_keys", []), "search.meta_keys")
    target_meta = expect_bool(get_optional_value(section, "target_meta", True), "search.target_meta")
    return SearchConfig(
        expand=expect_bool(get_required_value(section, "expand", "search.expand"), "search.expand"),
        exact=expect_bool(get_optional_value(section, "exact", False), "search.exact"),
        exclusion_prefix=expect_str(
            get_optional_value(section, "exclusion_prefix", "-"),
            "search.exclusion_prefix",
        ),
        target_meta=target_meta or bool(meta_keys),
        meta_keys=meta_keys,
        target_types=_clean_list(get_optional_value(section, "target_types", []), "search.target_types"),
        include_protected=expect_bool(
            get_optional_value(section, "include_protected", False),
            "search.include_protected",
        ),
        blank_query=expect_bool(get_optional_value(section, "blank_query", True), "search.blank_query"),
        max_results=expect_int(
            get_required_value(section, "max_results", "search.max_results"),
            "search.max_results",
        ),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Args:
        config: Parsed search configuration.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.max_results <= 0:
        raise ValueError("search.max_results must be positive")
    if len(config.exclusion_prefix) > 1:
        raise ValueError("search.exclusion_prefix must be a single character or empty")
    if config.exclusion_prefix.strip() != config.exclusion_prefix:
        raise ValueError("search.exclusion_prefix must not be whitespace")


def _clean_list(value: Any, config_key: str) -> tuple[str, ...]:
    """Strip items, drop blanks and duplicates, keep order."""
    out: list[str] = []
    for item in expect_str_list(value, config_key):
        normalized = item.strip()
        if normalized and normalized not in out:
            out.append(normalized)
    return tuple(out)

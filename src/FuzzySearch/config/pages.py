"""Search page routing configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from FuzzySearch.config.common import (
    expect_bool,
    expect_str,
    expect_str_list_mapping,
    get_optional_value,
    get_section,
)

_SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*(?:/[a-z0-9][a-z0-9_-]*)*$")


@dataclass(frozen=True, slots=True)
class PagesConfig:
    """Store validated search page settings."""

    search_base: str = "search"
    allow_slash: bool = True
    custom_page: bool = False
    slugs: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


def load_pages(raw: Mapping[str, Any]) -> PagesConfig:
    """Load the optional ``pages`` section."""
    section = get_section(raw, "pages", required=False)
    slugs = expect_str_list_mapping(get_optional_value(section, "slugs", {}), "pages.slugs")
    return PagesConfig(
        search_base=expect_str(get_optional_value(section, "search_base", "search"), "pages.search_base").strip("/"),
        allow_slash=expect_bool(get_optional_value(section, "allow_slash", True), "pages.allow_slash"),
        custom_page=expect_bool(get_optional_value(section, "custom_page", False), "pages.custom_page"),
        slugs={slug.strip("/"): tuple(types) for slug, types in slugs.items()},
    )


def check_pages(config: PagesConfig) -> None:
    """Validate page constraints.

    Raises:
        ValueError: If the search base or a slug is malformed, or a slug
            has no content types.
    """
    if not _SLUG_RE.match(config.search_base):
        raise ValueError(f"pages.search_base is not a valid path segment: {config.search_base!r}")
    for slug, types in config.slugs.items():
        if not _SLUG_RE.match(slug):
            raise ValueError(f"pages.slugs has invalid slug: {slug!r}")
        if not types:
            raise ValueError(f"pages.slugs.{slug} must list at least one content type")

"""Search page routing.

Maps URL slugs to content-type-restricted search pages and produces the
rewrite rules and redirect targets a web host needs for them:

- ``/search/<q>``            plain search
- ``/search/``               blank query (optional)
- ``/<slug>/search/<q>``     search limited to the slug's content types

Slashes inside a query would be read as path separators, so when
``allow_slash`` is on the encoded ``%2F`` is rewritten to ``%1F`` in URLs
and turned back on the way in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping
from urllib.parse import quote


def encode_query(query: str, *, allow_slash: bool = True) -> str:
    """Percent-encode a query for use as one path segment."""
    encoded = quote(query, safe="")
    if allow_slash:
        encoded = encoded.replace("%2F", "%1F").replace("%2f", "%1f")
    return encoded


def decode_query_var(value: str, *, allow_slash: bool = True) -> str:
    """Restore slashes in a still-encoded incoming query variable."""
    if not allow_slash:
        return value
    return value.replace("%1F", "%2F").replace("%1f", "%2f")


def parse_request(query_string: str) -> dict[str, str]:
    """Split ``a=1&b=2`` into variables without percent-decoding values.

    Examples:
        >>> parse_request("s=a%1Fb&pagename=about&paged")
        {'s': 'a%1Fb', 'pagename': 'about', 'paged': ''}
    """
    out: dict[str, str] = {}
    for pair in query_string.lstrip("?").split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        out[key] = value
    return out


def resolve_request(
    query_vars: Mapping[str, str],
    *,
    custom_page: bool = False,
    allow_slash: bool = True,
) -> dict[str, str]:
    """Adjust routed request variables for a search request.

    Requests without an ``s`` variable are returned unchanged.

    Args:
        query_vars: Variables produced by the rewrite rules.
        custom_page: Clear ``pagename`` so a page whose slug matches the
            search URL does not take over the request.
        allow_slash: Restore slashes hidden by ``encode_query``.

    Returns:
        A new mapping of request variables.
    """
    resolved = dict(query_vars)
    if "s" not in resolved:
        return resolved
    if custom_page:
        resolved["pagename"] = ""
    resolved["s"] = decode_query_var(resolved["s"], allow_slash=allow_slash)
    return resolved


@dataclass(slots=True)
class SearchPages:
    """Registry of slug -> content types for type-scoped search pages."""

    slug_to_types: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> SearchPages:
        pages = cls()
        for slug, types in mapping.items():
            pages.add_page(slug, types)
        return pages

    def add_page(self, slug: str, types: str | Iterable[str]) -> None:
        """Register a search page; types for an existing slug are merged.

        Args:
            slug: Page slug, surrounding slashes are ignored.
            types: One content type or several.
        """
        key = slug.strip("/")
        new_types = [types] if isinstance(types, str) else list(types)
        self.slug_to_types.setdefault(key, []).extend(new_types)

    def matching_slug(self, types: Iterable[str]) -> str:
        """Return the first slug serving any of ``types``, or ``""``."""
        wanted = list(types)
        for slug, page_types in self.slug_to_types.items():
            if any(t in page_types for t in wanted):
                return slug
        return ""

    def rewrite_rules(self, search_base: str = "search", *, blank_query: bool = True) -> dict[str, str]:
        """Build rewrite rules, regex pattern -> target query string.

        Args:
            search_base: URL segment of search pages.
            blank_query: Whether ``/<base>/`` is served as an empty search.

        Returns:
            Ordered rules; more specific patterns come after the base rule.
        """
        rules: dict[str, str] = {}
        if blank_query:
            rules[f"{search_base}/?$"] = "index.php?s="
        for slug, types in self.slug_to_types.items():
            joined = ",".join(types)
            rules[f"{slug}/{search_base}/(.+)/?$"] = f"index.php?post_type={joined}&s=$matches[1]"
            rules[f"{slug}/{search_base}/?$"] = f"index.php?post_type={joined}&s="
        return rules

    def redirect_path(
        self,
        query: str,
        types: Iterable[str] = (),
        *,
        search_base: str = "search",
        allow_slash: bool = True,
    ) -> str:
        """Return the pretty search URL path for a query.

        Args:
            query: Search query text, blank allowed.
            types: Requested content types; the first matching slug page is
                used when there is one.
            search_base: URL segment of search pages.
            allow_slash: Whether slashes in the query are preserved.

        Returns:
            ``/<slug>/<base>/<encoded>`` or ``/<base>/<encoded>``.
        """
        slug = self.matching_slug(types)
        prefix = f"/{slug}/{search_base}/" if slug else f"/{search_base}/"
        return prefix + encode_query(query, allow_slash=allow_slash)

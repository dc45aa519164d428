"""URL routing helpers for search pages."""

from __future__ import annotations

from FuzzySearch.routing.pages import (
    SearchPages,
    decode_query_var,
    encode_query,
    parse_request,
    resolve_request,
)

__all__ = ["SearchPages", "decode_query_var", "encode_query", "parse_request", "resolve_request"]

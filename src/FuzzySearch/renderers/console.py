"""Console text renderers for predicates and search hits."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from FuzzySearch.core.models import SearchHit
from FuzzySearch.core.query import And, Contains, Not, Or, Predicate
from FuzzySearch.renderers.base import OutputWriter
from FuzzySearch.utils.log import log

_EXCERPT_WIDTH = 80


def _fmt_dt(dt: datetime | None) -> str:
    if not dt:
        return "-"
    return dt.strftime("%Y-%m-%d")


def _shorten(text: str, width: int = _EXCERPT_WIDTH) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= width else flat[: width - 1] + "…"


def render_predicate(node: Predicate, indent: int = 0) -> str:
    """Render a predicate tree as indented text.

    Examples:
        >>> from FuzzySearch.core.query import PatternVariant
        >>> print(render_predicate(Or((Contains("TITLE", PatternVariant.literal("foo")),))), end="")
        OR
          TITLE ~ %foo%
    """
    pad = "  " * indent
    if isinstance(node, Contains):
        return f"{pad}{node.field} ~ {node.pattern}\n"
    if isinstance(node, Not):
        if isinstance(node.child, Contains):
            return f"{pad}{node.child.field} !~ {node.child.pattern}\n"
        return f"{pad}NOT\n" + render_predicate(node.child, indent + 1)
    if isinstance(node, (And, Or)):
        label = "AND" if isinstance(node, And) else "OR"
        if not node.children:
            return f"{pad}{label} (empty)\n"
        return f"{pad}{label}\n" + "".join(render_predicate(c, indent + 1) for c in node.children)
    raise TypeError(f"Unsupported predicate node: {type(node).__name__}")


def render_text(hits: Iterable[SearchHit]) -> str:
    """Render hits into a human-readable text block."""
    lines: list[str] = []
    for idx, hit in enumerate(hits, start=1):
        record = hit.record
        lines.append(f"{idx}. {record.title}  [{record.type} #{record.id}]")
        lines.append(f"   Published: {_fmt_dt(record.published)}  Hits: {hit.rank}")
        if record.excerpt:
            lines.append(f"   {_shorten(record.excerpt)}")
        lines.append("")
    if not lines:
        return "No matching records.\n"
    return "\n".join(lines).rstrip() + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_results(self, hits: Sequence[SearchHit], tokens: Sequence[str]) -> None:
        log.info("query=%s", " ".join(tokens) or "(blank)")
        for line in render_text(hits).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""

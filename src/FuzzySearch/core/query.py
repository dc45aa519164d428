from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union


@dataclass(frozen=True, slots=True)
class PatternVariant:
    """One way of matching a search term.

    A variant is an ordered list of literal segments that must all appear,
    in order, in the field text. Rendered with ``%`` as the "contains"
    wildcard it reads ``%seg1%seg2%``.

    A variant with no segments renders as a bare ``%`` and matches any
    text.

    Attributes:
        segments: Literal text pieces, each non-empty.
        anchored: When true the single segment must equal the whole field
            (exact mode); no padding wildcards are rendered.
    """

    segments: tuple[str, ...]
    anchored: bool = False

    def __post_init__(self) -> None:
        if not all(self.segments):
            raise ValueError("PatternVariant segments must be non-empty strings")
        if self.anchored and len(self.segments) != 1:
            raise ValueError("Anchored PatternVariant must have exactly one segment")

    @property
    def matches_all(self) -> bool:
        return not self.segments

    @classmethod
    def literal(cls, text: str, *, anchored: bool = False) -> PatternVariant:
        return cls(segments=(text,), anchored=anchored)

    def __str__(self) -> str:
        if self.anchored:
            return self.segments[0]
        if not self.segments:
            return "%"
        return "%" + "%".join(self.segments) + "%"


@dataclass(frozen=True, slots=True)
class Contains:
    """Leaf test: ``field`` contains ``pattern``."""

    field: str
    pattern: PatternVariant


@dataclass(frozen=True, slots=True)
class Not:
    child: Predicate


@dataclass(frozen=True, slots=True)
class And:
    """Conjunction. An empty ``And`` is vacuously true."""

    children: tuple[Predicate, ...] = ()


@dataclass(frozen=True, slots=True)
class Or:
    """Disjunction. An empty ``Or`` is false."""

    children: tuple[Predicate, ...] = ()


Predicate = Union[Contains, Not, And, Or]


def iter_leaves(node: Predicate, *, negated: bool = False) -> Iterator[tuple[Contains, bool]]:
    """Yield every leaf with its effective polarity, depth first.

    Args:
        node: Predicate tree.
        negated: Polarity inherited from enclosing ``Not`` nodes.

    Yields:
        ``(leaf, negated)`` pairs in tree order.
    """
    if isinstance(node, Contains):
        yield node, negated
    elif isinstance(node, Not):
        yield from iter_leaves(node.child, negated=not negated)
    elif isinstance(node, (And, Or)):
        for child in node.children:
            yield from iter_leaves(child, negated=negated)
    else:
        raise TypeError(f"Unsupported predicate node: {type(node).__name__}")


@dataclass(frozen=True, slots=True)
class RankingExpression:
    """Relevance signal: the number of ``leaves`` a record satisfies."""

    leaves: tuple[Contains, ...]

    def __len__(self) -> int:
        return len(self.leaves)


@dataclass(frozen=True, slots=True)
class SearchPlan:
    """Compiled form of one query, ready for a backend.

    Attributes:
        predicate: Top-level conjunction over term groups. Empty when no
            usable term was given.
        ranking: Match-count signal, only present in expansion mode.
        title_patterns: Title-only patterns for title-priority ordering.
            Not part of the predicate.
    """

    predicate: And
    ranking: RankingExpression | None = None
    title_patterns: tuple[PatternVariant, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.predicate.children

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from types import MappingProxyType
from typing import Final, Mapping, Optional, Sequence

TITLE: Final[str] = "TITLE"
EXCERPT: Final[str] = "EXCERPT"
BODY: Final[str] = "BODY"
META: Final[str] = "META"

CONTENT_FIELDS: Final[tuple[str, ...]] = (TITLE, EXCERPT, BODY)
ALL_FIELDS: Final[tuple[str, ...]] = (TITLE, EXCERPT, BODY, META)


@dataclass(frozen=True, slots=True)
class RawTerm:
    """One search term as typed by the user.

    Attributes:
        text: Term text with the exclusion marker already removed.
        excluded: Whether the term carried the exclusion marker.
    """

    text: str
    excluded: bool = False


@dataclass(frozen=True, slots=True)
class FieldSet:
    """Record fields a query is matched against.

    The standard set is TITLE/EXCERPT/BODY, plus META when metadata search
    is enabled. ``meta_keys`` scopes META matching to those metadata keys;
    an empty tuple means any key.
    """

    fields: tuple[str, ...] = CONTENT_FIELDS
    meta_keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("FieldSet must include at least one field")
        unknown = [f for f in self.fields if f not in ALL_FIELDS]
        if unknown:
            raise ValueError(f"FieldSet has unknown fields: {unknown}")
        if len(set(self.fields)) != len(self.fields):
            raise ValueError("FieldSet fields must be unique")

    @classmethod
    def from_options(cls, *, target_meta: bool, meta_keys: Sequence[str] = ()) -> FieldSet:
        """Build the standard field set.

        Args:
            target_meta: Whether metadata values are searched.
            meta_keys: Metadata keys to restrict to. A non-empty list turns
                metadata search on regardless of ``target_meta``.

        Returns:
            Field set with META appended when metadata search is on.
        """
        keys = tuple(meta_keys)
        if target_meta or keys:
            return cls(fields=ALL_FIELDS, meta_keys=keys)
        return cls(fields=CONTENT_FIELDS)

    @property
    def targets_meta(self) -> bool:
        return META in self.fields


@dataclass(frozen=True, slots=True)
class Record:
    """Searchable content record owned by the host.

    Attributes:
        id: Store identifier, None until saved.
        title: Record title.
        excerpt: Short summary text.
        body: Full content text.
        type: Content type used for type-scoped search pages.
        password: Non-empty when the record is password protected.
        published: Publication datetime if known.
        meta: Metadata key to values.
    """

    id: Optional[int]
    title: str
    excerpt: str = ""
    body: str = ""
    type: str = "post"
    password: str = ""
    published: Optional[datetime] = None
    meta: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            str(k): (v,) if isinstance(v, str) else tuple(str(item) for item in v)
            for k, v in dict(self.meta).items()
        }
        object.__setattr__(self, "meta", MappingProxyType(frozen))

    @property
    def protected(self) -> bool:
        return bool(self.password)


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A matching record with its relevance count (0 when not ranked)."""

    record: Record
    rank: int = 0

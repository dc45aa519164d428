"""JSON record importer.

Accepted shape: a list of objects, or ``{"records": [...]}``. Each object
needs ``title``; ``excerpt``, ``body``, ``type``, ``password``,
``published`` (any date string dateutil understands) and ``meta`` (key to
string or list of strings) are optional.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Sequence

from dateutil import parser as dt_parser

from FuzzySearch.core.models import Record


def parse_records(items: Sequence[Any]) -> list[Record]:
    """Parse raw JSON objects into records.

    Raises:
        ValueError: If an item is malformed; the message names its index.
    """
    records: list[Record] = []
    for idx, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValueError(f"records[{idx}] must be an object")
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"records[{idx}].title must be a non-empty string")
        records.append(
            Record(
                id=None,
                title=title,
                excerpt=_safe_str(item.get("excerpt")),
                body=_safe_str(item.get("body")),
                type=_safe_str(item.get("type")) or "post",
                password=_safe_str(item.get("password")),
                published=_parse_datetime(item.get("published"), f"records[{idx}].published"),
                meta=_parse_meta(item.get("meta"), f"records[{idx}].meta"),
            )
        )
    return records


def load_records_json(path: Path) -> list[Record]:
    """Read and parse a JSON record file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping):
        data = data.get("records")
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of records")
    return parse_records(data)


def _parse_datetime(value: Any, key: str) -> datetime | None:
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a date string")
    try:
        parsed = dt_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"{key} is not a valid date: {value!r}") from error
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_meta(value: Any, key: str) -> dict[str, list[str]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{key} must be an object")
    meta: dict[str, list[str]] = {}
    for meta_key, raw in value.items():
        if isinstance(raw, (str, int, float)):
            meta[str(meta_key)] = [str(raw)]
        elif isinstance(raw, list):
            meta[str(meta_key)] = [str(v) for v in raw if v is not None]
        else:
            raise ValueError(f"{key}.{meta_key} must be a string or a list")
    return meta


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()

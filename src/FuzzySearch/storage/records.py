"""Record store implementation."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Sequence

from FuzzySearch.backends.sqlite import SqlQuery
from FuzzySearch.core.models import Record, SearchHit
from FuzzySearch.utils.log import log

if TYPE_CHECKING:
    from FuzzySearch.storage.db import DatabaseManager


class RecordStore:
    """SQLite-backed store of searchable records and their metadata."""

    def __init__(self, db_manager: DatabaseManager):
        log.debug("Initializing RecordStore: %s", db_manager.db_path)
        self.conn = db_manager.get_connection()

    def save_records(self, records: Sequence[Record]) -> list[int]:
        """Insert records with their metadata.

        Args:
            records: Records to insert; their ``id`` is ignored.

        Returns:
            New record ids, in input order.
        """
        ids: list[int] = []
        with self.conn:
            for record in records:
                cursor = self.conn.execute(
                    """
                    INSERT INTO records (type, title, excerpt, body, password, published_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.type,
                        record.title,
                        record.excerpt,
                        record.body,
                        record.password,
                        _to_timestamp(record.published),
                    ),
                )
                record_id = int(cursor.lastrowid)
                self.conn.executemany(
                    "INSERT INTO record_meta (record_id, meta_key, meta_value) VALUES (?, ?, ?)",
                    [(record_id, key, value) for key, values in record.meta.items() for value in values],
                )
                ids.append(record_id)
        log.info("Saved %d records", len(ids))
        return ids

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM records").fetchone()[0])

    def get(self, record_id: int) -> Record | None:
        row = self.conn.execute(
            "SELECT id, type, title, excerpt, body, password, published_at FROM records WHERE id = ?",
            (record_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def execute(self, query: SqlQuery) -> list[SearchHit]:
        """Run a compiled search query.

        The query must select the record columns followed by the match
        count, as ``compile_select`` does.
        """
        log.debug("SQL: %s params=%s", query.sql, query.params)
        try:
            rows = self.conn.execute(query.sql, query.params).fetchall()
        except sqlite3.Error as error:
            log.error("Search query failed: %s", error)
            raise
        return [SearchHit(record=self._row_to_record(row[:7]), rank=int(row[7] or 0)) for row in rows]

    def _load_meta(self, record_id: int) -> dict[str, list[str]]:
        meta: dict[str, list[str]] = {}
        rows = self.conn.execute(
            "SELECT meta_key, meta_value FROM record_meta WHERE record_id = ? ORDER BY id",
            (record_id,),
        )
        for key, value in rows:
            meta.setdefault(key, []).append(value)
        return meta

    def _row_to_record(self, row: Sequence) -> Record:
        record_id, type_, title, excerpt, body, password, published_at = row
        return Record(
            id=int(record_id),
            type=type_,
            title=title,
            excerpt=excerpt,
            body=body,
            password=password,
            published=_from_timestamp(published_at),
            meta=self._load_meta(int(record_id)),
        )


def _to_timestamp(value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def _from_timestamp(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)

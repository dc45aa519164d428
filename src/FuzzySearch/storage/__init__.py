"""Storage layer for FuzzySearch.

Provides the SQLite database manager, the record store and the JSON
record importer.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from FuzzySearch.storage.db import DatabaseManager
from FuzzySearch.storage.importer import load_records_json, parse_records
from FuzzySearch.storage.records import RecordStore
from FuzzySearch.utils.log import log

if TYPE_CHECKING:
    from FuzzySearch.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, RecordStore]:
    """Open the configured database and its record store.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, record_store).
    """
    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Record database: %s", db_path)
    return db_manager, RecordStore(db_manager)


__all__ = [
    "DatabaseManager",
    "RecordStore",
    "create_storage",
    "load_records_json",
    "parse_records",
]

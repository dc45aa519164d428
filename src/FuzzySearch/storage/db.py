"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from pathlib import Path


class DatabaseManager:
    """Owns one SQLite connection to the record database.

    Supports the context manager protocol so the connection is closed when
    a command finishes. ``":memory:"`` opens a private in-memory database.
    """

    def __init__(self, db_path: Path | str):
        """Open (and create if needed) the database and its schema.

        Args:
            db_path: Database file path, or ``":memory:"``.
        """
        self.db_path = str(db_path)
        self.conn: sqlite3.Connection | None = ensure_db(db_path)
        init_schema(self.conn)

    def get_connection(self) -> sqlite3.Connection:
        """Get the open connection.

        Raises:
            RuntimeError: If the manager was already closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database is closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        """Close the connection; further use raises ``RuntimeError``."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def ensure_db(db_path: Path | str) -> sqlite3.Connection:
    """Ensure the database file's directory exists and return a connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the record and metadata tables.

    Text columns are NOT NULL so negated LIKE tests never see NULL.
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS records (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          type TEXT NOT NULL DEFAULT 'post',
          title TEXT NOT NULL DEFAULT '',
          excerpt TEXT NOT NULL DEFAULT '',
          body TEXT NOT NULL DEFAULT '',
          password TEXT NOT NULL DEFAULT '',
          published_at INTEGER
        );

        CREATE TABLE IF NOT EXISTS record_meta (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          record_id INTEGER NOT NULL,
          meta_key TEXT NOT NULL,
          meta_value TEXT NOT NULL DEFAULT '',
          FOREIGN KEY (record_id) REFERENCES records(id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_records_type
          ON records(type);

        CREATE INDEX IF NOT EXISTS idx_records_published
          ON records(published_at DESC);

        CREATE INDEX IF NOT EXISTS idx_record_meta_record
          ON record_meta(record_id, meta_key);
    """)
    conn.commit()

"""SQLite-backed key-value store."""

import asyncio
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..exceptions import StorageReadError, StorageWriteError


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    namespace TEXT NOT NULL,
    key TEXT NOT NULL,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (namespace, key)
);
"""


class SQLiteStore:
    """
    Key-value store persisted in a single SQLite table.

    sqlite3 is blocking, so each call runs in a worker thread.
    """

    def __init__(self, db_path: str, namespace: str = "fitcoach") -> None:
        """
        Initialize the store.

        Args:
            db_path: Path to the SQLite database file
            namespace: Prefix separating this installation's keys
        """
        self.db_path = Path(db_path)
        self.namespace = namespace
        self._init_db()

    def _init_db(self) -> None:
        """Initialize database table if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _get_sync(self, key: str) -> Optional[str]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            ).fetchone()
            return row[0] if row else None

    def _set_sync(self, key: str, raw: str) -> None:
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (namespace, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(namespace, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self.namespace, key, raw, datetime.now().isoformat()),
            )

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await asyncio.to_thread(self._get_sync, key)
        except sqlite3.Error as e:
            raise StorageReadError(key, str(e)) from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StorageReadError(key, f"invalid JSON: {e}") from e

    async def set(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(key, str(e)) from e
        try:
            await asyncio.to_thread(self._set_sync, key, raw)
        except sqlite3.Error as e:
            raise StorageWriteError(key, str(e)) from e
        logger.debug(f"Stored {key} ({len(raw)} bytes)")

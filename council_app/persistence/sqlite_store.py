"""SQLite-backed key-value store for durable ledger state."""

import json
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from ..errors import PersistenceError
from .base import KeyValueStore


class SqliteKeyValueStore(KeyValueStore):
    """SQLite-based key-value persistence layer."""

    def __init__(self, db_path: str = "council.db"):
        self.db_path = Path(db_path)
        self.logger = structlog.get_logger("council.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection("init") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str, key: str = ""):
        """Get database connection, wrapping sqlite errors in PersistenceError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error(
                "Database error",
                operation=operation,
                key=key,
                error=str(e)
            )
            raise PersistenceError(
                f"SQLite {operation} failed: {e}",
                operation=operation,
                key=key,
            ) from e
        finally:
            if conn:
                conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            with self._get_connection("get", key) as conn:
                row = conn.execute(
                    "SELECT value FROM kv WHERE key = ?", (key,)
                ).fetchone()

        if row is None:
            return default
        return json.loads(row["value"])

    def put(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        now = datetime.now(timezone.utc).isoformat()

        with self._lock:
            with self._get_connection("put", key) as conn:
                conn.execute("""
                    INSERT OR REPLACE INTO kv (key, value, updated_at)
                    VALUES (?, ?, ?)
                """, (key, encoded, now))
                conn.commit()

    def delete(self, key: str) -> None:
        with self._lock:
            with self._get_connection("delete", key) as conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()

    def keys(self, prefix: str = "") -> list[str]:
        # substr prefix match; LIKE would treat % and _ in keys as wildcards
        with self._lock:
            with self._get_connection("keys", prefix) as conn:
                rows = conn.execute(
                    "SELECT key FROM kv WHERE substr(key, 1, ?) = ? ORDER BY key",
                    (len(prefix), prefix)
                ).fetchall()

        return [row["key"] for row in rows]

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        with self._get_connection("stats") as conn:
            total = conn.execute("SELECT COUNT(*) FROM kv").fetchone()[0]
        return {"db_path": str(self.db_path), "total_keys": total}

"""
Durable local key/value storage for the chart state.

The state store keeps two JSON strings under fixed keys. Two backends:
- SQLiteKeyValueStorage: one small SQLite file, one table
- InMemoryStorage: dict-backed, for tests and throwaway sessions

Backends raise PersistenceError for any read/write failure; deciding that
persistence is best-effort is the store's job, not the backend's.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Protocol

from chartcraft.errors import PersistenceError
from chartcraft.observability.logging import get_logger

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data


class SQLiteKeyValueStorage:
    """
    SQLite-backed storage in a single file.

    The parent directory and table are created on first use. A connection is
    opened per operation: the store writes rarely and from a single thread.
    """

    def __init__(self, path: Path | str, timeout: float = 5.0) -> None:
        self.path = Path(path)
        self.timeout = timeout
        self._initialized = False

    @contextmanager
    def _connection(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            if not self._initialized:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), timeout=self.timeout)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Cannot open storage at {self.path}: {e}") from e

        try:
            if not self._initialized:
                conn.execute(_SCHEMA)
                self._initialized = True
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"Storage operation failed: {e}") from e
        finally:
            conn.close()

    def get(self, key: str) -> str | None:
        with self._connection() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
        logger.debug("Stored key=%s (%d chars)", key, len(value))

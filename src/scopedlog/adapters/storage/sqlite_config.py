"""SQLite storage adapter for logger configurations."""

import sqlite3

from scopedlog.adapters.storage.sqlite_base import SQLiteStorageBase
from scopedlog.core.errors import ConfigStoreError

_CONFIG_SCHEMA = """
CREATE TABLE IF NOT EXISTS configurations (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
);
"""

_UPSERT_CONFIG = """
INSERT INTO configurations (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""

_SELECT_CONFIG = """
SELECT value FROM configurations WHERE key = ?
"""

_SELECT_KEYS = """
SELECT key FROM configurations ORDER BY key ASC
"""

_DELETE_CONFIG = """
DELETE FROM configurations WHERE key = ?
"""

_CLEAR_CONFIGS = """
DELETE FROM configurations
"""


class SQLiteConfigStore(SQLiteStorageBase):
    """SQLite implementation of ConfigStorePort.

    Uses the standard sqlite3 module, so the registry can call it from any
    thread. Each call is a short blocking transaction; async callers such as
    the ASGI settings app run registry operations in a worker thread. File
    databases use WAL mode for concurrent access.

    Backend errors are raised as ConfigStoreError.
    """

    def __init__(self, db_path: str) -> None:
        super().__init__(db_path, _CONFIG_SCHEMA)

    def save(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        try:
            with self.connection() as conn:
                conn.execute(_UPSERT_CONFIG, (key, value))
                conn.commit()
        except sqlite3.Error as e:
            raise ConfigStoreError("save", key, e) from e

    def load(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None if absent."""
        try:
            with self.connection() as conn:
                row = conn.execute(_SELECT_CONFIG, (key,)).fetchone()
        except sqlite3.Error as e:
            raise ConfigStoreError("load", key, e) from e
        return bytes(row[0]) if row else None

    def keys(self) -> list[str]:
        """Return every stored key in ascending order."""
        try:
            with self.connection() as conn:
                return [row[0] for row in conn.execute(_SELECT_KEYS)]
        except sqlite3.Error as e:
            raise ConfigStoreError("keys", None, e) from e

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if it existed."""
        try:
            with self.connection() as conn:
                cursor = conn.execute(_DELETE_CONFIG, (key,))
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise ConfigStoreError("delete", key, e) from e

    def clear(self) -> None:
        """Remove every stored configuration."""
        try:
            with self.connection() as conn:
                conn.execute(_CLEAR_CONFIGS)
                conn.commit()
        except sqlite3.Error as e:
            raise ConfigStoreError("clear", None, e) from e

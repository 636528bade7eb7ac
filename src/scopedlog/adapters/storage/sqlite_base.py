"""Connection management shared by SQLite storage adapters."""

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager

MEMORY_DB = ":memory:"


class ConnectionManager:
    """Manages sqlite3 connections for one database.

    The schema is created on first use. File databases open a connection per
    operation in WAL mode, so callers on different threads do not share a
    connection. A :memory: database lives only as long as its connection, so
    one persistent connection is kept and its use is serialized with a lock.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._schema = schema
        self._initialized = False
        self._init_lock = threading.Lock()
        self._memory_lock = threading.Lock()
        self._persistent_conn: sqlite3.Connection | None = None

    @property
    def is_memory(self) -> bool:
        return self._db_path == MEMORY_DB

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            if self.is_memory:
                conn = sqlite3.connect(MEMORY_DB, check_same_thread=False)
                conn.executescript(self._schema)
                self._persistent_conn = conn
            else:
                conn = sqlite3.connect(self._db_path)
                try:
                    conn.execute("PRAGMA journal_mode=WAL")
                    conn.executescript(self._schema)
                    conn.commit()
                finally:
                    conn.close()
            self._initialized = True

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection with the schema in place.

        File connections are closed on exit. The :memory: connection stays
        open and is held exclusively for the duration of the block.
        """
        self._ensure_initialized()
        if self.is_memory:
            with self._memory_lock:
                if self._persistent_conn is None:
                    raise RuntimeError("Memory database connection is closed")
                yield self._persistent_conn
            return
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
        finally:
            conn.close()

    def close(self) -> None:
        """Close the persistent :memory: connection, discarding its data."""
        with self._memory_lock:
            if self._persistent_conn is not None:
                self._persistent_conn.close()
                self._persistent_conn = None
                self._initialized = False


class SQLiteStorageBase:
    """Base class for SQLite storage adapters.

    Subclasses pass their schema and run their queries inside
    :meth:`connection`.
    """

    def __init__(self, db_path: str, schema: str) -> None:
        self._db_path = db_path
        self._manager = ConnectionManager(db_path, schema)

    @property
    def db_path(self) -> str:
        return self._db_path

    def close(self) -> None:
        """Release the persistent connection (for :memory: databases)."""
        self._manager.close()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        with self._manager.connection() as conn:
            yield conn

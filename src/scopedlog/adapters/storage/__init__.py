"""Storage adapters implementing ConfigStorePort."""

from scopedlog.adapters.storage.in_memory import InMemoryConfigStore
from scopedlog.adapters.storage.sqlite_config import SQLiteConfigStore

__all__ = [
    "InMemoryConfigStore",
    "SQLiteConfigStore",
]

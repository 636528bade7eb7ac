"""In-memory storage adapter for logger configurations."""

import threading


class InMemoryConfigStore:
    """In-memory implementation of ConfigStorePort.

    Stores payloads in a dict. Suitable for testing and for applications
    where settings need not survive a restart.
    """

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = dict(initial or {})
        self._lock = threading.Lock()

    def save(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``."""
        with self._lock:
            self._values[key] = bytes(value)

    def load(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None."""
        with self._lock:
            return self._values.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._values)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._values.pop(key, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

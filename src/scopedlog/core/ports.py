"""Port interfaces for the registry's collaborators.

These protocols define the contracts that storage and sink adapters must
implement. The core depends only on these interfaces, not concrete
implementations.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigStorePort(Protocol):
    """Port for durable key-value configuration storage.

    Examples: InMemoryConfigStore, SQLiteConfigStore.
    """

    def save(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def load(self, key: str) -> bytes | None:
        """Return the value stored under ``key``, or None if absent."""
        ...


@runtime_checkable
class LogSinkPort(Protocol):
    """Port for the platform log sink that receives forwarded messages.

    Examples: StdlibLogSink, NullLogSink.
    """

    def emit(self, subsystem: str, category: str, level: int, message: str) -> None:
        """Forward a message.

        Args:
            subsystem: Subsystem of the emitting logger.
            category: Category of the emitting logger.
            level: Standard library ``logging`` level number.
            message: The message text.
        """
        ...

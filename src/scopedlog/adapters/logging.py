"""Python logging sink adapter for scopedlog.

This adapter bridges scopedlog loggers to Python's standard library logging
module, so forwarded messages reach whatever handlers the application has
configured.
"""

import logging


class StdlibLogSink:
    """Log sink that forwards messages to standard library loggers.

    Each subsystem/category pair maps to the logger named
    ``"{subsystem}.{category}"`` (optionally under ``prefix``). Records carry
    ``subsystem`` and ``category`` as extra attributes.

    Example:
        ```python
        logging.basicConfig(level=logging.DEBUG)
        registry = LoggerRegistry(InMemoryConfigStore(), sink=StdlibLogSink())
        ```
    """

    def __init__(self, prefix: str | None = None) -> None:
        """Initialize the sink.

        Args:
            prefix: Optional logger name prefix, e.g. "app" routes a message from
                subsystem "net" and category "http" to the "app.net.http" logger.
        """
        self._prefix = prefix

    def logger_name(self, subsystem: str, category: str) -> str:
        name = f"{subsystem}.{category}"
        if self._prefix:
            return f"{self._prefix}.{name}"
        return name

    def emit(self, subsystem: str, category: str, level: int, message: str) -> None:
        """Forward a message to the matching standard library logger.

        Args:
            subsystem: Subsystem of the emitting logger.
            category: Category of the emitting logger.
            level: Standard library logging level.
            message: Message text, passed through without %-formatting.
        """
        logger = logging.getLogger(self.logger_name(subsystem, category))
        logger.log(
            level,
            "%s",
            message,
            extra={"subsystem": subsystem, "category": category},
        )


class NullLogSink:
    """Log sink that discards every message."""

    def emit(self, subsystem: str, category: str, level: int, message: str) -> None:
        return None

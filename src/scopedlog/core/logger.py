"""Named, independently configurable logger."""

import logging
import threading
from collections.abc import Callable

from scopedlog.core.buffer import MessageBuffer
from scopedlog.core.models import LoggerConfiguration
from scopedlog.core.ports import LogSinkPort
from scopedlog.core.severity import Severity, should_emit

ChangeCallback = Callable[["Logger", LoggerConfiguration], None]

_UNSET = object()


class Logger:
    """A single emitter identified by ``subsystem-category``.

    Each emission checks the message level against ``minimum_level`` before
    doing anything else. Messages that pass are appended to the buffer when
    ``store_logs`` is set and forwarded to the sink unless ``hide_logs`` is
    set. Buffer appends happen on a background worker, so :attr:`logs` may
    lag behind the calls that produced them and is not ordered by call time
    across threads. Use :meth:`flush` to wait for pending appends.

    Example:
        ```python
        logger = Logger(configuration, sink=StdlibLogSink())
        logger.info("Network request started")
        ```

    Args:
        configuration: Initial settings and name of the logger.
        sink: Destination for forwarded messages.
        buffer: Message buffer. Defaults to an unbounded private buffer.
    """

    def __init__(
        self,
        configuration: LoggerConfiguration,
        sink: LogSinkPort,
        buffer: MessageBuffer | None = None,
    ) -> None:
        self._id = configuration.key
        self._subsystem = configuration.subsystem
        self._category = configuration.category
        self._store_logs = configuration.store_logs
        self._minimum_level = configuration.minimum_level
        self._hide_logs = configuration.hide_logs
        self._sink = sink
        self._buffer = buffer if buffer is not None else MessageBuffer()
        # _lock guards the three settings; _publish_lock serializes a change
        # together with its notification so subscribers see changes in order.
        self._lock = threading.Lock()
        self._publish_lock = threading.RLock()
        self._subscribers: list[ChangeCallback] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def subsystem(self) -> str:
        return self._subsystem

    @property
    def category(self) -> str:
        return self._category

    @property
    def minimum_level(self) -> Severity:
        with self._lock:
            return self._minimum_level

    @minimum_level.setter
    def minimum_level(self, value: Severity) -> None:
        if not isinstance(value, Severity):
            raise TypeError(f"minimum_level must be a Severity, got {type(value).__name__}")
        self.apply(minimum_level=value)

    @property
    def store_logs(self) -> bool:
        with self._lock:
            return self._store_logs

    @store_logs.setter
    def store_logs(self, value: bool) -> None:
        self.apply(store_logs=bool(value))

    @property
    def hide_logs(self) -> bool:
        with self._lock:
            return self._hide_logs

    @hide_logs.setter
    def hide_logs(self, value: bool) -> None:
        self.apply(hide_logs=bool(value))

    @property
    def configuration(self) -> LoggerConfiguration:
        """Current settings as an immutable snapshot."""
        with self._lock:
            return self._configuration_locked()

    def _configuration_locked(self) -> LoggerConfiguration:
        return LoggerConfiguration(
            store_logs=self._store_logs,
            minimum_level=self._minimum_level,
            hide_logs=self._hide_logs,
            subsystem=self._subsystem,
            category=self._category,
        )

    def apply(
        self,
        store_logs: bool | object = _UNSET,
        minimum_level: Severity | object = _UNSET,
        hide_logs: bool | object = _UNSET,
    ) -> bool:
        """Update several settings at once and notify subscribers once.

        Returns:
            True if any setting changed.
        """
        if minimum_level is not _UNSET and not isinstance(minimum_level, Severity):
            raise TypeError(
                f"minimum_level must be a Severity, got {type(minimum_level).__name__}"
            )
        with self._publish_lock:
            with self._lock:
                changed = False
                if store_logs is not _UNSET and store_logs != self._store_logs:
                    self._store_logs = bool(store_logs)
                    changed = True
                if minimum_level is not _UNSET and minimum_level is not self._minimum_level:
                    self._minimum_level = minimum_level  # type: ignore[assignment]
                    changed = True
                if hide_logs is not _UNSET and hide_logs != self._hide_logs:
                    self._hide_logs = bool(hide_logs)
                    changed = True
                configuration = self._configuration_locked()
                subscribers = list(self._subscribers)
            if changed:
                for callback in subscribers:
                    callback(self, configuration)
        return changed

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register ``callback`` to run after every settings change.

        Returns:
            A callable that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # --- Buffer access ---

    @property
    def logs(self) -> list[str]:
        """Messages buffered so far. May not include very recent calls."""
        return self._buffer.snapshot()

    def clear_logs(self) -> None:
        self._buffer.clear()

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until pending buffer appends have been applied."""
        return self._buffer.flush(timeout)

    # --- Emission ---

    def log(self, message: str, level: Severity = Severity.DEFAULT) -> None:
        """Log ``message`` at ``level``. Logging at PRODUCTION is a no-op."""
        self._emit(message, level, level.logging_level, always_forward=False)

    def notice(self, message: str) -> None:
        self._emit(message, Severity.DEFAULT, Severity.DEFAULT.logging_level, False)

    def info(self, message: str) -> None:
        self._emit(message, Severity.INFO, Severity.INFO.logging_level, False)

    def debug(self, message: str) -> None:
        self._emit(message, Severity.DEBUG, Severity.DEBUG.logging_level, False)

    def warning(self, message: str) -> None:
        """Log a warning.

        Filtered at the ERROR threshold. Unlike every other level, warnings are
        forwarded to the sink even when ``hide_logs`` is set.
        """
        self._emit(message, Severity.ERROR, logging.WARNING, always_forward=True)

    def error(self, message: str) -> None:
        self._emit(message, Severity.ERROR, Severity.ERROR.logging_level, False)

    def fault(self, message: str) -> None:
        self._emit(message, Severity.FAULT, Severity.FAULT.logging_level, False)

    def critical(self, message: str) -> None:
        """Alias of :meth:`fault`."""
        self._emit(message, Severity.FAULT, Severity.FAULT.logging_level, False)

    def _emit(
        self,
        message: str,
        level: Severity,
        sink_level: int,
        always_forward: bool,
    ) -> None:
        with self._lock:
            minimum_level = self._minimum_level
            store_logs = self._store_logs
            hide_logs = self._hide_logs
        if not should_emit(level, minimum_level):
            return

        if store_logs:
            self._buffer.append(message)

        if always_forward or not hide_logs:
            self._sink.emit(self._subsystem, self._category, sink_level, message)

    def __repr__(self) -> str:
        return (
            f"Logger(id={self._id!r}, minimum_level={self.minimum_level.label}, "
            f"store_logs={self.store_logs}, hide_logs={self.hide_logs})"
        )

"""Logger registry and configuration propagation.

The registry caches one Logger per ``subsystem-category`` key and owns the
global configuration. Changes flow in two directions:

- Setting any global field overwrites the settings of every cached logger
  and saves the new global configuration.
- Any change to a logger's settings, including one caused by a global
  change, saves that logger's configuration under its own key.

The registry is an ordinary object. Create one per process and pass it to
the code that needs loggers.
"""

import logging
import threading

from scopedlog.core.buffer import MessageBuffer
from scopedlog.core.encoding.configuration import (
    decode_configuration,
    encode_configuration,
)
from scopedlog.core.errors import ConfigStoreError
from scopedlog.core.logger import Logger
from scopedlog.core.models import LoggerConfiguration, make_key
from scopedlog.core.ports import ConfigStorePort, LogSinkPort
from scopedlog.core.settings import RegistrySettings
from scopedlog.core.severity import Severity

_log = logging.getLogger(__name__)

_UNSET = object()


class LoggerRegistry:
    """Creates, caches and reconfigures loggers.

    Example:
        ```python
        registry = LoggerRegistry(SQLiteConfigStore("settings.db"), StdlibLogSink())
        logger = registry.get_logger("com.example.app", "network")
        logger.info("Request started")

        registry.set_global_minimum_level(Severity.ERROR)
        ```

    Args:
        store: Durable key-value store for configurations.
        sink: Log sink shared by every logger.
        settings: Registry settings. Defaults to RegistrySettings().
    """

    def __init__(
        self,
        store: ConfigStorePort,
        sink: LogSinkPort,
        settings: RegistrySettings | None = None,
    ) -> None:
        self._store = store
        self._sink = sink
        self._settings = settings if settings is not None else RegistrySettings()
        self._lock = threading.RLock()
        self._loggers: dict[str, Logger] = {}
        self._global = self._load_global_configuration()
        self._system_logger = Logger(
            self._global, sink=self._sink, buffer=self._new_buffer()
        )
        self._system_logger.info("Logger registry initialized")

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    @property
    def store(self) -> ConfigStorePort:
        return self._store

    @property
    def system_logger(self) -> Logger:
        """Logger used for the registry's own diagnostic trace."""
        return self._system_logger

    @property
    def global_configuration(self) -> LoggerConfiguration:
        with self._lock:
            return self._global

    @property
    def loggers(self) -> list[Logger]:
        """Snapshot of every cached logger, ordered by id."""
        with self._lock:
            return sorted(self._loggers.values(), key=lambda logger: logger.id)

    def available_loggers(self) -> list[Logger]:
        """Alias of :attr:`loggers` for settings surfaces."""
        return self.loggers

    def find_logger(self, key: str) -> Logger | None:
        """Return the cached logger for ``key`` without creating one."""
        with self._lock:
            return self._loggers.get(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._loggers

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    # --- Lookup ---

    def get_logger(self, subsystem: str, category: str) -> Logger:
        """Return the logger for ``subsystem``/``category``, creating it once.

        A new logger starts from the configuration persisted under its key. If
        none exists, it takes ``store_logs``, ``minimum_level`` and
        ``hide_logs`` from the current global configuration.

        Concurrent first lookups of the same key construct exactly one logger.
        """
        key = make_key(subsystem, category)
        with self._lock:
            logger = self._loggers.get(key)
            if logger is not None:
                self._system_logger.debug(f"Returning cached logger {key}")
                return logger

            configuration = self._resolve_configuration(subsystem, category)
            logger = Logger(configuration, sink=self._sink, buffer=self._new_buffer())
            logger.subscribe(self._persist_logger)
            self._loggers[key] = logger
        self._system_logger.info(f"Created logger {key}")
        return logger

    def _resolve_configuration(
        self, subsystem: str, category: str
    ) -> LoggerConfiguration:
        key = self._settings.logger_key(subsystem, category)
        persisted = decode_configuration(self._load(key))
        if persisted is not None:
            self._system_logger.info(f"Loaded persisted configuration {key}")
            return persisted.replace(subsystem=subsystem, category=category)
        self._system_logger.info(f"No persisted configuration {key}, using global")
        return LoggerConfiguration(
            store_logs=self._global.store_logs,
            minimum_level=self._global.minimum_level,
            hide_logs=self._global.hide_logs,
            subsystem=subsystem,
            category=category,
        )

    # --- Global configuration ---

    def set_global_minimum_level(self, level: Severity) -> None:
        self.set_global_configuration(minimum_level=level)

    def set_global_store_logs(self, enabled: bool) -> None:
        self.set_global_configuration(store_logs=bool(enabled))

    def set_global_hide_logs(self, enabled: bool) -> None:
        self.set_global_configuration(hide_logs=bool(enabled))

    def set_global_configuration(
        self,
        store_logs: bool | object = _UNSET,
        minimum_level: Severity | object = _UNSET,
        hide_logs: bool | object = _UNSET,
    ) -> LoggerConfiguration:
        """Replace the given global fields and broadcast the result.

        Every cached logger is overwritten with the new global values, even
        when a field was set to its current value. Loggers whose settings had
        diverged from the global configuration lose that divergence.

        Returns:
            The new global configuration.
        """
        changes: dict[str, object] = {}
        if store_logs is not _UNSET:
            changes["store_logs"] = bool(store_logs)
        if minimum_level is not _UNSET:
            changes["minimum_level"] = minimum_level
        if hide_logs is not _UNSET:
            changes["hide_logs"] = bool(hide_logs)

        with self._lock:
            configuration = self._global.replace(**changes)
            self._global = configuration
            self._broadcast(configuration)
            count = len(self._loggers)
        self._system_logger.info(
            f"Global configuration changed, applied to {count} loggers"
        )
        return configuration

    def _broadcast(self, configuration: LoggerConfiguration) -> None:
        fields = {
            "store_logs": configuration.store_logs,
            "minimum_level": configuration.minimum_level,
            "hide_logs": configuration.hide_logs,
        }
        self._system_logger.apply(**fields)
        for logger in self._loggers.values():
            logger.apply(**fields)
        self._save(self._settings.global_key, encode_configuration(configuration))

    def _load_global_configuration(self) -> LoggerConfiguration:
        configuration = decode_configuration(self._load(self._settings.global_key))
        if configuration is None:
            return LoggerConfiguration.default_global(self._settings.namespace)
        return configuration

    # --- Persistence ---

    def _persist_logger(self, logger: Logger, configuration: LoggerConfiguration) -> None:
        key = self._settings.logger_key(configuration.subsystem, configuration.category)
        self._save(key, encode_configuration(configuration))
        self._system_logger.debug(f"Saved configuration {key}")

    def _load(self, key: str) -> bytes | None:
        try:
            return self._store.load(key)
        except ConfigStoreError:
            _log.warning("Could not load %s, using defaults", key, exc_info=True)
            return None

    def _save(self, key: str, value: bytes) -> None:
        try:
            self._store.save(key, value)
        except ConfigStoreError:
            _log.warning("Could not save %s", key, exc_info=True)

    def _new_buffer(self) -> MessageBuffer:
        return MessageBuffer(max_size=self._settings.buffer_max_size)

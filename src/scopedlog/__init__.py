"""scopedlog - per-component loggers with persisted, runtime-adjustable settings."""

from scopedlog.adapters.logging import NullLogSink, StdlibLogSink
from scopedlog.adapters.storage.in_memory import InMemoryConfigStore
from scopedlog.adapters.storage.sqlite_config import SQLiteConfigStore
from scopedlog.core.buffer import MessageBuffer
from scopedlog.core.encoding.configuration import (
    decode_configuration,
    encode_configuration,
)
from scopedlog.core.errors import ConfigStoreError
from scopedlog.core.logger import Logger
from scopedlog.core.models import LoggerConfiguration
from scopedlog.core.ports import ConfigStorePort, LogSinkPort
from scopedlog.core.registry import LoggerRegistry
from scopedlog.core.settings import RegistrySettings
from scopedlog.core.severity import Severity, should_emit

__version__ = "0.1.0"

__all__ = [
    "ConfigStoreError",
    "ConfigStorePort",
    "InMemoryConfigStore",
    "LogSinkPort",
    "Logger",
    "LoggerConfiguration",
    "LoggerRegistry",
    "MessageBuffer",
    "NullLogSink",
    "RegistrySettings",
    "SQLiteConfigStore",
    "Severity",
    "StdlibLogSink",
    "decode_configuration",
    "encode_configuration",
    "should_emit",
]

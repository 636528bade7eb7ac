"""Integration tests for registry state surviving a process restart."""

import pytest

from scopedlog.adapters.logging import NullLogSink
from scopedlog.adapters.storage.sqlite_config import SQLiteConfigStore
from scopedlog.core.registry import LoggerRegistry
from scopedlog.core.severity import Severity

pytestmark = [
    pytest.mark.tier(2),
    pytest.mark.tra("Registry.Persistence.Restart"),
]


class TestRegistryRestart:
    """A new registry over the same database restores previous settings."""

    def test_global_configuration_is_restored(self, config_db_path: str) -> None:
        first = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())
        first.set_global_minimum_level(Severity.ERROR)
        first.set_global_store_logs(True)

        second = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())

        assert second.global_configuration == first.global_configuration
        assert second.system_logger.minimum_level is Severity.ERROR

    def test_logger_divergence_is_restored(self, config_db_path: str) -> None:
        first = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())
        first.set_global_minimum_level(Severity.ERROR)
        logger = first.get_logger("com.example", "network")
        logger.minimum_level = Severity.DEBUG
        logger.hide_logs = True

        second = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())
        restored = second.get_logger("com.example", "network")
        untouched = second.get_logger("com.example", "db")

        assert restored.configuration == logger.configuration
        assert untouched.minimum_level is Severity.ERROR
        assert untouched.hide_logs is False

    def test_buffer_is_not_persisted(self, config_db_path: str) -> None:
        first = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())
        first.set_global_configuration(store_logs=True, minimum_level=Severity.DEFAULT)
        logger = first.get_logger("a", "b")
        logger.info("only in memory")
        logger.flush(timeout=5)
        assert logger.logs == ["only in memory"]

        second = LoggerRegistry(SQLiteConfigStore(config_db_path), sink=NullLogSink())

        assert second.get_logger("a", "b").logs == []

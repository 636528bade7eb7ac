"""Shared test fixtures for all test modules."""

import threading
from dataclasses import dataclass
from pathlib import Path

import pytest

from scopedlog.adapters.storage.in_memory import InMemoryConfigStore
from scopedlog.core.models import LoggerConfiguration
from scopedlog.core.registry import LoggerRegistry
from scopedlog.core.severity import Severity

try:
    import httpx
except ImportError:
    httpx = None


@dataclass(frozen=True)
class SinkRecord:
    """A single message received by RecordingLogSink."""

    subsystem: str
    category: str
    level: int
    message: str


class RecordingLogSink:
    """LogSinkPort implementation that remembers every forwarded message."""

    def __init__(self) -> None:
        self.records: list[SinkRecord] = []
        self._lock = threading.Lock()

    def emit(self, subsystem: str, category: str, level: int, message: str) -> None:
        with self._lock:
            self.records.append(SinkRecord(subsystem, category, level, message))

    def messages(self, subsystem: str | None = None) -> list[str]:
        with self._lock:
            return [
                r.message
                for r in self.records
                if subsystem is None or r.subsystem == subsystem
            ]


@pytest.fixture
def sink() -> RecordingLogSink:
    """Fresh recording sink."""
    return RecordingLogSink()


@pytest.fixture
def store() -> InMemoryConfigStore:
    """Empty in-memory configuration store."""
    return InMemoryConfigStore()


@pytest.fixture
def registry(store: InMemoryConfigStore, sink: RecordingLogSink) -> LoggerRegistry:
    """Registry over an empty in-memory store and a recording sink."""
    return LoggerRegistry(store, sink=sink)


@pytest.fixture
def make_configuration():
    """Factory fixture for LoggerConfiguration values."""

    def _make(
        store_logs: bool = True,
        minimum_level: Severity = Severity.DEFAULT,
        hide_logs: bool = False,
        subsystem: str = "com.example.app",
        category: str = "network",
    ) -> LoggerConfiguration:
        return LoggerConfiguration(
            store_logs=store_logs,
            minimum_level=minimum_level,
            hide_logs=hide_logs,
            subsystem=subsystem,
            category=category,
        )

    return _make


@pytest.fixture
def config_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for configuration storage tests."""
    return str(tmp_path / "settings.db")


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_settings_app(registry)
            async with asgi_test_client(app) as client:
                response = await client.get("/global")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client

"""BDD step definitions for configuration propagation features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from scopedlog.adapters.logging import NullLogSink
from scopedlog.adapters.storage.in_memory import InMemoryConfigStore
from scopedlog.core.encoding.configuration import decode_configuration
from scopedlog.core.logger import Logger
from scopedlog.core.registry import LoggerRegistry
from scopedlog.core.severity import Severity


@dataclass
class PropagationContext:
    """Shared state between steps in a propagation scenario."""

    store: InMemoryConfigStore = field(default_factory=InMemoryConfigStore)
    registry: LoggerRegistry | None = None
    loggers: dict[str, Logger] = field(default_factory=dict)

    def logger(self, key: str) -> Logger:
        if key not in self.loggers:
            assert self.registry is not None
            subsystem, category = key.rsplit("-", 1)
            self.loggers[key] = self.registry.get_logger(subsystem, category)
        return self.loggers[key]


@pytest.fixture
def ctx() -> PropagationContext:
    """Fresh scenario context for each test."""
    return PropagationContext()


# === Background Steps ===
@given("an empty configuration store")
def step_empty_store(ctx: PropagationContext) -> None:
    ctx.store = InMemoryConfigStore()


@given("a logger registry over that store")
def step_registry(ctx: PropagationContext) -> None:
    ctx.registry = LoggerRegistry(ctx.store, sink=NullLogSink())


# === Setup Steps ===
@given(parsers.parse('cached loggers "{first}", "{second}" and "{third}"'))
def step_cached_loggers(ctx: PropagationContext, first: str, second: str, third: str) -> None:
    for key in (first, second, third):
        ctx.logger(key)


@given("every cached logger stores logs")
def step_all_store(ctx: PropagationContext) -> None:
    for logger in ctx.loggers.values():
        logger.store_logs = True


@given(parsers.parse('logger "{key}" has minimum level "{label}"'))
def step_logger_level(ctx: PropagationContext, key: str, label: str) -> None:
    ctx.logger(key).minimum_level = Severity.from_label(label)


# === Action Steps ===
@given(parsers.parse('the global minimum level is set to "{label}"'))
@when(parsers.parse('the global minimum level is set to "{label}"'))
def step_global_level(ctx: PropagationContext, label: str) -> None:
    assert ctx.registry is not None
    ctx.registry.set_global_minimum_level(Severity.from_label(label))


@when("the global store logs setting is set to false")
def step_global_store_false(ctx: PropagationContext) -> None:
    assert ctx.registry is not None
    ctx.registry.set_global_store_logs(False)


@when(parsers.parse('logger "{key}" hides its logs'))
def step_hide_logger(ctx: PropagationContext, key: str) -> None:
    ctx.logger(key).hide_logs = True


@when(parsers.parse('logger "{key}" is requested'))
def step_request_logger(ctx: PropagationContext, key: str) -> None:
    ctx.logger(key)


# === Assertion Steps ===
@then("no cached logger stores logs")
def step_none_store(ctx: PropagationContext) -> None:
    assert not any(logger.store_logs for logger in ctx.loggers.values())


@then("the persisted global configuration has store logs false")
def step_persisted_global(ctx: PropagationContext) -> None:
    assert ctx.registry is not None
    persisted = decode_configuration(ctx.store.load(ctx.registry.settings.global_key))
    assert persisted is not None
    assert persisted.store_logs is False


@then(parsers.parse('every cached logger has minimum level "{label}"'))
def step_all_level(ctx: PropagationContext, label: str) -> None:
    expected = Severity.from_label(label)
    assert all(logger.minimum_level is expected for logger in ctx.loggers.values())


@then(parsers.parse('logger "{key}" has minimum level "{label}"'))
def step_then_logger_level(ctx: PropagationContext, key: str, label: str) -> None:
    assert ctx.logger(key).minimum_level is Severity.from_label(label)


@then(parsers.parse('logger "{key}" hides logs'))
def step_logger_hides(ctx: PropagationContext, key: str) -> None:
    assert ctx.logger(key).hide_logs is True


@then(parsers.parse('logger "{key}" does not hide logs'))
def step_logger_shows(ctx: PropagationContext, key: str) -> None:
    assert ctx.logger(key).hide_logs is False


@then("the global configuration does not hide logs")
def step_global_shows(ctx: PropagationContext) -> None:
    assert ctx.registry is not None
    assert ctx.registry.global_configuration.hide_logs is False

"""Core domain models for logger configuration."""

import dataclasses
from dataclasses import dataclass
from typing import Any

from scopedlog.core.severity import Severity

DEFAULT_NAMESPACE = "scopedlog"
GLOBAL_CATEGORY = "GLOBAL"


@dataclass(frozen=True)
class LoggerConfiguration:
    """Settings of a single logger, or of the registry-wide defaults.

    Attributes:
        store_logs: Whether emitted messages are kept in the logger's buffer.
        minimum_level: Filtering threshold; messages ranked below it are dropped.
        hide_logs: Whether forwarding to the log sink is suppressed.
        subsystem: First part of the logger name.
        category: Second part of the logger name.
    """

    store_logs: bool
    minimum_level: Severity
    hide_logs: bool
    subsystem: str
    category: str

    def __post_init__(self) -> None:
        if not isinstance(self.minimum_level, Severity):
            raise TypeError(
                f"minimum_level must be a Severity, got {type(self.minimum_level).__name__}"
            )

    @property
    def key(self) -> str:
        """Identifier of the configuration, ``subsystem-category``."""
        return make_key(self.subsystem, self.category)

    def replace(self, **changes: Any) -> "LoggerConfiguration":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def default_global(cls, namespace: str = DEFAULT_NAMESPACE) -> "LoggerConfiguration":
        """Hard-coded global configuration used when nothing is persisted."""
        return cls(
            store_logs=False,
            minimum_level=Severity.PRODUCTION,
            hide_logs=False,
            subsystem=f"{namespace}.logger",
            category=GLOBAL_CATEGORY,
        )


def make_key(subsystem: str, category: str) -> str:
    """Build the logger key for a subsystem/category pair."""
    return f"{subsystem}-{category}"

"""Registry-level settings."""

from dataclasses import dataclass

from scopedlog.core.models import DEFAULT_NAMESPACE


@dataclass(frozen=True)
class RegistrySettings:
    """Settings that shape a LoggerRegistry.

    Attributes:
        namespace: Prefix of every store key and of the global configuration's
            subsystem (``"{namespace}.logger"``).
        buffer_max_size: Maximum messages retained per logger buffer. None
            keeps every message.
    """

    namespace: str = DEFAULT_NAMESPACE
    buffer_max_size: int | None = None

    def __post_init__(self) -> None:
        if not self.namespace:
            raise ValueError("namespace must not be empty")
        if self.buffer_max_size is not None and self.buffer_max_size <= 0:
            raise ValueError("buffer_max_size must be positive")

    @property
    def global_key(self) -> str:
        """Store key of the global configuration."""
        return f"{self.namespace}.configuration.global"

    def logger_key(self, subsystem: str, category: str) -> str:
        """Store key of a single logger's configuration."""
        return f"{self.namespace}.configuration.{subsystem}-{category}"

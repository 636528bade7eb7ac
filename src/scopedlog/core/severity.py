"""Severity levels and the filtering rule applied by every logger.

Levels are totally ordered by rank. ``PRODUCTION`` sits above every concrete
level and is only meaningful as a configured minimum: a logger configured with
it emits nothing.
"""

import logging
from enum import Enum


class Severity(Enum):
    """Ordered log severity.

    The value of each member is its stable byte encoding, which is also its
    rank for ordering purposes.
    """

    DEFAULT = 0
    INFO = 1
    DEBUG = 2
    ERROR = 16
    FAULT = 17
    PRODUCTION = 255

    @property
    def rank(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        """Human readable name used in settings payloads."""
        return _LABELS[self]

    @property
    def logging_level(self) -> int:
        """Standard library ``logging`` level used when forwarding to a sink."""
        return _LOGGING_LEVELS[self]

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        """Parse a label case-insensitively, defaulting to PRODUCTION."""
        normalized = label.strip().lower()
        for member, text in _LABELS.items():
            if text.lower() == normalized:
                return member
        return cls.PRODUCTION

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.label


_LABELS: dict[Severity, str] = {
    Severity.DEFAULT: "Default",
    Severity.INFO: "Info",
    Severity.DEBUG: "Debug",
    Severity.ERROR: "Error",
    Severity.FAULT: "Fault",
    Severity.PRODUCTION: "Production",
}

_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.DEFAULT: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
    Severity.ERROR: logging.ERROR,
    Severity.FAULT: logging.CRITICAL,
    Severity.PRODUCTION: logging.CRITICAL,
}

# Levels a message may actually be logged at.
CONCRETE_LEVELS: tuple[Severity, ...] = (
    Severity.DEFAULT,
    Severity.INFO,
    Severity.DEBUG,
    Severity.ERROR,
    Severity.FAULT,
)


def compare(a: Severity, b: Severity) -> int:
    """Compare two severities by rank.

    Returns:
        Negative if ``a`` ranks below ``b``, zero if equal, positive otherwise.
    """
    return a.rank - b.rank


def should_emit(message_level: Severity, minimum_level: Severity) -> bool:
    """Return True when a message at ``message_level`` passes ``minimum_level``.

    A message passes when the configured minimum ranks at or below it.
    PRODUCTION is never a valid message level, so it never passes.
    """
    if message_level is Severity.PRODUCTION:
        return False
    return minimum_level.rank <= message_level.rank


def encode(level: Severity) -> int:
    """Encode a severity as a single byte value."""
    return level.value


def decode(value: int) -> Severity:
    """Decode a byte value, falling back to PRODUCTION for unknown values."""
    try:
        return Severity(value)
    except ValueError:
        return Severity.PRODUCTION

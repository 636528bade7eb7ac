"""Byte encoding for persisted logger configurations.

Configurations are stored as a UTF-8 JSON object with the fields
``storeLogs``, ``logLevel``, ``hideLogs``, ``subsystem`` and ``category``.
``logLevel`` carries the severity byte.
"""

import json

from scopedlog.core import severity
from scopedlog.core.models import LoggerConfiguration


def encode_configuration(configuration: LoggerConfiguration) -> bytes:
    """Encode a configuration to bytes.

    Args:
        configuration: The configuration to encode.

    Returns:
        UTF-8 encoded JSON object.
    """
    obj = {
        "storeLogs": configuration.store_logs,
        "logLevel": severity.encode(configuration.minimum_level),
        "hideLogs": configuration.hide_logs,
        "subsystem": configuration.subsystem,
        "category": configuration.category,
    }
    return json.dumps(obj, ensure_ascii=False).encode("utf-8")


def decode_configuration(data: bytes | None) -> LoggerConfiguration | None:
    """Decode bytes produced by :func:`encode_configuration`.

    Args:
        data: Raw payload, or None when nothing was stored.

    Returns:
        The decoded configuration, or None when the payload is missing or
        malformed. Unknown level bytes decode to PRODUCTION.
    """
    if data is None:
        return None
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(obj, dict):
        return None

    store_logs = obj.get("storeLogs")
    level = obj.get("logLevel")
    hide_logs = obj.get("hideLogs")
    subsystem = obj.get("subsystem")
    category = obj.get("category")

    if not isinstance(store_logs, bool) or not isinstance(hide_logs, bool):
        return None
    if not isinstance(level, int) or isinstance(level, bool):
        return None
    if not isinstance(subsystem, str) or not isinstance(category, str):
        return None

    return LoggerConfiguration(
        store_logs=store_logs,
        minimum_level=severity.decode(level),
        hide_logs=hide_logs,
        subsystem=subsystem,
        category=category,
    )

"""Request and response payload helpers for framework adapters.

This module converts between JSON payloads and registry settings. It is
shared by every settings surface so that field names and validation rules
stay identical across frameworks.
"""

import json
from typing import Any

from scopedlog.core.models import LoggerConfiguration
from scopedlog.core.severity import Severity, decode

# Payload field name -> LoggerRegistry/Logger keyword argument
_FIELDS = {
    "storeLogs": "store_logs",
    "logLevel": "minimum_level",
    "hideLogs": "hide_logs",
}


class PayloadError(ValueError):
    """A request payload could not be turned into settings changes."""


def configuration_to_dict(configuration: LoggerConfiguration) -> dict[str, Any]:
    """Render a configuration as a JSON-compatible dict."""
    return {
        "key": configuration.key,
        "subsystem": configuration.subsystem,
        "category": configuration.category,
        "storeLogs": configuration.store_logs,
        "logLevel": configuration.minimum_level.label,
        "hideLogs": configuration.hide_logs,
    }


def _parse_level_value(value: Any) -> Severity:
    """Parse a level given as a label ("Error") or as its byte encoding.

    Unknown labels and bytes map to PRODUCTION, matching how persisted
    configurations are decoded.
    """
    if isinstance(value, bool):
        raise PayloadError("logLevel must be a string or an integer")
    if isinstance(value, int):
        return decode(value)
    if isinstance(value, str):
        return Severity.from_label(value)
    raise PayloadError("logLevel must be a string or an integer")


def _parse_bool_value(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise PayloadError(f"{name} must be a boolean")
    return value


def parse_settings_payload(body: bytes) -> dict[str, Any]:
    """Parse a JSON settings update into keyword arguments.

    Args:
        body: Raw request body, a JSON object with any of ``storeLogs``,
            ``logLevel`` and ``hideLogs``.

    Returns:
        Mapping of ``store_logs``/``minimum_level``/``hide_logs`` to values.

    Raises:
        PayloadError: If the body is not a JSON object, contains unknown
            fields, or a field has the wrong type.
    """
    try:
        data = json.loads(body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadError("body must be a JSON object") from e
    if not isinstance(data, dict):
        raise PayloadError("body must be a JSON object")

    unknown = sorted(set(data) - set(_FIELDS))
    if unknown:
        raise PayloadError(f"unknown fields: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for name, value in data.items():
        if name == "logLevel":
            changes[_FIELDS[name]] = _parse_level_value(value)
        else:
            changes[_FIELDS[name]] = _parse_bool_value(name, value)
    return changes

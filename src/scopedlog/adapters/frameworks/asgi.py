"""ASGI settings adapter for a LoggerRegistry.

This adapter provides a framework-agnostic ASGI application that exposes the
registry's settings as JSON, so any ASGI server (uvicorn, hypercorn, daphne)
can serve a settings surface without extra dependencies.

Endpoints:
    GET  /global              Global configuration.
    POST /global              Update global fields, broadcast to all loggers.
    GET  /loggers             Configurations of every known logger.
    GET  /loggers/{key}       Configuration of one logger.
    POST /loggers/{key}       Update one logger's fields.
    GET  /logs/{key}          Buffered messages as NDJSON.

Keys are matched whole after the route prefix, so any logger key, including
one containing slashes, addresses exactly one logger.

Mutations run in a worker thread via ``asyncio.to_thread``, so the registry's
blocking store writes never run on the event loop.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from scopedlog.adapters.frameworks.payloads import (
    PayloadError,
    configuration_to_dict,
    parse_settings_payload,
)
from scopedlog.core.logger import Logger
from scopedlog.core.registry import LoggerRegistry

_log = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

_JSON = "application/json"
_NDJSON = "application/x-ndjson"
_LOGGERS_PREFIX = "/loggers/"
_LOGS_PREFIX = "/logs/"


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _send_json(send: Send, status: int, payload: Any) -> None:
    await _send_response(send, status, _JSON, json.dumps(payload))


async def _send_error(send: Send, status: int, message: str) -> None:
    await _send_json(send, status, {"error": message})


async def _read_body(receive: Receive) -> bytes:
    """Read the full request body from ASGI receive messages."""
    chunks: list[bytes] = []
    more_body = True
    while more_body:
        message = await receive()
        if message.get("type") == "http.disconnect":
            break
        chunks.append(message.get("body", b""))
        more_body = message.get("more_body", False)
    return b"".join(chunks)


def _encode_messages(key: str, messages: list[str]) -> str:
    """Encode buffered messages as newline-delimited JSON."""
    if not messages:
        return ""
    lines = [json.dumps({"logger": key, "message": m}) for m in messages]
    return "\n".join(lines) + "\n"


def create_settings_app(registry: LoggerRegistry) -> ASGIApp:
    """Create an ASGI app exposing ``registry`` settings.

    Args:
        registry: The registry to read and reconfigure.

    Returns:
        ASGI application callable.
    """

    async def handle_global(method: str, receive: Receive, send: Send) -> None:
        if method == "GET":
            await _send_json(send, 200, configuration_to_dict(registry.global_configuration))
        elif method == "POST":
            changes = parse_settings_payload(await _read_body(receive))
            configuration = await asyncio.to_thread(
                registry.set_global_configuration, **changes
            )
            await _send_json(send, 200, configuration_to_dict(configuration))
        else:
            await _send_error(send, 405, "Method Not Allowed")

    async def handle_loggers(method: str, send: Send) -> None:
        if method != "GET":
            await _send_error(send, 405, "Method Not Allowed")
            return
        await _send_json(
            send,
            200,
            [configuration_to_dict(logger.configuration) for logger in registry.loggers],
        )

    async def handle_logger(
        logger: Logger, method: str, receive: Receive, send: Send
    ) -> None:
        if method == "GET":
            await _send_json(send, 200, configuration_to_dict(logger.configuration))
        elif method == "POST":
            changes = parse_settings_payload(await _read_body(receive))
            await asyncio.to_thread(logger.apply, **changes)
            await _send_json(send, 200, configuration_to_dict(logger.configuration))
        else:
            await _send_error(send, 405, "Method Not Allowed")

    async def handle_logs(logger: Logger, method: str, send: Send) -> None:
        if method != "GET":
            await _send_error(send, 405, "Method Not Allowed")
            return
        await _send_response(send, 200, _NDJSON, _encode_messages(logger.id, logger.logs))

    async def find(key: str, send: Send) -> Logger | None:
        logger = registry.find_logger(key)
        if logger is None:
            await _send_error(send, 404, f"Unknown logger {key}")
        return logger

    async def route(scope: Scope, receive: Receive, send: Send) -> None:
        path: str = scope["path"]
        method: str = scope.get("method", "GET")

        if path == "/global":
            await handle_global(method, receive, send)
        elif path == "/loggers":
            await handle_loggers(method, send)
        elif path.startswith(_LOGGERS_PREFIX):
            logger = await find(path[len(_LOGGERS_PREFIX) :], send)
            if logger is not None:
                await handle_logger(logger, method, receive, send)
        elif path.startswith(_LOGS_PREFIX):
            logger = await find(path[len(_LOGS_PREFIX) :], send)
            if logger is not None:
                await handle_logs(logger, method, send)
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return
        try:
            await route(scope, receive, send)
        except PayloadError as e:
            await _send_error(send, 400, str(e))
        except Exception:
            _log.exception("Error handling settings request %s", scope.get("path"))
            await _send_error(send, 500, "Internal Server Error")

    return app

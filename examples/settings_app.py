"""Example ASGI settings surface for a logger registry.

Run with:
    uvicorn examples.settings_app:app --reload

Endpoints:
    /global               - GET or POST the global configuration
    /loggers              - GET every known logger's configuration
    /loggers/<key>        - GET or POST one logger's configuration
    /logs/<key>           - NDJSON buffered messages of one logger

Try:
    curl -X POST localhost:8000/global -d '{"logLevel": "Default", "storeLogs": true}'
    curl localhost:8000/logs/a-b
"""

import logging
import secrets

from scopedlog.adapters.frameworks.asgi import create_settings_app
from scopedlog.adapters.logging import StdlibLogSink
from scopedlog.adapters.storage.sqlite_config import SQLiteConfigStore
from scopedlog.core.registry import LoggerRegistry

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

registry = LoggerRegistry(SQLiteConfigStore("settings.db"), sink=StdlibLogSink())

a_logger = registry.get_logger("a", "b")
registry.get_logger("ab", "b")
registry.get_logger("abc", "b")

for _ in range(100):
    a_logger.info(secrets.token_urlsafe(15))

app = create_settings_app(registry)

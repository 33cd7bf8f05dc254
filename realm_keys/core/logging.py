"""Package-wide logging setup."""

import json
import logging
import sys
import time

from realm_keys.core.settings import KeySettings

PACKAGE_LOGGER = "realm_keys"


class JsonLineFormatter(logging.Formatter):
    """Render each record as one JSON object on a single line."""

    converter = time.gmtime

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(entry)


def configure_logging(settings: KeySettings | None = None) -> logging.Logger:
    """Attach a JSON-line stream handler to the package logger once."""
    settings = settings or KeySettings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.log_level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)

    return logger

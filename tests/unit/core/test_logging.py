"""Tests for package logging setup."""

import io
import json
import logging
from collections.abc import Iterator

import pytest

from realm_keys.core.logging import PACKAGE_LOGGER, configure_logging
from realm_keys.core.settings import KeySettings


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_from_settings(self, package_logger: logging.Logger) -> None:
        configure_logging(KeySettings(log_level="warning"))
        assert package_logger.level == logging.WARNING

    def test_idempotent(self, package_logger: logging.Logger) -> None:
        configure_logging()
        configure_logging()
        assert len(package_logger.handlers) == 1

    def test_json_lines(self, package_logger: logging.Logger) -> None:
        configure_logging(KeySettings(log_level="INFO"))
        formatter = package_logger.handlers[0].formatter
        record = logging.LogRecord(
            "realm_keys.keys.manager", logging.INFO, __file__, 1, "hello", None, None
        )
        line = json.loads(formatter.format(record))
        assert line["level"] == "INFO"
        assert line["name"] == "realm_keys.keys.manager"
        assert line["msg"] == "hello"

    def test_exception_with_quotes_stays_one_json_line(
        self, package_logger: logging.Logger
    ) -> None:
        configure_logging(KeySettings(log_level="INFO"))
        stream = io.StringIO()
        package_logger.handlers[0].setStream(stream)

        child = logging.getLogger("realm_keys.keys.provider_cache")
        try:
            raise RuntimeError('cannot load "a"')
        except RuntimeError:
            child.exception(
                "Failed to load key provider %s for realm %s", 'a"b', "realm-1"
            )

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["level"] == "ERROR"
        assert entry["msg"] == 'Failed to load key provider a"b for realm realm-1'
        assert entry["exc_info"].startswith("Traceback")
        assert 'RuntimeError: cannot load "a"' in entry["exc_info"]

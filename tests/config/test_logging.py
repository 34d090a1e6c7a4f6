"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from includeall.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    names = ("includeall", "sqlalchemy.engine", "sqlalchemy.pool", "sqlalchemy.orm")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("includeall").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("includeall").level == logging.WARNING

    def test_sqlalchemy_loggers_quieted(self) -> None:
        logging.getLogger("sqlalchemy.pool").setLevel(logging.NOTSET)
        configure_logging(verbose=True)
        assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING

    def test_sqlalchemy_echo_level_kept(self) -> None:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        configure_logging(verbose=False)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("includeall.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "includeall.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_rendered_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("includeall.services").debug("Loaded %d rows", 3)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Loaded 3 rows"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "includeall.services"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("includeall.services").debug("hidden")
        assert capfd.readouterr().err == ""

"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from slsimport.config.logging import HANDLER_NAME, configure_logging


def _own_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger("slsimport").handlers if h.get_name() == HANDLER_NAME]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("slsimport").level == logging.DEBUG

    def test_default_shows_info(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("slsimport").level == logging.INFO

    def test_root_handlers_untouched(self) -> None:
        root = logging.getLogger()
        before = root.handlers[:]
        configure_logging()
        assert root.handlers == before

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=False, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(_own_handlers()) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("slsimport.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "slsimport.test"
        assert "timestamp" in parsed

    def test_stdlib_importing_line_is_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("slsimport.services.walker").info("Importing %s", "/p/a.yml")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Importing /p/a.yml"
        assert parsed["level"] == "info"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("slsimport.services.walker").debug("Merged %s", "/p/a.yml")
        captured = capfd.readouterr()
        assert captured.err.strip() == ""

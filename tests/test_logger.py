"""
Tests for the shared logging helpers.
"""
import logging

from shared.utils.config import settings
from shared.utils.logger import log_error, setup_logger


class TestSetupLogger:

    def test_one_handler_per_name(self):
        first = setup_logger("tests.logger.handlers")
        second = setup_logger("tests.logger.handlers")

        assert first is second
        assert len(first.handlers) == 1
        assert not isinstance(first.handlers[0], logging.FileHandler)

    def test_level_comes_from_settings(self):
        logger = setup_logger("tests.logger.level")
        assert logger.level == logging.getLevelName(settings.LOG_LEVEL)


class TestLogError:

    def test_context_prefixes_the_message(self, caplog):
        logger = setup_logger("tests.logger.context")

        with caplog.at_level(logging.ERROR, logger="tests.logger.context"):
            log_error(logger, ValueError("bad step"), "PlanValidator capability 'accept' failed")

        record = caplog.records[-1]
        assert record.getMessage() == "PlanValidator capability 'accept' failed: ValueError: bad step"
        assert not record.exc_info

    def test_traceback_in_debug_mode(self, caplog, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", True)
        logger = setup_logger("tests.logger.debug")

        with caplog.at_level(logging.ERROR, logger="tests.logger.debug"):
            try:
                raise RuntimeError("boom")
            except RuntimeError as e:
                log_error(logger, e)

        record = caplog.records[-1]
        assert record.getMessage() == "RuntimeError: boom"
        assert record.exc_info

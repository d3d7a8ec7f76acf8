"""Tests for centralized logging behavior and configuration."""

import logging
import sys
from io import StringIO

import pytest

from summitt.logging import (
    LOG_LEVELS,
    get_logger,
    reset_logging,
    set_global_log_level,
    set_log_level_by_name,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Reset logging state before and after each test to avoid cross-test bleed."""
    reset_logging()
    yield
    reset_logging()


def test_effective_levels_follow_level_names():
    """INFO by default, DEBUG after "debug", back to INFO after "info"."""
    logger = get_logger("summitt.test")

    capture = StringIO()
    handler = logging.StreamHandler(capture)
    handler.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(handler)

    logger.info("info-1")
    assert "info-1" in capture.getvalue()

    capture.seek(0)
    capture.truncate(0)
    logger.debug("debug-1")
    assert "debug-1" not in capture.getvalue()

    assert set_log_level_by_name("debug") == logging.DEBUG
    logger.debug("debug-2")
    assert "debug-2" in capture.getvalue()

    capture.seek(0)
    capture.truncate(0)
    assert set_log_level_by_name("INFO") == logging.INFO
    logger.debug("debug-3")
    assert "debug-3" not in capture.getvalue()
    logger.handlers.clear()


def test_global_level_propagates_to_children_and_new_loggers():
    logger1 = get_logger("summitt.engine")
    logger2 = get_logger("summitt.report")

    assert logger1.getEffectiveLevel() == logging.INFO
    assert logger2.getEffectiveLevel() == logging.INFO

    set_global_log_level(logging.WARNING)
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert logger2.getEffectiveLevel() == logging.WARNING

    logger3 = get_logger("summitt.matcher")
    assert logger3.getEffectiveLevel() == logging.WARNING


def test_setup_root_logger_idempotent_no_duplicate_handlers():
    capture = StringIO()
    handler = logging.StreamHandler(capture)
    setup_root_logger(level=logging.INFO, handler=handler)

    root_logger = logging.getLogger("summitt")
    assert len(root_logger.handlers) == 1

    setup_root_logger(level=logging.DEBUG)
    assert len(root_logger.handlers) == 1

    set_global_log_level(logging.ERROR)
    assert root_logger.level == logging.ERROR


def test_default_handler_writes_to_stderr():
    setup_root_logger()
    (handler,) = logging.getLogger("summitt").handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr


def test_custom_format_string_applied():
    capture = StringIO()
    handler = logging.StreamHandler(capture)
    fmt = "LEVEL:%(levelname)s|NAME:%(name)s|MSG:%(message)s"
    setup_root_logger(level=logging.INFO, format_string=fmt, handler=handler)

    logger = get_logger("summitt.test.format")
    logger.info("hello")
    out = capture.getvalue()
    assert "LEVEL:INFO" in out
    assert "NAME:summitt.test.format" in out
    assert "MSG:hello" in out


def test_level_names_cover_cli_choices():
    assert list(LOG_LEVELS) == ["debug", "info", "warning", "error"]
    set_log_level_by_name("error")
    assert logging.getLogger("summitt").level == logging.ERROR


def test_unknown_level_name_raises():
    with pytest.raises(ValueError, match="debug, info, warning, error"):
        set_log_level_by_name("loud")

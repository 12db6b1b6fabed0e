# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `candy.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Keeps stderr quiet unless `log_to_console` is set.
- Attaches the key trace log only when ``CANDY_KEYTRACE`` is set.

The tests run in a temporary working directory to avoid touching real files.
"""

import logging
import logging.handlers

import pytest

from candy.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put back the root handlers pytest installed before each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """`setup_logging` should add rotating file handlers with proper levels.

    Scenario:
    - Console logging is disabled.
    - Separate error log is requested.
    - File handler level is INFO.

    Assertions:
    - Exactly two rotating file handlers are attached to the root logger
      (main log + error log), with the configured levels.
    """
    monkeypatch.chdir(tmp_path)

    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
                "log_file": "logs/candy.log",
            }
        }
    )

    root = logging.getLogger()
    assert len(root.handlers) == 2
    assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "logs" / "candy.log").exists()


def test_console_handler_is_opt_in(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    logging_config.setup_logging({})
    assert not any(
        type(h) is logging.StreamHandler for h in logging.getLogger().handlers
    )

    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "ERROR"}})
    console = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
    assert len(console) == 1
    assert console[0].level == logging.ERROR


def test_key_trace_disabled_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CANDY_KEYTRACE", raising=False)

    logging_config.setup_logging({})

    key_logger = logging.getLogger("candy.keyevents")
    assert key_logger.disabled is True
    assert key_logger.propagate is False
    assert not (tmp_path / "keytrace.log").exists()


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CANDY_KEYTRACE", "yes")

    logging_config.setup_logging({})
    logging_config.KEY_LOGGER.debug("key=113 mode=VIEW")

    key_logger = logging.getLogger("candy.keyevents")
    assert key_logger.disabled is False
    for handler in key_logger.handlers:
        handler.flush()
    assert "key=113 mode=VIEW" in (tmp_path / "keytrace.log").read_text()

    for handler in key_logger.handlers:
        handler.close()
    key_logger.handlers = []

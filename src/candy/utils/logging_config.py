# candy/utils/logging_config.py
"""candy.utils.logging_config
============================

Logging setup for the candy editor.

The editor owns the terminal in raw mode, so log output normally goes to
files only:

- ``candy.log`` (configurable): rotating main log, level ``file_level``.
- ``error.log``: optional rotating log of ERROR and CRITICAL records
  (``separate_error_log = true``).
- stderr: optional (``log_to_console = true``), mainly for debugging with the
  output redirected.
- ``keytrace.log``: every key byte with the active mode, written by the
  ``candy.keyevents`` logger when ``CANDY_KEYTRACE`` is ``1``, ``true`` or
  ``yes``. The variable can also be set in ``~/.config/candy/.env``.

A log file that cannot be opened never stops the editor: the main log moves
to the system temp directory and the other files are skipped, with a note on
stderr.

Globals:
    logger: Main application logger ("candy").
    KEY_LOGGER: Key trace logger ("candy.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("candy")
KEY_LOGGER = logging.getLogger("candy.keyevents")

MAIN_LOG_MAX_BYTES = 2 * 1024 * 1024
AUX_LOG_MAX_BYTES = 1024 * 1024

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"
KEYTRACE_FORMAT = "%(asctime)s - %(message)s"


def _level(name: Any, fallback: int) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else fallback


def _rotating_handler(
    filename: str, level: int, fmt: str, max_bytes: int, backups: int
) -> logging.Handler:
    """Returns a rotating file handler, creating the parent directory first."""
    log_dir = os.path.dirname(filename)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _main_file_handler(filename: str, level: int) -> Optional[logging.Handler]:
    try:
        return _rotating_handler(filename, level, FILE_FORMAT, MAIN_LOG_MAX_BYTES, 5)
    except OSError as e:
        fallback = os.path.join(tempfile.gettempdir(), "candy.log")
        print(f"Cannot open log file '{filename}' ({e}); using '{fallback}'.", file=sys.stderr)
    try:
        return _rotating_handler(fallback, level, FILE_FORMAT, MAIN_LOG_MAX_BYTES, 5)
    except OSError as e:
        print(f"File logging disabled: {e}", file=sys.stderr)
        return None


def _error_file_handler() -> Optional[logging.Handler]:
    try:
        return _rotating_handler("error.log", logging.ERROR, FILE_FORMAT, AUX_LOG_MAX_BYTES, 3)
    except OSError as e:
        print(f"Cannot open 'error.log' ({e}); error log disabled.", file=sys.stderr)
        return None


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(level)
    return handler


def _configure_key_trace() -> None:
    """Attaches keytrace.log to KEY_LOGGER, or mutes it."""
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = True

    if os.environ.get("CANDY_KEYTRACE", "").lower() not in {"1", "true", "yes"}:
        KEY_LOGGER.addHandler(logging.NullHandler())
        logging.debug("Key tracing off (set CANDY_KEYTRACE=1 to enable).")
        return
    try:
        KEY_LOGGER.addHandler(
            _rotating_handler("keytrace.log", logging.DEBUG, KEYTRACE_FORMAT, AUX_LOG_MAX_BYTES, 3)
        )
    except OSError as e:
        logging.error(f"Key tracing requested but keytrace.log is unavailable: {e}")
        return
    KEY_LOGGER.disabled = False
    logging.info("Key tracing on: keytrace.log")


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Installs the candy log handlers on the root logger.

    Safe to call repeatedly: the root logger's handlers are replaced, not
    appended to.

    Args:
        config (dict | None): Application configuration; only the
            ``[logging]`` section is read (``file_level``, ``console_level``,
            ``log_to_console``, ``separate_error_log``, ``log_file``).
    """
    settings = (config or {}).get("logging", {})
    file_level = _level(settings.get("file_level", "DEBUG"), logging.DEBUG)

    handlers: list[logging.Handler] = []
    main_handler = _main_file_handler(settings.get("log_file", "candy.log"), file_level)
    if main_handler is not None:
        handlers.append(main_handler)
    if settings.get("separate_error_log", False):
        error_handler = _error_file_handler()
        if error_handler is not None:
            handlers.append(error_handler)
    if settings.get("log_to_console", False):
        handlers.append(
            _console_handler(_level(settings.get("console_level", "WARNING"), logging.WARNING))
        )

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(file_level)

    _configure_key_trace()

    logging.info(
        "Logging ready: level %s, handlers: %s.",
        logging.getLevelName(file_level),
        ", ".join(type(h).__name__ for h in handlers) or "none",
    )

# src/candy/__main__.py
"""
candy Entry Point
=================

Launches the editor:
1) Environment Loading: reads ~/.config/candy/.env early (CANDY_KEYTRACE, ...).
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Terminal: switches the terminal into raw mode.
4) Application Run: instantiates the Candy session, opens the optional file
   argument and runs the main loop.
5) Teardown: restores the terminal on every path; fatal errors exit with
   status 1, quitting exits with status 0.

Usage: ``candy [FILE]``
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv

from candy.core.Candy import Candy
from candy.core.errors import CandyError
from candy.ui.TerminalAppMode import TerminalAppMode
from candy.utils.logging_config import setup_logging
from candy.utils.utils import get_user_config_dir, load_config

logger = logging.getLogger("candy")


def _resolve_cli_path(argv: list[str]) -> Optional[str]:
    """Returns the optional positional file argument, or None."""
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    return raw or None


def run_editor(terminal: Any, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """Creates the session on an already raw terminal and runs it to the end."""
    editor = Candy(terminal, config=config)
    if file_to_open:
        editor.open_file(file_to_open)
    editor.run()


def start(argv: Optional[list[str]] = None) -> None:
    """Runs the editor and exits the process with its status code."""
    argv = sys.argv if argv is None else argv

    try:
        load_dotenv(dotenv_path=get_user_config_dir() / ".env")
    except Exception:
        # No HOME or unreadable .env: run without the extra environment.
        pass

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("candy editor starting up...")
    file_to_open = _resolve_cli_path(argv)
    terminal = TerminalAppMode()
    fatal_error: Optional[BaseException] = None

    try:
        terminal.enter()
        run_editor(terminal, config, file_to_open)
        logger.info("candy editor shut down gracefully.")
    except CandyError as e:
        logger.critical("Fatal error: %s", e, exc_info=True)
        fatal_error = e
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        fatal_error = e
    finally:
        terminal.exit()

    if fatal_error is not None:
        print(f"candy: {fatal_error}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    start()

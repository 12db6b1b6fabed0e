# candy/ui/TerminalAppMode.py
from __future__ import annotations

import errno
import logging
import os
import re
import sys
import termios
from typing import Optional

from candy.core.errors import TerminalError

CLEAR_SCREEN = b"\x1b[2J\x1b[H"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_REPORT = b"\x1b[6n"
_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)")


class TerminalAppMode:
    """
    Exclusive raw control of the terminal for the editor:

    - raw input: no echo, no canonical line buffering, no signals (so Ctrl-C,
      Ctrl-Z and friends arrive as plain bytes), no CR→NL translation, no
      software flow control, 8-bit characters.
    - no output post-processing: "\\n" is not turned into "\\r\\n".
    - reads time out after 100 ms (VMIN 0 / VTIME 1); `read_key` loops until
      one byte arrives.

    Always pair `enter()` with `exit()` (try/finally).
    """

    def __init__(self, in_fd: Optional[int] = None, out_fd: Optional[int] = None) -> None:
        self._in_fd: int = sys.stdin.fileno() if in_fd is None else in_fd
        self._out_fd: int = sys.stdout.fileno() if out_fd is None else out_fd
        self._orig_attrs: Optional[list] = None
        self._entered: bool = False

    def enter(self) -> None:
        try:
            self._orig_attrs = termios.tcgetattr(self._in_fd)
        except termios.error as e:
            raise TerminalError(f"tcgetattr: {e}") from e

        raw = termios.tcgetattr(self._in_fd)
        raw[0] &= ~(termios.BRKINT | termios.INPCK | termios.ISTRIP | termios.ICRNL | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1

        try:
            termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, raw)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e

        self._entered = True
        logging.debug("TerminalAppMode: entered raw mode.")

    def exit(self) -> None:
        if not self._entered:
            return
        try:
            self.write(CLEAR_SCREEN)
        except TerminalError as e:
            logging.debug("Clearing the screen on exit failed: %r", e)
        try:
            termios.tcsetattr(self._in_fd, termios.TCSAFLUSH, self._orig_attrs)
        except termios.error as e:
            logging.warning("Could not restore terminal attributes: %s", e)
        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── collaborator interface ───────────────────────────────────────────────

    def read_key(self) -> int:
        """Blocks until one input byte is available and returns it."""
        while True:
            try:
                data = os.read(self._in_fd, 1)
            except OSError as e:
                if e.errno == errno.EAGAIN:
                    continue
                raise TerminalError(f"read: {e}") from e
            if data:
                return data[0]

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        try:
            while view:
                written = os.write(self._out_fd, view)
                view = view[written:]
        except OSError as e:
            raise TerminalError(f"write: {e}") from e

    def get_size(self) -> tuple[int, int]:
        """Terminal ``(rows, columns)``."""
        try:
            size = os.get_terminal_size(self._out_fd)
            if size.columns > 0 and size.lines > 0:
                return size.lines, size.columns
        except OSError as e:
            logging.debug("get_terminal_size failed, asking the terminal: %r", e)
        return self._size_from_cursor_report()

    # ── helpers ───────────────────────────────────────────────────────────────

    def _size_from_cursor_report(self) -> tuple[int, int]:
        # Park the cursor at the bottom-right corner and ask where it is.
        self.write(CURSOR_TO_BOTTOM_RIGHT + CURSOR_POSITION_REPORT)
        reply = b""
        while len(reply) < 32:
            try:
                ch = os.read(self._in_fd, 1)
            except OSError as e:
                raise TerminalError(f"get_window_size: {e}") from e
            if not ch or ch == b"R":
                break
            reply += ch
        match = _REPORT_RE.match(reply)
        if not match:
            raise TerminalError("get_window_size: no cursor position report")
        return int(match.group(1)), int(match.group(2))

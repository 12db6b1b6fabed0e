# candy/ui/Renderer.py
"""Renderer.py
========================
Renderer: turns the editor session into one terminal frame.

The frame is described with a `FrameBuilder`, which records logical drawing
operations (text, clear-to-end-of-line, cursor moves, reverse video, ...) and
serializes them to VT100 escape sequences in a single pass. The renderer
never concatenates escape codes itself, and the finished frame is handed to
the terminal collaborator with exactly one ``write`` call so the screen
never shows a half-drawn state.

Screen layout, top to bottom:

- ``screen_rows`` text rows (``~`` past the end of the document),
- the status line in reverse video,
- the message line (unexpired status message),
- the command line (``:`` buffer while composing a command).
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from candy.core.Candy import Candy

# status line + message line + command line
RESERVED_LINES = 3

FILENAME_WIDTH = 20
EMPTY_ROW_MARKER = "~"
NO_NAME = "No name"

ESCAPE_SEQUENCES: dict[str, str] = {
    "hide_cursor": "\x1b[?25l",
    "show_cursor": "\x1b[?25h",
    "home": "\x1b[H",
    "clear_line": "\x1b[K",
    "reverse": "\x1b[7m",
    "reset": "\x1b[m",
    "newline": "\r\n",
}


class FrameBuilder:
    """Accumulates drawing operations and encodes them to the wire format.

    Every method returns the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._ops: list[tuple[str, Any]] = []

    def __len__(self) -> int:
        return len(self._ops)

    def _append(self, op: str, arg: Any = None) -> "FrameBuilder":
        self._ops.append((op, arg))
        return self

    def text(self, s: str) -> "FrameBuilder":
        return self._append("text", s) if s else self

    def hide_cursor(self) -> "FrameBuilder":
        return self._append("hide_cursor")

    def show_cursor(self) -> "FrameBuilder":
        return self._append("show_cursor")

    def home(self) -> "FrameBuilder":
        return self._append("home")

    def clear_line(self) -> "FrameBuilder":
        return self._append("clear_line")

    def newline(self) -> "FrameBuilder":
        return self._append("newline")

    def reverse(self) -> "FrameBuilder":
        return self._append("reverse")

    def reset(self) -> "FrameBuilder":
        return self._append("reset")

    def move_cursor(self, row: int, col: int) -> "FrameBuilder":
        """Moves the terminal cursor to the 0-based cell ``(row, col)``."""
        return self._append("move_cursor", (max(row, 0), max(col, 0)))

    def to_bytes(self, encoding: str = "utf-8") -> bytes:
        parts: list[str] = []
        for op, arg in self._ops:
            if op == "text":
                parts.append(arg)
            elif op == "move_cursor":
                row, col = arg
                parts.append(f"\x1b[{row + 1};{col + 1}H")
            else:
                parts.append(ESCAPE_SEQUENCES[op])
        return "".join(parts).encode(encoding, errors="replace")


def visible_text(s: str) -> str:
    """Maps tabs to spaces and other control characters to ``?``.

    Keeps one screen cell per character so cursor columns stay aligned.
    """
    return "".join(
        " " if ch == "\t" else "?" if ord(ch) < 32 or ord(ch) == 127 else ch
        for ch in s
    )


class Renderer:
    """Composes Document, CursorViewport, ModeController and StatusMessage.

    Attributes:
        editor (Candy): The session being drawn.
    """

    def __init__(self, editor: "Candy") -> None:
        self.editor = editor

    def compose(self, now: Optional[float] = None) -> FrameBuilder:
        """Builds the full frame without writing it."""
        editor = self.editor
        cursor = editor.cursor
        cursor.scroll()
        width = editor.screen_cols

        frame = FrameBuilder()
        frame.hide_cursor().home()
        self._draw_rows(frame, width)
        self._draw_status_bar(frame, width)
        frame.newline()
        frame.text(editor.status.visible(now)[:width]).clear_line().newline()
        frame.text(visible_text(editor.modes.command_line)[:width]).clear_line()

        screen_row, screen_col = cursor.screen_position()
        frame.move_cursor(screen_row, screen_col).show_cursor()
        return frame

    def draw(self) -> None:
        """Composes the frame and writes it with a single call."""
        data = self.compose().to_bytes()
        self.editor.terminal.write(data)
        logging.debug(f"draw: frame of {len(data)} bytes written.")

    def _draw_rows(self, frame: FrameBuilder, width: int) -> None:
        document = self.editor.document
        cursor = self.editor.cursor
        for y in range(cursor.screen_rows):
            file_row = y + cursor.row_offset
            if file_row >= document.row_count:
                frame.text(EMPTY_ROW_MARKER)
            else:
                line = document.rows[file_row]
                frame.text(visible_text(line[cursor.col_offset:cursor.col_offset + width]))
            frame.clear_line().newline()

    def status_line(self, width: int) -> str:
        """Mode, file name, row count, dirty marker and 1-based position."""
        editor = self.editor
        document = editor.document
        name = (document.filename or NO_NAME)[:FILENAME_WIDTH]
        left = f" {editor.modes.mode.value} | {name} - {document.row_count} lines"
        if document.dirty:
            left += " (modified)"
        right = f"{editor.cursor.cy + 1}:{editor.cursor.cx + 1} "

        if len(left) + len(right) <= width:
            return left + " " * (width - len(left) - len(right)) + right
        return left[:width].ljust(width)

    def _draw_status_bar(self, frame: FrameBuilder, width: int) -> None:
        frame.reverse().text(visible_text(self.status_line(width))).reset()

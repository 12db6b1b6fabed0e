# candy/core/CursorViewport.py
"""candy.core.CursorViewport
=============================

Cursor position and scroll offsets.

A motion is a pure function of the motion name, the current cursor and the
row under it. Every motion is followed by a clamp pass (keep the column
inside the row) and a scroll pass (keep the cursor inside the visible
window with minimal scrolling, no centering).
"""

import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from candy.core.Document import Document

DEFAULT_PAGE_SIZE = 10

# Characters ending a word besides the space: ASCII 33-46 (! through .).
PUNCTUATION = frozenset(chr(c) for c in range(33, 47))


def is_word_boundary(ch: str) -> bool:
    return ch == " " or ch in PUNCTUATION


def _is_word_start(line: str, i: int) -> bool:
    """A stop for w/b: punctuation, or a word character after a boundary."""
    ch = line[i]
    if ch in PUNCTUATION:
        return True
    if ch == " ":
        return False
    return i == 0 or is_word_boundary(line[i - 1])


def next_word_start(line: str, column: int) -> int:
    """Column of the next word start after *column*, or *column* if none."""
    for i in range(max(column + 1, 0), len(line)):
        if _is_word_start(line, i):
            return i
    return column


def prev_word_start(line: str, column: int) -> int:
    """Column of the previous word start before *column*, or *column* if none."""
    for i in range(min(column, len(line)) - 1, -1, -1):
        if _is_word_start(line, i):
            return i
    return column


class CursorViewport:
    """Logical cursor plus the top-left visible cell of the document.

    Attributes:
        cx (int): Cursor column.
        cy (int): Cursor row; may equal ``row_count`` (sentinel row).
        row_offset (int): First visible document row.
        col_offset (int): First visible column.
        screen_rows (int): Height of the text area.
        screen_cols (int): Width of the text area.
        page_size (int): Rows moved by page-down / page-up.
    """

    def __init__(self, screen_rows: int = 1, screen_cols: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.cx: int = 0
        self.cy: int = 0
        self.row_offset: int = 0
        self.col_offset: int = 0
        self.screen_rows: int = max(screen_rows, 1)
        self.screen_cols: int = max(screen_cols, 1)
        self.page_size: int = page_size

        self._motions: dict[str, Callable[["Document"], None]] = {
            "h": self._left,
            "l": self._right,
            "j": self._down,
            "k": self._up,
            "0": self._line_start,
            "$": self._line_end,
            "w": self._word_forward,
            "b": self._word_backward,
            "gg": self._first_row,
            "G": self._last_row,
            "page_down": self._page_down,
            "page_up": self._page_up,
        }

    @property
    def motions(self) -> frozenset[str]:
        return frozenset(self._motions)

    def resize(self, screen_rows: int, screen_cols: int) -> None:
        self.screen_rows = max(screen_rows, 1)
        self.screen_cols = max(screen_cols, 1)

    def screen_position(self) -> tuple[int, int]:
        """On-screen ``(row, column)`` of the cursor, 0-based."""
        return self.cy - self.row_offset, self.cx - self.col_offset

    # --- motion entry point ---------------------------------------------------

    def move(self, motion: str, document: "Document") -> bool:
        """Applies *motion*, then the clamp and scroll passes.

        Returns:
            bool: False for an unknown motion name (nothing changes).
        """
        action = self._motions.get(motion)
        if action is None:
            logging.debug(f"move: unknown motion {motion!r}")
            return False
        action(document)
        self.clamp(document)
        self.scroll()
        return True

    def clamp(self, document: "Document") -> None:
        """Keeps ``cy`` in ``[0, row_count]`` and ``cx`` in ``[0, len(row)]``."""
        self.cy = max(0, min(self.cy, document.row_count))
        self.cx = max(0, min(self.cx, document.row_length(self.cy)))

    def scroll(self) -> None:
        if self.cy < self.row_offset:
            self.row_offset = self.cy
        if self.cy >= self.row_offset + self.screen_rows:
            self.row_offset = self.cy - self.screen_rows + 1
        if self.cx < self.col_offset:
            self.col_offset = self.cx
        if self.cx >= self.col_offset + self.screen_cols:
            self.col_offset = self.cx - self.screen_cols + 1

    # --- motions --------------------------------------------------------------

    def _current_row(self, document: "Document") -> str:
        if 0 <= self.cy < document.row_count:
            return document.rows[self.cy]
        return ""

    def _last_row_index(self, document: "Document") -> int:
        return max(document.row_count - 1, 0)

    def _left(self, document: "Document") -> None:
        if self.cx > 0:
            self.cx -= 1

    def _right(self, document: "Document") -> None:
        if self.cx < len(self._current_row(document)) - 1:
            self.cx += 1

    def _down(self, document: "Document") -> None:
        self.cy = min(self.cy + 1, self._last_row_index(document))

    def _up(self, document: "Document") -> None:
        self.cy = max(self.cy - 1, 0)

    def _line_start(self, document: "Document") -> None:
        self.cx = 0

    def _line_end(self, document: "Document") -> None:
        self.cx = max(len(self._current_row(document)) - 1, 0)

    def _word_forward(self, document: "Document") -> None:
        self.cx = next_word_start(self._current_row(document), self.cx)

    def _word_backward(self, document: "Document") -> None:
        self.cx = prev_word_start(self._current_row(document), self.cx)

    def _first_row(self, document: "Document") -> None:
        self.cy = 0

    def _last_row(self, document: "Document") -> None:
        self.cy = self._last_row_index(document)

    def _page_down(self, document: "Document") -> None:
        self.cy = min(self.cy + self.page_size, self._last_row_index(document))

    def _page_up(self, document: "Document") -> None:
        self.cy = max(self.cy - self.page_size, 0)

# candy/core/ModeController.py
"""candy.core.ModeController
=============================

The three-state mode machine of the editor.

    VIEW ──i/a/o/O──▶ INSERT ──Esc/Ctrl-C──▶ VIEW
    VIEW ──:────────▶ COMMAND_LINE ──Esc/Enter/backspace past ':'──▶ VIEW

VIEW is the initial state and the only one a cancel leads back to. Keys
not consumed by a transition go to the CommandInterpreter (VIEW), into the
document (INSERT) or into the command-line buffer (COMMAND_LINE).
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable

from candy.core.CommandInterpreter import PENDING_LIMIT, CommandInterpreter
from candy.ui.KeyBinder import BACKSPACE, ENTER, ESC, TAB, is_printable

if TYPE_CHECKING:
    from candy.core.Candy import Candy


class Mode(Enum):
    VIEW = "VIEW"
    INSERT = "INSERT"
    COMMAND_LINE = "COMMAND"


COMMAND_LINE_SENTINEL = ":"


class ModeController:
    """Routes each keystroke according to the active mode.

    Attributes:
        editor (Candy): The owning session.
        mode (Mode): The active mode.
        command_line (str): Text typed in COMMAND_LINE mode, starting with ``:``.
        interpreter (CommandInterpreter): Receives unconsumed View-mode keys.
    """

    def __init__(self, editor: "Candy", pending_limit: int = PENDING_LIMIT) -> None:
        self.editor = editor
        self.mode: Mode = Mode.VIEW
        self.command_line: str = ""
        self.interpreter = CommandInterpreter(editor, pending_limit=pending_limit)

        self._mode_handlers: dict[Mode, Callable[[int], None]] = {
            Mode.VIEW: self._handle_view,
            Mode.INSERT: self._handle_insert,
            Mode.COMMAND_LINE: self._handle_command_line,
        }
        self._view_transitions: dict[str, Callable[[], None]] = {
            "i": self.enter_insert,
            "a": self.enter_append,
            "o": self.open_row_below,
            "O": self.open_row_above,
            ":": self.enter_command_line,
        }

    def handle(self, key: int) -> None:
        """Processes one keystroke, then re-clamps and scrolls the cursor."""
        action = self.editor.keybinder.lookup(key)
        if action == "quit":
            self.editor.quit(force=True)
        elif action == "save_file":
            self.editor.save()
        else:
            self._mode_handlers[self.mode](key)

        cursor, document = self.editor.cursor, self.editor.document
        if self.mode is not Mode.INSERT:
            cursor.clamp(document)
        cursor.scroll()

    # --- transitions ----------------------------------------------------------

    def _set_mode(self, mode: Mode) -> None:
        if mode is not self.mode:
            logging.debug(f"Mode change: {self.mode.value} -> {mode.value}")
        self.mode = mode

    def enter_insert(self) -> None:
        self._set_mode(Mode.INSERT)

    def enter_append(self) -> None:
        cursor = self.editor.cursor
        cursor.cx = min(cursor.cx + 1, self.editor.document.row_length(cursor.cy))
        self._set_mode(Mode.INSERT)

    def open_row_below(self) -> None:
        document, cursor = self.editor.document, self.editor.cursor
        at = min(cursor.cy + 1, document.row_count)
        document.insert_row(at, "")
        cursor.cy, cursor.cx = at, 0
        self._set_mode(Mode.INSERT)

    def open_row_above(self) -> None:
        document, cursor = self.editor.document, self.editor.cursor
        at = min(cursor.cy, document.row_count)
        document.insert_row(at, "")
        cursor.cy, cursor.cx = at, 0
        self._set_mode(Mode.INSERT)

    def enter_command_line(self) -> None:
        self.command_line = COMMAND_LINE_SENTINEL
        self._set_mode(Mode.COMMAND_LINE)

    def leave_insert(self) -> None:
        cursor = self.editor.cursor
        if cursor.cx > 0:
            cursor.cx -= 1
        self._set_mode(Mode.VIEW)

    def cancel_command_line(self) -> None:
        self.command_line = ""
        self._set_mode(Mode.VIEW)

    # --- per-mode handlers ----------------------------------------------------

    def _handle_view(self, key: int) -> None:
        if not self.interpreter.pending and is_printable(key):
            transition = self._view_transitions.get(chr(key))
            if transition is not None:
                transition()
                return
        self.interpreter.handle_key(key)

    def _handle_insert(self, key: int) -> None:
        document, cursor = self.editor.document, self.editor.cursor

        if key == ESC or self.editor.keybinder.lookup(key) == "interrupt":
            self.leave_insert()
        elif key == ENTER:
            if document.split_row(cursor.cy, cursor.cx):
                cursor.cy += 1
                cursor.cx = 0
        elif key == BACKSPACE:
            position = document.delete_char(cursor.cy, cursor.cx)
            if position is not None:
                cursor.cx, cursor.cy = position
        elif key == TAB or is_printable(key):
            if document.insert_char(cursor.cy, cursor.cx, chr(key)):
                cursor.cx = min(cursor.cx + 1, document.row_length(cursor.cy))
        else:
            logging.debug(f"_handle_insert: control key {key} ignored.")

    def _handle_command_line(self, key: int) -> None:
        if key == ESC or self.editor.keybinder.lookup(key) == "interrupt":
            self.cancel_command_line()
        elif key == ENTER:
            text = self.command_line[len(COMMAND_LINE_SENTINEL):]
            self.cancel_command_line()
            self.interpreter.execute_command_line(text)
        elif key == BACKSPACE:
            self.command_line = self.command_line[:-1]
            if not self.command_line:
                self.cancel_command_line()
        elif is_printable(key):
            self.command_line += chr(key)

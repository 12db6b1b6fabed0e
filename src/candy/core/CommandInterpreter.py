# candy/core/CommandInterpreter.py
"""candy.core.CommandInterpreter
=================================

Interprets View-mode keystrokes and committed `:` command lines.

Single keys (motions, ``x``, ``X``, ``Z``) execute immediately. The prefix
keys ``d`` and ``g`` are held in a small pending buffer until the second key
arrives: ``dd`` deletes the current row, ``gg`` jumps to the first row, and
any other second key is discarded without side effects. The pending buffer
is cleared after every committed or rejected command.
"""

import logging
from typing import TYPE_CHECKING, Callable

from candy.ui.KeyBinder import is_printable

if TYPE_CHECKING:
    from candy.core.Candy import Candy

PENDING_LIMIT = 10


class CommandInterpreter:
    """Key → action dispatch for View mode plus the `:` command grammar.

    Attributes:
        editor (Candy): The session whose document and cursor are edited.
        pending (list[str]): Keys of a not yet resolved multi-key command.
        pending_limit (int): Upper bound of the pending buffer.
    """

    PREFIX_KEYS = frozenset("dg")

    def __init__(self, editor: "Candy", pending_limit: int = PENDING_LIMIT) -> None:
        self.editor = editor
        self.pending: list[str] = []
        self.pending_limit = max(pending_limit, 2)

        self._single_key_actions: dict[str, Callable[[], bool]] = {
            "x": self.delete_char_under_cursor,
            "X": self.delete_char_before_cursor,
            "Z": self.save,
        }
        self._prefixed_actions: dict[str, Callable[[], bool]] = {
            "dd": self.delete_current_row,
            "gg": lambda: self.move("gg"),
        }
        self._commands: dict[str, Callable[[str], bool]] = {
            "w": self._cmd_write,
            "q": self._cmd_quit,
            "q!": self._cmd_force_quit,
            "wq": self._cmd_write_quit,
        }

    # --- View-mode keys -------------------------------------------------------

    def handle_key(self, key: int) -> bool:
        """Feeds one View-mode key.

        Returns:
            bool: True if a command was committed, False while a prefix is
            pending or when the key matched nothing.
        """
        if self.pending:
            return self._resolve_pending(key)

        action = self.editor.keybinder.lookup(key)
        if action in ("page_down", "page_up"):
            return self.move(action)

        if not is_printable(key):
            logging.debug(f"handle_key: unbound control key {key}, ignored.")
            return False

        ch = chr(key)
        if ch in self.PREFIX_KEYS:
            self.pending.append(ch)
            return False
        if ch in self._single_key_actions:
            return self._single_key_actions[ch]()
        if ch in self.editor.cursor.motions:
            return self.move(ch)

        logging.debug(f"handle_key: no command bound to {ch!r}.")
        return False

    def _resolve_pending(self, key: int) -> bool:
        if len(self.pending) < self.pending_limit:
            self.pending.append(chr(key) if is_printable(key) else "")
        command = "".join(self.pending)
        self.pending.clear()

        action = self._prefixed_actions.get(command)
        if action is None:
            logging.debug(f"_resolve_pending: no match for {command!r}, discarded.")
            return False
        return action()

    # --- actions --------------------------------------------------------------

    def move(self, motion: str) -> bool:
        return self.editor.cursor.move(motion, self.editor.document)

    def delete_char_under_cursor(self) -> bool:
        document, cursor = self.editor.document, self.editor.cursor
        row_length = document.row_length(cursor.cy)
        if cursor.cy >= document.row_count or cursor.cx >= row_length:
            return False
        document.delete_char(cursor.cy, cursor.cx + 1)
        if cursor.cx >= row_length - 1 and cursor.cx > 0:
            cursor.cx = row_length - 2
        return True

    def delete_char_before_cursor(self) -> bool:
        document, cursor = self.editor.document, self.editor.cursor
        if cursor.cx <= 0 or cursor.cy >= document.row_count:
            return False
        position = document.delete_char(cursor.cy, cursor.cx)
        if position is None:
            return False
        cursor.cx, cursor.cy = position
        return True

    def delete_current_row(self) -> bool:
        document, cursor = self.editor.document, self.editor.cursor
        if not document.delete_row(cursor.cy):
            return False
        cursor.cy = min(cursor.cy, max(document.row_count - 1, 0))
        cursor.clamp(document)
        return True

    def save(self) -> bool:
        return self.editor.save()

    # --- command line ---------------------------------------------------------

    def execute_command_line(self, text: str) -> bool:
        """Runs a committed command line (the text after ``:``).

        Grammar: ``w[ <filename>]``, ``q``, ``q!``, ``wq[ <filename>]``.
        Extra leading ``:`` are ignored; unknown input is reported as
        ``Undefined cmd: <text>``.

        Returns:
            bool: True if the command was recognised and succeeded.
        """
        text = text.strip().lstrip(":").strip()
        if not text:
            return False
        name, _, argument = text.partition(" ")
        command = self._commands.get(name)
        if command is None:
            self.editor.status.set(f"Undefined cmd: {text}")
            logging.debug(f"execute_command_line: undefined command {text!r}")
            return False
        return command(argument.strip())

    def _cmd_write(self, argument: str) -> bool:
        return self.editor.save(argument or None)

    def _cmd_quit(self, argument: str) -> bool:
        return self.editor.quit()

    def _cmd_force_quit(self, argument: str) -> bool:
        return self.editor.quit(force=True)

    def _cmd_write_quit(self, argument: str) -> bool:
        if not self.editor.save(argument or None):
            return False
        return self.editor.quit()

# candy/core/Candy.py
"""candy.core.Candy
====================
Candy: the editor session.

One explicit session object owns every piece of mutable editor state: the
Document, the CursorViewport, the StatusMessage, the ModeController (and
through it the CommandInterpreter and its pending keys) and the Renderer.
Nothing lives at module level.

The session talks to a terminal collaborator through three calls:

- ``read_key() -> int``: block until one input byte is available.
- ``get_size() -> tuple[int, int]``: terminal ``(rows, columns)``.
- ``write(data: bytes)``: write an opaque byte sequence verbatim.

The main loop is strictly sequential: render, block on one key, handle it.
"""

import logging
import os
import time
from typing import Any, Callable, Optional

from candy.core.CursorViewport import CursorViewport
from candy.core.Document import Document
from candy.core.errors import DocumentLoadError, NoFileNameError
from candy.core.ModeController import ModeController
from candy.core.StatusMessage import StatusMessage
from candy.ui.KeyBinder import KeyBinder
from candy.ui.Renderer import RESERVED_LINES, Renderer
from candy.utils.logging_config import KEY_LOGGER, logger
from candy.utils.utils import get_setting

UNSAVED_CHANGES_MESSAGE = "save file before or q!"
HELP_MESSAGE = "HELP: :w = save | :q = quit | :q! = force quit"


class Candy:
    """The editor session.

    Attributes:
        terminal: The terminal collaborator (read_key / get_size / write).
        config (dict): Merged application configuration.
        document (Document): The single buffer being edited.
        cursor (CursorViewport): Cursor position and scroll offsets.
        status (StatusMessage): Transient message line content.
        keybinder (KeyBinder): Configured control keys.
        modes (ModeController): The mode machine receiving every key.
        renderer (Renderer): Composes and writes frames.
        running (bool): Main loop control flag.
    """

    def __init__(
        self,
        terminal: Any,
        config: Optional[dict[str, Any]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.terminal = terminal
        self.config: dict[str, Any] = config or {}

        self.document = Document()
        self.cursor = CursorViewport(
            page_size=get_setting(self.config, "editor", "page_size", int)
        )
        self.status = StatusMessage(
            timeout=get_setting(self.config, "editor", "status_message_timeout", float),
            clock=clock,
        )
        self.keybinder = KeyBinder(self.config)
        self.modes = ModeController(
            self, pending_limit=get_setting(self.config, "editor", "pending_limit", int)
        )
        self.renderer = Renderer(self)
        self.running: bool = True
        self.screen_cols: int = 1

        self.handle_resize()
        self.status.set(HELP_MESSAGE)
        logging.info("Candy session initialized.")

    # --- file operations ------------------------------------------------------

    def open_file(self, path: str) -> None:
        """Loads *path* into the document.

        A path that does not exist yet starts an empty document named after
        it, so that the first save creates the file.

        Raises:
            DocumentLoadError: If the file exists but cannot be read.
        """
        if not os.path.exists(path):
            self.document = Document(filename=path)
            self.status.set(f"New file: {os.path.basename(path)}")
            logging.info(f"open_file: '{path}' does not exist, starting a new document.")
            return
        try:
            self.document.load(path)
        except OSError as e:
            logging.error(f"Failed to open '{path}': {e}", exc_info=True)
            raise DocumentLoadError(f"Cannot open '{path}': {e.strerror or e}") from e
        self.cursor.cx = self.cursor.cy = 0
        self.cursor.row_offset = self.cursor.col_offset = 0

    def save(self, path: Optional[str] = None) -> bool:
        """Saves the document, reporting the outcome on the message line.

        Failures leave the document, its path and its dirty flag unchanged.
        """
        try:
            written = self.document.save(path)
        except NoFileNameError:
            self.status.set("No file name")
            logging.warning("save: no file name set.")
            return False
        except OSError as e:
            self.status.set(f"Can't save! I/O error: {e.strerror or e}")
            logging.error(f"Failed to write file '{path or self.document.filename}': {e}", exc_info=True)
            return False
        self.status.set(f"{written} bytes written to disk")
        return True

    def quit(self, force: bool = False) -> bool:
        """Stops the main loop unless unsaved changes guard it."""
        if self.document.dirty and not force:
            self.status.set(UNSAVED_CHANGES_MESSAGE)
            return False
        self.running = False
        logger.info("Main loop stop signaled (force=%s).", force)
        return True

    # --- loop -----------------------------------------------------------------

    def handle_resize(self) -> None:
        """Re-reads the terminal size; three bottom lines are reserved."""
        rows, cols = self.terminal.get_size()
        self.screen_cols = max(cols, 1)
        self.cursor.resize(rows - RESERVED_LINES, cols)

    def process_key(self, key: int) -> None:
        KEY_LOGGER.debug(f"key={key!r} mode={self.modes.mode.value}")
        self.modes.handle(key)

    def run(self) -> None:
        """Render, read one key, handle it; until `running` is cleared."""
        logger.info("Editor main loop started.")
        while self.running:
            self.handle_resize()
            self.renderer.draw()
            key = self.terminal.read_key()
            self.process_key(key)
        logger.info("Editor main loop finished.")

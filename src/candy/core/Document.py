# candy/core/Document.py
"""candy.core.Document
=======================

Document: the in-memory text buffer of the candy editor.

A document is an ordered list of rows. Each row is one line of decoded text
without its line terminator, so a row never contains ``\\n`` or ``\\r``. The
document also tracks a dirty flag (unsaved mutations), the associated file
path and the encoding used to read and write it.

All row/column arguments are clamped or rejected silently: keystrokes cannot
"fail" from the user's point of view, so the mutators return a boolean or an
optional position instead of raising.
"""

import logging
import os
from typing import Optional

import chardet

from candy.core.errors import NoFileNameError

# Row is a plain str: a line of text without the terminator.
Row = str

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75


def decode_bytes(data: bytes, default_encoding: str = "utf-8") -> tuple[str, str]:
    """Decodes raw file content, detecting its encoding with chardet.

    A confident chardet guess is tried first, then strict UTF-8, then strict
    Latin-1 and finally UTF-8 with replacement characters, which cannot fail.
    ASCII guesses are widened to UTF-8 so that non-ASCII text typed later can
    still be saved.

    Args:
        data: The raw bytes to decode.
        default_encoding: Encoding reported for empty input.

    Returns:
        tuple[str, str]: The decoded text and the encoding that was used.
    """
    if not data:
        return "", default_encoding

    result = chardet.detect(data[:CHARDET_SAMPLE_SIZE])
    guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logging.debug(f"Chardet detected encoding '{guess}' with confidence {confidence:.2f}.")

    attempts: list[tuple[str, str]] = []
    if guess and confidence >= CHARDET_MIN_CONFIDENCE:
        guess = "utf-8" if guess.lower() == "ascii" else guess.lower()
        attempts.append((guess, "strict"))
    for fallback in (("utf-8", "strict"), ("latin-1", "strict")):
        if fallback not in attempts:
            attempts.append(fallback)

    for encoding, errors in attempts:
        try:
            return data.decode(encoding, errors=errors), encoding
        except (UnicodeDecodeError, LookupError) as e_dec:
            logging.warning(f"Failed to decode content as '{encoding}': {e_dec}")

    return data.decode("utf-8", errors="replace"), "utf-8"


def split_lines(text: str) -> list[Row]:
    """Splits *text* into rows, one per ``\\n``-terminated line.

    A final line without a terminator still becomes a row. ``\\r\\n`` and a
    lone ``\\r`` both end a line, so no row ever contains ``\\r``.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class Document:
    """Ordered collection of rows plus dirty flag, file path and encoding.

    Attributes:
        rows (list[str]): The text, one entry per line.
        dirty (bool): True iff a mutation happened since the last load/save.
        filename (Optional[str]): Associated path, None for a new document.
        encoding (str): Codec used by `serialize` and `save`.
    """

    def __init__(
        self,
        rows: Optional[list[Row]] = None,
        filename: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.rows: list[Row] = list(rows) if rows is not None else []
        self.dirty: bool = False
        self.filename: Optional[str] = filename
        self.encoding: str = encoding

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def row_length(self, at: int) -> int:
        """Length of row *at*, or 0 for the sentinel past-the-end row."""
        if 0 <= at < len(self.rows):
            return len(self.rows[at])
        return 0

    # --- row operations -------------------------------------------------------

    def insert_row(self, at: int, text: str = "") -> bool:
        """Inserts a new row before index *at* (``at == row_count`` appends)."""
        if at < 0 or at > len(self.rows):
            logging.debug(f"insert_row: index {at} out of range, ignored.")
            return False
        self.rows.insert(at, text)
        self.dirty = True
        return True

    def delete_row(self, at: int) -> bool:
        """Removes row *at*; only ``0 <= at < row_count`` is accepted."""
        if at < 0 or at >= len(self.rows):
            logging.debug(f"delete_row: index {at} out of range, ignored.")
            return False
        del self.rows[at]
        self.dirty = True
        return True

    def append_string(self, at: int, text: str) -> bool:
        if at < 0 or at >= len(self.rows):
            return False
        self.rows[at] += text
        self.dirty = True
        return True

    def split_row(self, row: int, column: int) -> bool:
        """Breaks *row* at *column*, moving the tail onto a new row below.

        On the sentinel row past the end of the document this simply appends
        an empty row, so Enter on an empty document creates its first line.
        """
        if row == len(self.rows):
            return self.insert_row(row, "")
        if row < 0 or row > len(self.rows):
            return False
        line = self.rows[row]
        column = max(0, min(column, len(line)))
        if not self.insert_row(row + 1, line[column:]):
            return False
        self.rows[row] = line[:column]
        return True

    # --- character operations -------------------------------------------------

    def insert_char(self, row: int, column: int, ch: str) -> bool:
        """Inserts *ch* into *row* at *column*.

        Typing on the sentinel row (``row == row_count``) silently creates it
        first. *column* is clamped to the current row length.
        """
        if row == len(self.rows):
            self.insert_row(row, "")
        if row < 0 or row >= len(self.rows):
            logging.debug(f"insert_char: row {row} out of range, ignored.")
            return False
        line = self.rows[row]
        if column < 0 or column > len(line):
            column = len(line)
        self.rows[row] = line[:column] + ch + line[column:]
        self.dirty = True
        return True

    def delete_char(self, row: int, column: int) -> Optional[tuple[int, int]]:
        """Deletes the character immediately before *column* in *row*.

        At column 0 the row is joined onto the end of the previous one and
        removed (row-joining backspace).

        Returns:
            Optional[tuple[int, int]]: The ``(column, row)`` position the edit
            leaves the caret at, or None when nothing was deleted (document
            start, sentinel row, out-of-range row).
        """
        if row < 0 or row >= len(self.rows):
            return None
        if row == 0 and column <= 0:
            return None

        if column <= 0:
            join_column = len(self.rows[row - 1])
            self.append_string(row - 1, self.rows[row])
            self.delete_row(row)
            return join_column, row - 1

        line = self.rows[row]
        column = min(column, len(line))
        self.rows[row] = line[: column - 1] + line[column:]
        self.dirty = True
        return column - 1, row

    # --- serialization --------------------------------------------------------

    def serialize(self) -> bytes:
        """Every row followed by one ``\\n``, encoded with `encoding`."""
        text = "".join(f"{row}\n" for row in self.rows)
        return text.encode(self.encoding, errors="replace")

    def load_bytes(self, data: bytes) -> None:
        """Replaces the content with the rows decoded from *data*."""
        text, self.encoding = decode_bytes(data, self.encoding)
        self.rows = split_lines(text)
        self.dirty = False

    def load(self, path: str) -> None:
        """Reads *path* and adopts it as the associated file.

        Raises:
            OSError: If the file cannot be read.
        """
        with open(path, "rb") as f:
            data = f.read()
        self.load_bytes(data)
        self.filename = path
        logging.info(
            f"File loaded: '{path}', Encoding: {self.encoding}, Lines: {len(self.rows)}"
        )

    def save(self, path: Optional[str] = None) -> int:
        """Writes the serialized document to *path* or the associated file.

        A new path is adopted only after the write succeeded.

        Returns:
            int: Number of bytes written.

        Raises:
            NoFileNameError: If neither *path* nor `filename` is set.
            OSError: Propagated from the write; `dirty` stays untouched.
        """
        target = path or self.filename
        if not target:
            raise NoFileNameError("No file name")

        data = self.serialize()
        logging.debug(f"save: Writing {len(data)} bytes to '{target}' ({self.encoding})")
        with open(target, "wb") as f:
            f.write(data)

        self.filename = target
        self.dirty = False
        logging.info(f"Saved '{os.path.basename(target)}' ({len(data)} bytes)")
        return len(data)

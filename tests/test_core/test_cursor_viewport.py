# tests/test_core/test_cursor_viewport.py
"""CursorViewport Tests
========================

Unit tests for cursor motions, the clamp pass and the scroll pass.
"""

import pytest

from candy.core.CursorViewport import (
    CursorViewport,
    is_word_boundary,
    next_word_start,
    prev_word_start,
)
from candy.core.Document import Document


@pytest.fixture
def doc():
    return Document(["abc", "def", "ghijkl"])


def test_l_stops_at_last_character(doc):
    cursor = CursorViewport(10, 80)
    for _ in range(3):
        cursor.move("l", doc)
    assert cursor.cx == 2


def test_h_stops_at_column_zero(doc):
    cursor = CursorViewport(10, 80)
    cursor.move("h", doc)
    assert cursor.cx == 0


def test_j_and_k_stay_inside_document(doc):
    cursor = CursorViewport(10, 80)
    for _ in range(5):
        cursor.move("j", doc)
    assert cursor.cy == 2
    for _ in range(5):
        cursor.move("k", doc)
    assert cursor.cy == 0


def test_vertical_move_clamps_column_to_shorter_row(doc):
    cursor = CursorViewport(10, 80)
    cursor.cy = 2
    cursor.move("$", doc)
    assert cursor.cx == 5

    cursor.move("k", doc)
    assert cursor.cy == 1
    assert cursor.cx == 3  # clamp keeps cx within [0, len(row)]


def test_line_start_and_end(doc):
    cursor = CursorViewport(10, 80)
    cursor.move("$", doc)
    assert cursor.cx == 2
    cursor.move("0", doc)
    assert cursor.cx == 0


def test_first_and_last_row(doc):
    cursor = CursorViewport(10, 80)
    cursor.move("G", doc)
    assert cursor.cy == 2
    cursor.move("gg", doc)
    assert cursor.cy == 0


def test_page_motions_use_page_size():
    doc = Document([str(i) for i in range(30)])
    cursor = CursorViewport(5, 80, page_size=10)

    cursor.move("page_down", doc)
    assert cursor.cy == 10
    cursor.move("page_down", doc)
    cursor.move("page_down", doc)
    assert cursor.cy == 29

    cursor.move("page_up", doc)
    assert cursor.cy == 19


def test_unknown_motion_changes_nothing(doc):
    cursor = CursorViewport(10, 80)
    assert cursor.move("?", doc) is False
    assert (cursor.cx, cursor.cy) == (0, 0)


def test_motions_on_empty_document_stay_at_origin():
    doc = Document()
    cursor = CursorViewport(10, 80)
    for motion in ("l", "j", "$", "w", "b", "G", "page_down"):
        cursor.move(motion, doc)
        assert (cursor.cx, cursor.cy) == (0, 0)


def test_word_boundaries():
    assert is_word_boundary(" ")
    assert is_word_boundary("!")
    assert is_word_boundary(".")
    assert not is_word_boundary("a")
    assert not is_word_boundary("/")


def test_word_forward_and_backward():
    line = "foo bar.baz"
    assert next_word_start(line, 0) == 4
    assert next_word_start(line, 4) == 7
    assert next_word_start(line, 7) == 8
    assert next_word_start(line, 8) == 8  # no further word start

    assert prev_word_start(line, 8) == 7
    assert prev_word_start(line, 7) == 4
    assert prev_word_start(line, 4) == 0
    assert prev_word_start(line, 0) == 0


def test_word_motion_through_move():
    doc = Document(["foo bar"])
    cursor = CursorViewport(10, 80)

    cursor.move("w", doc)
    assert cursor.cx == 4
    cursor.move("b", doc)
    assert cursor.cx == 0


def test_clamp_allows_sentinel_row():
    doc = Document(["abc"])
    cursor = CursorViewport(10, 80)
    cursor.cy, cursor.cx = 5, 5

    cursor.clamp(doc)

    assert cursor.cy == 1
    assert cursor.cx == 0


def test_scroll_keeps_cursor_visible_with_minimal_offset():
    doc = Document([str(i) for i in range(50)])
    cursor = CursorViewport(screen_rows=10, screen_cols=80)

    cursor.cy = 15
    cursor.scroll()
    assert cursor.row_offset == 6

    cursor.cy = 3
    cursor.scroll()
    assert cursor.row_offset == 3

    cursor.move("j", doc)
    assert cursor.row_offset == 3
    assert cursor.screen_position() == (1, 0)


def test_horizontal_scroll():
    doc = Document(["x" * 100])
    cursor = CursorViewport(screen_rows=5, screen_cols=20)

    cursor.move("$", doc)

    assert cursor.cx == 99
    assert cursor.col_offset == 80
    assert cursor.screen_position() == (0, 19)


def test_resize_never_goes_below_one():
    cursor = CursorViewport()
    cursor.resize(-2, 0)
    assert (cursor.screen_rows, cursor.screen_cols) == (1, 1)

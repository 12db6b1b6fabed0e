# tests/conftest.py
"""Pytest configuration with shared fixtures for the candy editor tests.

The editor core never touches a real terminal: every session under test is
wired to `FakeTerminal` (see tests/stubs.py), which replays scripted key
bytes, records written frames and reports a fixed 24x80 size.
"""

from __future__ import annotations

from typing import Any

import pytest

from candy.core.Candy import Candy
from candy.core.Document import Document
from candy.utils.utils import DEFAULT_CONFIG, deep_merge
from tests.stubs import FakeClock, FakeTerminal


@pytest.fixture
def config() -> dict[str, Any]:
    """Provide the embedded default configuration (a private copy)."""
    return deep_merge({}, DEFAULT_CONFIG)


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def editor(terminal: FakeTerminal, config: dict[str, Any], clock: FakeClock) -> Candy:
    """Create a fresh session with an empty, unnamed document.

    The startup help message is cleared so tests start from a blank
    message line.
    """
    session = Candy(terminal, config=config, clock=clock)
    session.status.clear()
    return session


@pytest.fixture
def sample_rows() -> list[str]:
    return ["abc", "def"]


@pytest.fixture
def loaded_editor(editor: Candy, sample_rows: list[str]) -> Candy:
    """Provide a session whose document holds `sample_rows` and is clean."""
    editor.document = Document(sample_rows)
    return editor

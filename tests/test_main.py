# tests/test_main.py
"""Tests for the `candy` entry point.

The real terminal is replaced by `FakeTerminal` (with no-op enter/exit), so
`start()` runs the full startup, main loop and teardown path in-process.
"""

from unittest.mock import patch

import pytest

from candy import __main__ as entry
from candy.core.errors import TerminalError
from candy.utils.utils import DEFAULT_CONFIG, deep_merge
from tests.stubs import FakeTerminal, keys


class ScriptedTerminal(FakeTerminal):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.entered = False
        self.exited = False

    def enter(self):
        self.entered = True

    def exit(self):
        self.exited = True


@pytest.fixture
def patched_startup(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with (
        patch.object(entry, "load_config", return_value=deep_merge({}, DEFAULT_CONFIG)),
        patch.object(entry, "setup_logging"),
        patch.object(entry, "load_dotenv"),
    ):
        yield


def test_resolve_cli_path():
    assert entry._resolve_cli_path(["candy"]) is None
    assert entry._resolve_cli_path(["candy", "  "]) is None
    assert entry._resolve_cli_path(["candy", "notes.txt"]) == "notes.txt"


def test_start_edits_saves_and_exits_cleanly(tmp_path, patched_startup):
    terminal = ScriptedTerminal(keys=keys("ihi\x1b:wq\r"))

    with patch.object(entry, "TerminalAppMode", return_value=terminal):
        with pytest.raises(SystemExit) as exc_info:
            entry.start(["candy", "new.txt"])

    assert exc_info.value.code == 0
    assert terminal.entered and terminal.exited
    assert (tmp_path / "new.txt").read_bytes() == b"hi\n"


def test_start_restores_terminal_on_fatal_error(patched_startup, capsys):
    terminal = ScriptedTerminal()

    with (
        patch.object(entry, "TerminalAppMode", return_value=terminal),
        patch.object(entry, "run_editor", side_effect=TerminalError("read: boom")),
    ):
        with pytest.raises(SystemExit) as exc_info:
            entry.start(["candy"])

    assert exc_info.value.code == 1
    assert terminal.exited
    assert "read: boom" in capsys.readouterr().err


def test_start_fails_when_configuration_cannot_load(capsys):
    with (
        patch.object(entry, "load_dotenv"),
        patch.object(entry, "load_config", side_effect=RuntimeError("bad config")),
    ):
        with pytest.raises(SystemExit) as exc_info:
            entry.start(["candy"])

    assert exc_info.value.code == 1
    assert "FATAL" in capsys.readouterr().err


def test_start_runs_without_home_directory(patched_startup):
    terminal = ScriptedTerminal(keys=keys(":q\r"))

    with (
        patch.object(entry, "get_user_config_dir", side_effect=RuntimeError("no home")),
        patch.object(entry, "TerminalAppMode", return_value=terminal),
    ):
        with pytest.raises(SystemExit) as exc_info:
            entry.start(["candy"])

    assert exc_info.value.code == 0
    assert terminal.exited

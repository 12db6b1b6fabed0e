# tests/ui/test_keybinder.py
"""Unit tests for key decoding and the `KeyBinder` class.
========================================================

Verifies that human-readable key specifications from the ``[keybindings]``
config section decode to the bytes a raw terminal delivers, and that
invalid user bindings fall back to the defaults instead of failing.
"""

import logging

import pytest

from candy.ui.KeyBinder import (
    BACKSPACE,
    ENTER,
    ESC,
    TAB,
    KeyBinder,
    ctrl_key,
    decode_keystring,
    is_printable,
)


@pytest.mark.parametrize(
    "spec, expected",
    [
        ("ctrl+q", 17),
        ("Ctrl-S", 19),
        ("^d", 4),
        ("esc", ESC),
        ("enter", ENTER),
        ("backspace", BACKSPACE),
        ("tab", TAB),
        ("space", 32),
        ("x", ord("x")),
        (27, 27),
    ],
)
def test_decode_keystring(spec, expected) -> None:
    assert decode_keystring(spec) == expected


@pytest.mark.parametrize("spec", ["", "ctrl+", "ctrl+12", "f13", "alt+x"])
def test_decode_keystring_rejects_unknown_specs(spec) -> None:
    with pytest.raises(ValueError):
        decode_keystring(spec)


def test_ctrl_key_and_printable() -> None:
    assert ctrl_key("c") == 3
    assert is_printable(ord("~"))
    assert not is_printable(ESC)
    assert not is_printable(BACKSPACE)


def test_default_bindings() -> None:
    kb = KeyBinder({})

    assert kb.lookup(17) == "quit"
    assert kb.lookup(19) == "save_file"
    assert kb.lookup(4) == "page_down"
    assert kb.lookup(21) == "page_up"
    assert kb.lookup(3) == "interrupt"
    assert kb.lookup(ord("x")) is None
    assert kb.key_for("quit") == 17


def test_user_bindings_override_defaults() -> None:
    kb = KeyBinder({"keybindings": {"quit": "ctrl+x"}})

    assert kb.lookup(24) == "quit"
    assert kb.lookup(17) is None
    assert kb.lookup(19) == "save_file"


def test_invalid_user_binding_falls_back(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        kb = KeyBinder({"keybindings": {"save_file": "hyper+s"}})

    assert kb.key_for("save_file") == 19
    assert "Invalid keybinding for 'save_file'" in caplog.text

# candy/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
Key codes and configurable control-key bindings for the candy editor.

The terminal delivers one byte per read. Control-modified letters arrive with
their low five bits only (``ord("d") & 0x1f`` for Ctrl-D), Escape is 0x1B,
the Delete/backspace key is 127 and Enter is a carriage return.

KeyBinder turns the human-readable key strings of the ``[keybindings]``
config section ("ctrl+q", "esc", "enter", "x", ...) into those byte codes and
answers which logical action a byte is bound to.
"""

import logging
from typing import Any, Optional

# --- raw key codes ---
ESC = 0x1B
ENTER = ord("\r")
BACKSPACE = 127
TAB = 9

# Fallback bindings, mirrored by DEFAULT_CONFIG["keybindings"].
DEFAULT_KEYBINDINGS: dict[str, str] = {
    "quit": "ctrl+q",
    "save_file": "ctrl+s",
    "page_down": "ctrl+d",
    "page_up": "ctrl+u",
    "interrupt": "ctrl+c",
}

NAMED_KEYS: dict[str, int] = {
    "esc": ESC,
    "escape": ESC,
    "enter": ENTER,
    "return": ENTER,
    "backspace": BACKSPACE,
    "del": BACKSPACE,
    "delete": BACKSPACE,
    "tab": TAB,
    "space": ord(" "),
}


def ctrl_key(ch: str) -> int:
    """Returns the byte a terminal sends for Ctrl + *ch*."""
    return ord(ch) & 0x1F


def is_printable(key: int) -> bool:
    return 32 <= key < 127


def decode_keystring(key_input: str | int) -> int:
    """Decodes a key specification into the byte the terminal delivers.

    Accepted forms: integers (returned as-is), named keys ("esc", "enter",
    "tab", "backspace", "space"), "ctrl+<letter>" / "ctrl-<letter>" and
    single characters.

    Raises:
        ValueError: If the specification cannot be decoded.
    """
    if isinstance(key_input, int):
        return key_input
    if not isinstance(key_input, str):
        raise ValueError(f"Invalid key_input type: {type(key_input)}. Expected str or int.")

    if len(key_input) == 1:
        return ord(key_input)

    s = key_input.strip().lower()
    if not s:
        raise ValueError("Key string cannot be empty.")
    if s in NAMED_KEYS:
        return NAMED_KEYS[s]

    for prefix in ("ctrl+", "ctrl-", "^"):
        if s.startswith(prefix):
            base = s[len(prefix):]
            if len(base) == 1 and ("a" <= base <= "z" or base in "[\\]^_"):
                return ctrl_key(base)
            break

    raise ValueError(f"Unknown key specification: {key_input!r}")


class KeyBinder:
    """Maps configured control keys to logical action names.

    Attributes:
        keybindings (dict[str, int]): Action name → key code.
        action_map (dict[int, str]): Key code → action name (reverse index).
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        self.config = config or {}
        self.keybindings = self._load_keybindings()
        self.action_map = {code: action for action, code in self.keybindings.items()}
        logging.debug(f"KeyBinder initialized with bindings: {self.keybindings}")

    def _load_keybindings(self) -> dict[str, int]:
        """Merges user bindings over the defaults, skipping undecodable ones."""
        user_bindings = self.config.get("keybindings", {})
        resolved: dict[str, int] = {}
        for action, default_spec in DEFAULT_KEYBINDINGS.items():
            spec = user_bindings.get(action, default_spec)
            try:
                resolved[action] = decode_keystring(spec)
            except ValueError as e:
                logging.warning(
                    f"Invalid keybinding for '{action}': {spec!r} ({e}); using {default_spec!r}."
                )
                resolved[action] = decode_keystring(default_spec)
        return resolved

    def key_for(self, action: str) -> int:
        return self.keybindings[action]

    def lookup(self, key: int) -> Optional[str]:
        """Returns the action bound to *key*, or None."""
        return self.action_map.get(key)

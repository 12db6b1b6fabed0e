# candy/utils/utils.py
"""
candy.utils.utils.py
====================

Configuration helpers for the candy editor.

- First run: the commented `config.toml` template from the project root is
  copied to `~/.config/candy/config.toml` so users have something to edit.
- Loading: the embedded `DEFAULT_CONFIG` is the base layer; the user's TOML
  file is merged over it section by section. A missing or broken user file
  never stops the editor from starting.
- Typed access: `get_setting` converts a value and falls back to the
  embedded default when the user supplied something unusable.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("candy")

CONFIG_FILE_NAME = "config.toml"

# Mirror of the shipped config.toml; used whenever the user file lacks a key.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "page_size": 10,
        "status_message_timeout": 3.0,
        "pending_limit": 10,
    },
    "keybindings": {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
        "page_down": "ctrl+d",
        "page_up": "ctrl+u",
        "interrupt": "ctrl+c",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        # stdout and stderr share the raw terminal with the frame output
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "candy.log",
    },
}


def get_user_config_dir() -> Path:
    """Returns `~/.config/candy`, the home of config.toml and .env."""
    return Path.home() / ".config" / "candy"


def get_project_root() -> Path:
    """Directory holding the shipped config.toml template."""
    return Path(__file__).resolve().parents[3]


def ensure_user_config_exists() -> Optional[Path]:
    """Copies the config template into the user config dir unless one is there.

    Returns:
        Optional[Path]: The user config path, or None if the directory could
        not be created.
    """
    config_dir = get_user_config_dir()
    target = config_dir / CONFIG_FILE_NAME
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create config directory '{config_dir}': {e}")
        return None

    if target.exists():
        return target

    template = get_project_root() / CONFIG_FILE_NAME
    if not template.is_file():
        logger.debug(f"No config template at '{template}'; running on built-in defaults.")
        return target
    try:
        shutil.copy(template, target)
        logger.info(f"Wrote default configuration to {target}")
    except OSError as e:
        logger.error(f"Cannot copy config template to '{target}': {e}")
    return target


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Returns DEFAULT_CONFIG merged with the user's TOML file.

    Args:
        config_path: Explicit file to read. Defaults to the user config,
            which is created from the template on first run.
    """
    config = deep_merge({}, DEFAULT_CONFIG)

    if config_path is None:
        config_path = ensure_user_config_exists()
    if config_path is None or not config_path.is_file():
        logger.debug("No user configuration file; using built-in defaults.")
        return config

    try:
        user_config = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.error(f"Ignoring unreadable config '{config_path}': {e}")
        return config

    logger.info(f"Configuration loaded from {config_path}")
    return deep_merge(config, user_config)


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Returns a copy of *base* with *override* merged in, recursing into dicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, dict):
            merged[key] = deep_merge({}, value)
        else:
            merged[key] = value
    return merged


def get_setting(config: Dict[str, Any], section: str, key: str, cast: type = int) -> Any:
    """
    Reads `config[section][key]` converted with `cast`.

    Falls back to the embedded default when the value is missing or cannot be
    converted, logging a warning in the latter case.
    """
    default = DEFAULT_CONFIG.get(section, {}).get(key)
    raw = config.get(section, {}).get(key, default)
    try:
        value = cast(raw)
    except (ValueError, TypeError):
        logger.warning(f"Invalid value {raw!r} for [{section}] {key}; using {default!r}.")
        return default
    if isinstance(value, (int, float)) and value <= 0:
        logger.warning(f"Non-positive value {raw!r} for [{section}] {key}; using {default!r}.")
        return default
    return value

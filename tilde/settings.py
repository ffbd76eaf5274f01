"""User settings for the tilde editor.

Settings are read from a JSON file in the user's config directory. Every
setting is optional; missing or invalid values fall back to the defaults
in ``EditorConstants``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "tilde"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EditorSettings:
    """Tunable editor behavior."""
    tab_stop: int = EditorConstants.TAB_STOP
    quit_times: int = EditorConstants.QUIT_TIMES
    message_timeout: float = EditorConstants.MESSAGE_TIMEOUT
    escape_timeout: float = EditorConstants.ESCAPE_SEQUENCE_TIMEOUT
    log_level: str = "WARNING"


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / "settings.json"


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir(APP_NAME)) / f"{APP_NAME}.log"


def validate_setting(key: str, value: Any) -> bool:
    """Validate a single setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if the value is acceptable for the key.
    """
    # bool is an int subclass; never accept it for numeric settings
    if isinstance(value, bool):
        return False

    if key == 'tab_stop':
        return isinstance(value, int) and 1 <= value <= 16

    if key == 'quit_times':
        return isinstance(value, int) and 1 <= value <= 10

    if key in ('message_timeout', 'escape_timeout'):
        return isinstance(value, (int, float)) and value > 0

    if key == 'log_level':
        return isinstance(value, str) and value.upper() in LOG_LEVELS

    return False


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from disk.

    Args:
        path: Settings file to read. Defaults to ``settings.json`` in the
            user config directory.

    Returns:
        EditorSettings with every valid value from the file applied.
    """
    path = path or default_settings_path()
    settings = EditorSettings()

    if not path.exists():
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return settings

    known = {f.name for f in fields(EditorSettings)}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Unknown setting {key!r}, ignoring")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Invalid value for {key}: {value!r}, using default")
            continue
        if key == 'log_level':
            value = value.upper()
        setattr(settings, key, value)

    return settings

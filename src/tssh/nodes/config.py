"""Preference storage for tssh. Stores preferences at ~/.config/ssh-tailscale/config.json."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from tssh.nodes.errors import ConfigError
from tssh.nodes.types import Preferences, preferences_from_dict, preferences_to_dict

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "TSSH_CONFIG_DIR"
CONFIG_FILE_NAME = "config.json"


def get_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError("Could not find home directory") from e
    return home / ".config" / "ssh-tailscale"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def load_preferences() -> Preferences:
    """Read saved preferences; any problem reading them yields the defaults."""
    config_path = get_config_path()
    if not config_path.exists():
        return Preferences()
    try:
        data = json.loads(config_path.read_text())
    except (OSError, ValueError) as e:
        logger.debug("Ignoring unreadable preferences at %s: %s", config_path, e)
        return Preferences()
    if not isinstance(data, dict):
        logger.debug("Ignoring malformed preferences at %s", config_path)
        return Preferences()
    return preferences_from_dict(data)


def save_preferences(prefs: Preferences) -> None:
    config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(preferences_to_dict(prefs), indent=2))
    except OSError as e:
        raise ConfigError(f"Error saving preferences to {config_path}: {e}") from e
    logger.debug("Saved preferences to %s", config_path)

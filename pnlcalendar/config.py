"""Configuration for pnlcalendar.

Settings live in ``~/.config/pnlcalendar/config.toml``. The directory can
be moved with the ``PNLCALENDAR_HOME`` environment variable.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "journal": {
        "user": "default",
        "currency": "$",
        "default_range": "30d",
    },
    "storage": {
        "db_path": "",  # Empty means <config dir>/pnlcalendar.db
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Get the directory holding the config file and database."""
    override = os.environ.get("PNLCALENDAR_HOME")
    if override:
        return Path(override)
    return Path.home() / ".config" / "pnlcalendar"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if not isinstance(merged.get(key), dict):
            merged[key] = value
        elif isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            # A section must stay a table; keep the defaults for it
            logger.warning("Ignoring config key %r: expected a [%s] table", key, key)
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    A missing or unreadable file yields the defaults.

    Args:
        config_path: Explicit path; defaults to ``get_config_path()``.

    Returns:
        Config dict.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        loaded = toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration to disk.

    Returns:
        Path of the written file.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_db_path(config: dict) -> Path:
    """Resolve the SQLite database location from config."""
    configured = config.get("storage", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "pnlcalendar.db"


def get_user(config: dict) -> str:
    return str(config.get("journal", {}).get("user") or "default")


def get_currency(config: dict) -> str:
    return str(config.get("journal", {}).get("currency", "$"))

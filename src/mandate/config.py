"""
Engine configuration persistence.

Stores host-level settings (where sessions live, history retention,
strictness, logging) in a JSON file next to the sessions.
"""

import json
import logging
from pathlib import Path
from typing import TypedDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".mandate_config.json"


class Config(TypedDict, total=False):
    """Engine configuration."""
    sessions_dir: str  # Where JsonSessionStore writes
    history_limit: int | None  # Max turn history entries kept (None = unbounded)
    strict_validation: bool  # Refuse actions the role/phase doesn't allow
    log_level: str  # DEBUG, INFO, WARNING, ...
    seed: int | None  # Fixed seed for reproducible sessions


DEFAULT_CONFIG: Config = {
    "sessions_dir": "sessions",
    "history_limit": None,
    "strict_validation": False,
    "log_level": "INFO",
    "seed": None,
}


def get_config_path(sessions_dir: Path | str = "sessions") -> Path:
    """Get path to config file."""
    return Path(sessions_dir) / CONFIG_FILENAME


def load_config(sessions_dir: Path | str = "sessions") -> Config:
    """Load config from file, or return defaults if not found."""
    path = get_config_path(sessions_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        # Merge with defaults to handle missing keys
        config = DEFAULT_CONFIG.copy()
        config.update(saved)
        return config
    except (json.JSONDecodeError, IOError):
        logger.warning("Unreadable config at %s, using defaults", path)
        return DEFAULT_CONFIG.copy()


def save_config(config: Config, sessions_dir: Path | str = "sessions") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(sessions_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except IOError:
        return False


def set_history_limit(limit: int | None, sessions_dir: Path | str = "sessions") -> None:
    config = load_config(sessions_dir)
    config["history_limit"] = limit
    save_config(config, sessions_dir)


def set_strict_validation(strict: bool, sessions_dir: Path | str = "sessions") -> None:
    config = load_config(sessions_dir)
    config["strict_validation"] = strict
    save_config(config, sessions_dir)

"""Pre-DB bootstrap configuration.

Stores user preferences that must be known before opening the DB (where the
database lives, appearance, date display format).
Config lives in ~/.savr/config.json.
"""
import json
import logging
import os
from pathlib import Path
from utils.constants import DB_FILE

CONFIG_DIR = Path.home() / ".savr"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULTS = {
    "appearance_mode": "system",
    "date_format": "MM/DD/YYYY",
}

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file — never raises."""
    path = path or CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError as e:
        logger.error("Could not save config %s: %s", path, e)
        tmp.unlink(missing_ok=True)


def get_setting(key: str, config: dict | None = None) -> str:
    """Value of key from the config, falling back to DEFAULTS."""
    config = load_config() if config is None else config
    return config.get(key, DEFAULTS.get(key, ""))


def get_db_folder(config: dict | None = None) -> str | None:
    """Return config["db_folder"] or None if not set."""
    config = load_config() if config is None else config
    return config.get("db_folder")


def set_db_folder(path: str | None, config_path: Path | None = None) -> None:
    """Update db_folder in config and save."""
    config = load_config(config_path)
    if path is None:
        config.pop("db_folder", None)
    else:
        config["db_folder"] = path
    save_config(config, config_path)


def resolve_db_path(db_folder: str | None = None) -> str:
    """Full path of the database file inside db_folder (default ~/.savr)."""
    folder = db_folder or str(CONFIG_DIR)
    return os.path.join(folder, DB_FILE)

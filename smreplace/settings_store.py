import json
import logging
from pathlib import Path
from typing import Optional

from .core import CONFIG_PATH, DEFAULT_COLUMN, DEFAULT_TABLE, LOG_DIR

log = logging.getLogger("SMReplace.settings")


DEFAULT_SETTINGS = {
    # Target used when --table/--column are not given on the command line.
    "table": DEFAULT_TABLE,
    "column": DEFAULT_COLUMN,
    "debug": False,
    # Write latest.log and a rotating debug.log next to the console output.
    "file_logging": False,
    "log_dir": str(LOG_DIR),
}


def load_settings(path: Optional[Path] = None) -> dict:
    """Return DEFAULT_SETTINGS overlaid with the JSON settings file, if any.

    A missing or unreadable file is not an error: the defaults are returned.
    """
    path = Path(path) if path is not None else CONFIG_PATH
    try:
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                log.debug("Loaded settings from %s", path)
                return {**DEFAULT_SETTINGS, **data}
            log.warning("Ignoring settings file %s: top level is not an object", path)
    except (OSError, ValueError) as exc:
        log.warning("Ignoring unreadable settings file %s: %s", path, exc)
    return DEFAULT_SETTINGS.copy()


from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "pulse"
DATA_DIR_ENV = "PULSE_DATA_DIR"


def data_dir(override: Path | None = None) -> Path:
    """Resolve where survey data is stored.

    Precedence: explicit override, ``PULSE_DATA_DIR``, ``XDG_DATA_HOME``,
    then the platform default.
    """
    if override is not None:
        return override.expanduser()
    explicit = os.environ.get(DATA_DIR_ENV)
    if explicit:
        return Path(explicit).expanduser()
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_NAME
    return Path.home() / ".local" / "share" / APP_NAME

# ffexplorer/config.py

import os
import sys
from pathlib import Path

APP_NAME = "FFExplorer"
APP_AUTHOR = "FFExplorer"

# Preferences live next to the executable: <startup dir>/prefs/config.json
PREFS_DIRNAME = "prefs"
CONFIG_FILENAME = "config.json"

# Defaults
DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 600
DEFAULT_LAST_FOLDER = ""
DEFAULT_REMEMBER_LAST_FOLDER = True
DEFAULT_SAVE_TEMPORARY = False
DEFAULT_SHOW_LOG = True
DEFAULT_LOG_FILES_DAYS_LIMIT = 7

# Set to any value to write a debug log under the user log dir
DEBUG_ENV_VAR = "FFEXPLORER_DEBUG"


def default_startup_dir() -> Path:
    """Directory holding the running executable (or the launched script)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv else ""
    if script and os.path.exists(script):
        return Path(script).resolve().parent
    return Path.cwd()

# ffexplorer/core/preferences.py
from __future__ import annotations

import json
import shutil
import time
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ffexplorer.config import (
    PREFS_DIRNAME,
    CONFIG_FILENAME,
    DEFAULT_WIDTH,
    DEFAULT_HEIGHT,
    DEFAULT_LAST_FOLDER,
    DEFAULT_REMEMBER_LAST_FOLDER,
    DEFAULT_SAVE_TEMPORARY,
    DEFAULT_SHOW_LOG,
    DEFAULT_LOG_FILES_DAYS_LIMIT,
)
from ffexplorer.utils.logger import logger


class PreferencesError(Exception):
    """Base error for preference persistence."""


class PreferencesWriteError(PreferencesError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not write preferences to {path}: {reason}")
        self.path = path


# attribute -> (JSON key, expected JSON type)
_JSON_KEYS = {
    "width": ("width", int),
    "height": ("height", int),
    "last_folder": ("lastFolder", str),
    "remember_last_folder": ("rememberLastFolder", bool),
    "save_temporary": ("saveTemporary", bool),
    "show_log": ("showLog", bool),
    "log_files_days_limit": ("logFilesDaysLimit", int),
    "loc_strings_prefixes": ("locStringsPrefixes", list),
}


def _check_type(key: str, value: Any, expected: type) -> None:
    # bool is a subclass of int; JSON true/false must not pass as a number
    if expected is int and isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer, got a boolean")
    if not isinstance(value, expected):
        raise ValueError(f"'{key}' must be {expected.__name__}, got {type(value).__name__}")
    if expected is list and not all(isinstance(s, str) for s in value):
        raise ValueError(f"'{key}' must contain only strings")


@dataclass
class PreferenceSet:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    last_folder: str = DEFAULT_LAST_FOLDER
    remember_last_folder: bool = DEFAULT_REMEMBER_LAST_FOLDER
    save_temporary: bool = DEFAULT_SAVE_TEMPORARY
    show_log: bool = DEFAULT_SHOW_LOG
    log_files_days_limit: int = DEFAULT_LOG_FILES_DAYS_LIMIT
    loc_strings_prefixes: List[str] = field(default_factory=list)

    def reset(self) -> None:
        """Put every preference back to its default."""
        defaults = PreferenceSet()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            key, _ = _JSON_KEYS[f.name]
            value = getattr(self, f.name)
            out[key] = list(value) if isinstance(value, list) else value
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "PreferenceSet":
        """
        Build a set from a decoded JSON object.

        Missing keys keep their defaults and unknown keys are ignored. Raises
        ValueError on a non-object root or a value of the wrong type, before
        anything is assigned.
        """
        if not isinstance(data, dict):
            raise ValueError("preferences root is not a JSON object")
        values: Dict[str, Any] = {}
        for attr, (key, expected) in _JSON_KEYS.items():
            if key not in data:
                continue
            _check_type(key, data[key], expected)
            values[attr] = list(data[key]) if expected is list else data[key]
        return cls(**values)


class PreferenceStore:
    """
    Owns the in-memory preferences and their file under ``<startup_dir>/prefs``.

    Loading happens once at construction. Setters only touch memory; the file is
    written by ``save()`` and, exactly once, by ``close()`` at shutdown.
    """

    def __init__(self, startup_dir):
        self.prefs_dir = Path(startup_dir) / PREFS_DIRNAME
        self.config_path = self.prefs_dir / CONFIG_FILENAME
        self.last_error: Optional[str] = None
        self._opt = PreferenceSet()
        self._closed = False
        self._load()

    # ---- lifecycle -----------------------------------------------------
    def _load(self) -> None:
        if not self.prefs_dir.exists():
            self.prefs_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created preferences folder %s", self.prefs_dir)
            return

        if not self.config_path.exists():
            logger.info("No preferences file at %s, using defaults", self.config_path)
            return

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            self._opt = PreferenceSet.from_dict(data)
            logger.info("Preferences loaded from %s", self.config_path)
        except (OSError, ValueError, RecursionError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors;
            # deep nesting raises RecursionError
            self.last_error = str(e)
            logger.error("Failed to load preferences from %s: %s", self.config_path, e, exc_info=True)
            self._opt = PreferenceSet()
            self._backup_corrupt_file()

    def _backup_corrupt_file(self) -> None:
        ts = time.strftime("%Y%m%d_%H%M%S")
        bak = self.config_path.with_name(f"{self.config_path.name}.bak.{ts}")
        try:
            shutil.copyfile(self.config_path, bak)
            logger.info("Unreadable preferences kept as %s", bak)
        except OSError as e:
            logger.error("Failed to back up %s: %s", self.config_path, e)

    def save(self) -> None:
        """Write the current preferences, replacing the file's previous content.

        Does nothing once the store is closed; the shutdown save is final.
        """
        if self._closed:
            logger.info("Preferences store is closed, skipping save")
            return
        self._write()

    def _write(self) -> None:
        try:
            text = json.dumps(self._opt.to_dict(), indent=2) + "\n"
        except (TypeError, ValueError) as e:
            self.last_error = str(e)
            logger.error("Failed to serialize preferences: %s", e, exc_info=True)
            raise PreferencesWriteError(self.config_path, str(e)) from e
        try:
            with self.config_path.open("w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            self.last_error = str(e)
            logger.error("Failed to save preferences: %s", e, exc_info=True)
            raise PreferencesWriteError(self.config_path, str(e)) from e
        self.last_error = None
        logger.info("Preferences saved to %s", self.config_path)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._write()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "PreferenceStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def reset(self) -> None:
        self._opt.reset()

    @property
    def preferences(self) -> PreferenceSet:
        """Detached copy of the current values."""
        return replace(self._opt, loc_strings_prefixes=list(self._opt.loc_strings_prefixes))

    # ---- accessors -----------------------------------------------------
    @property
    def width(self) -> int:
        return self._opt.width

    @width.setter
    def width(self, value: int) -> None:
        self._opt.width = value

    @property
    def height(self) -> int:
        return self._opt.height

    @height.setter
    def height(self, value: int) -> None:
        self._opt.height = value

    @property
    def last_folder(self) -> str:
        """Last folder used by the file dialogs."""
        return self._opt.last_folder

    @last_folder.setter
    def last_folder(self, value: str) -> None:
        self._opt.last_folder = value

    @property
    def remember_last_folder(self) -> bool:
        return self._opt.remember_last_folder

    @remember_last_folder.setter
    def remember_last_folder(self, value: bool) -> None:
        self._opt.remember_last_folder = value

    @property
    def save_temporary_files(self) -> bool:
        """Keep temporary files such as decompressed zones."""
        return self._opt.save_temporary

    @save_temporary_files.setter
    def save_temporary_files(self, value: bool) -> None:
        self._opt.save_temporary = value

    @property
    def show_log(self) -> bool:
        return self._opt.show_log

    @show_log.setter
    def show_log(self, value: bool) -> None:
        self._opt.show_log = value

    @property
    def log_files_days_limit(self) -> int:
        """How many days log files are kept."""
        return self._opt.log_files_days_limit

    @log_files_days_limit.setter
    def log_files_days_limit(self, value: int) -> None:
        self._opt.log_files_days_limit = value

    @property
    def localized_string_prefixes(self) -> List[str]:
        """Prefixes searched for when scanning fastfiles for localized strings."""
        return list(self._opt.loc_strings_prefixes)

    @localized_string_prefixes.setter
    def localized_string_prefixes(self, value: Iterable[str]) -> None:
        # a bare string is one prefix, not a sequence of characters
        if isinstance(value, str):
            value = [value]
        self._opt.loc_strings_prefixes = list(value)

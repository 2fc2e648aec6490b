# ffexplorer/app.py

from pathlib import Path

from ffexplorer.config import default_startup_dir
from ffexplorer.core.preferences import PreferenceStore, PreferencesError
from ffexplorer.utils.logger import logger, default_log_dir, prune_old_logs


class ExplorerApp:
    def __init__(self, startup_dir=None, log_dir=None):
        self.startup_dir = Path(startup_dir) if startup_dir else default_startup_dir()
        self.log_dir = Path(log_dir) if log_dir else default_log_dir()
        self.prefs: PreferenceStore | None = None

    def start(self) -> PreferenceStore:
        """Load preferences and apply the log retention window."""
        if self.prefs is not None:
            return self.prefs
        logger.info("Application started from %s", self.startup_dir)
        self.prefs = PreferenceStore(self.startup_dir)
        prune_old_logs(self.log_dir, self.prefs.log_files_days_limit)
        return self.prefs

    def window_size(self) -> tuple[int, int]:
        prefs = self.start()
        return prefs.width, prefs.height

    def initial_folder(self) -> str:
        prefs = self.start()
        return prefs.last_folder if prefs.remember_last_folder else ""

    def remember_folder(self, folder) -> None:
        self.start().last_folder = str(folder)

    def shutdown(self) -> bool:
        """Persist preferences once. Returns False if the final save failed."""
        if self.prefs is None or self.prefs.closed:
            return True
        try:
            self.prefs.close()
        except PreferencesError as e:
            logger.error(f"Preferences were not saved on exit: {e}")
            return False
        finally:
            logger.info("Application terminated.")
        return True

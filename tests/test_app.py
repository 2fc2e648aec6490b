import unittest
import json
import os
import shutil
import time
from pathlib import Path

from ffexplorer.app import ExplorerApp


class TestExplorerApp(unittest.TestCase):
    def setUp(self):
        self.base = Path("tests/_tmp_app")
        if self.base.exists():
            shutil.rmtree(self.base)
        self.startup = self.base / "bin"
        self.logs = self.base / "logs"
        self.startup.mkdir(parents=True, exist_ok=True)
        self.logs.mkdir(parents=True, exist_ok=True)
        self.config = self.startup / "prefs" / "config.json"

    def tearDown(self):
        if self.base.exists():
            shutil.rmtree(self.base)

    def test_start_uses_defaults_and_shutdown_saves(self):
        app = ExplorerApp(self.startup, self.logs)
        prefs = app.start()
        self.assertIs(app.start(), prefs)
        self.assertEqual(app.window_size(), (1000, 600))
        prefs.width = 1400
        self.assertTrue(app.shutdown())
        self.assertEqual(json.loads(self.config.read_text(encoding="utf-8"))["width"], 1400)
        self.assertTrue(app.shutdown())

    def test_initial_folder_respects_remember_flag(self):
        app = ExplorerApp(self.startup, self.logs)
        app.remember_folder("D:/zones")
        self.assertEqual(app.initial_folder(), "D:/zones")
        app.start().remember_last_folder = False
        self.assertEqual(app.initial_folder(), "")

    def test_start_prunes_logs_with_saved_limit(self):
        self.config.parent.mkdir(parents=True)
        self.config.write_text('{"logFilesDaysLimit": 2}', encoding="utf-8")
        old = self.logs / "session.log"
        old.write_text("x\n", encoding="utf-8")
        ts = time.time() - 3 * 24 * 60 * 60
        os.utime(old, (ts, ts))

        ExplorerApp(self.startup, self.logs).start()
        self.assertFalse(old.exists())

    def test_shutdown_reports_failed_save(self):
        app = ExplorerApp(self.startup, self.logs)
        app.start()
        shutil.rmtree(self.startup / "prefs")
        self.assertFalse(app.shutdown())
        self.assertTrue(app.prefs.closed)

    def test_remember_folder_accepts_path(self):
        app = ExplorerApp(self.startup, self.logs)
        app.remember_folder(Path("D:/zones"))
        self.assertTrue(app.shutdown())
        data = json.loads(self.config.read_text(encoding="utf-8"))
        self.assertEqual(data["lastFolder"], str(Path("D:/zones")))

    def test_shutdown_reports_unserializable_value(self):
        app = ExplorerApp(self.startup, self.logs)
        app.start().last_folder = Path("D:/zones")
        self.assertFalse(app.shutdown())
        self.assertTrue(app.prefs.closed)
        self.assertFalse(self.config.exists())

    def test_shutdown_before_start(self):
        app = ExplorerApp(self.startup, self.logs)
        self.assertTrue(app.shutdown())
        self.assertFalse((self.startup / "prefs").exists())


if __name__ == "__main__":
    unittest.main()

import os
import tempfile
import unittest

from simple_logger import LogLevel, Slogger


class TestSlogger(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        saved = (Slogger.log_path, Slogger.min_level, Slogger.max_bytes)
        self.addCleanup(Slogger.configure, *saved)
        self.path = os.path.join(self.tmp.name, "logs", "app.log")
        Slogger.configure(self.path, LogLevel.INFO, 0)

    def read(self):
        with open(self.path, encoding="utf-8") as f:
            return f.read()

    def test_levels_below_threshold_are_dropped(self):
        Slogger.debug("hidden")
        Slogger.warning("Unknown route /nowhere", {"route": "/nowhere"})
        text = self.read()
        self.assertNotIn("hidden", text)
        self.assertIn("- WARNING - Unknown route /nowhere | route=/nowhere", text)

    def test_exception_writes_traceback(self):
        try:
            raise ValueError("bad page")
        except ValueError as e:
            Slogger.exception(e, "Loading members failed")
        text = self.read()
        self.assertIn("Loading members failed: ValueError - bad page", text)
        self.assertIn("TRACEBACK:", text)

    def test_rotates_large_files(self):
        Slogger.configure(max_bytes=10)
        Slogger.info("first line that is long enough")
        Slogger.info("second")
        self.assertTrue(os.path.exists(self.path + ".1"))
        self.assertNotIn("first", self.read())

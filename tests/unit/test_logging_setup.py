import json
import logging
import sys
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from hue_wheel_core import logging_setup
from hue_wheel_core.logging_setup import JsonFormatter, get_logger, install_crash_hooks


class JsonFormatterTests(unittest.TestCase):
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("hue_wheel.renderer", logging.INFO, __file__, 1, "drawn %s", ("ok",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_line(self):
        payload = json.loads(JsonFormatter().format(self._record(event="wheel_drawn")))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "hue_wheel.renderer")
        self.assertEqual(payload["msg"], "drawn ok")
        self.assertEqual(payload["event"], "wheel_drawn")

    def test_event_optional(self):
        payload = json.loads(JsonFormatter().format(self._record()))
        self.assertNotIn("event", payload)

    def test_renderer_logger_is_child(self):
        root = get_logger()
        self.assertIs(logging.getLogger("hue_wheel.renderer").parent, root)


class CrashHookTests(unittest.TestCase):
    def test_install_replaces_excepthooks(self):
        original_hook = sys.excepthook
        original_thread_hook = threading.excepthook
        with tempfile.TemporaryDirectory() as tmp, \
                mock.patch.object(logging_setup, "log_dir", return_value=Path(tmp)), \
                mock.patch.object(logging_setup, "_fault_stream", None), \
                mock.patch.object(logging_setup.faulthandler, "enable") as enable, \
                mock.patch.object(sys, "excepthook", original_hook), \
                mock.patch.object(threading, "excepthook", original_thread_hook):
            install_crash_hooks()
            self.assertIsNot(sys.excepthook, original_hook)
            self.assertIsNot(threading.excepthook, original_thread_hook)
            enable.assert_called_once()

            try:
                raise RuntimeError("boom")
            except RuntimeError as exc:
                with self.assertLogs("hue_wheel", level="CRITICAL") as captured:
                    sys.excepthook(type(exc), exc, exc.__traceback__)
            self.assertIn("uncaught exception", captured.output[0])

            logging_setup._fault_stream.close()


if __name__ == "__main__":
    unittest.main()

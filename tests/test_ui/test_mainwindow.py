"""
Tests for the main window's export reporting and saved settings.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PyQt6.QtWidgets import QApplication
    HAS_QT = True
except ImportError:
    HAS_QT = False

try:
    from PIL import Image
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

from driftboard.core.errors import ExportError
from driftboard.core.geometry import ShapeKind
from driftboard.core.items import Item, ShapeGeometry
from driftboard.core.settings import CompositionSettings

if HAS_QT:
    from driftboard.io.exporter import export_png
    from driftboard.ui import mainwindow
    from driftboard.ui.mainwindow import MainWindow

_app = None


def setUpModule():
    global _app
    if HAS_QT:
        _app = QApplication.instance() or QApplication([])


def stored_settings(values):
    """QSettings stand-in returning the given stored values."""
    store = mock.MagicMock()
    store.value.side_effect = lambda key: values.get(key)
    return mock.MagicMock(return_value=store)


@unittest.skipIf(not HAS_QT, "PyQt6 not available")
class TestExportReporting(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)
        settings = CompositionSettings(initial_population=0, min_population=0,
                                       export_dir=str(self.directory))

        patcher = mock.patch.object(mainwindow, "QSettings", stored_settings({}))
        patcher.start()
        self.addCleanup(patcher.stop)

        self.window = MainWindow(settings)
        self.window.canvas.stop()
        self.scene = self.window.canvas.scene

        artboard = self.scene.artboard
        cx = artboard.x + artboard.width / 2
        cy = artboard.y + artboard.height / 2
        self.scene.add_floating(Item(ShapeGeometry(ShapeKind.CIRCLE), cx, cy, 40.0,
                                     color=(0, 0, 254)))
        self.scene.grab_at(cx, cy)
        self.scene.release(cx, cy)

    def tearDown(self):
        self.window.deleteLater()
        self._tmp.cleanup()

    def run_failing_export(self, error):
        exporter = mock.Mock(side_effect=error)
        placed = self.scene.placed
        with mock.patch.object(mainwindow.QMessageBox, "warning") as warning:
            self.window._run_export(exporter, "PNG")
        exporter.assert_called_once_with(self.scene, str(self.directory))
        self.assertEqual(self.scene.placed, placed)
        return warning

    def test_export_error_shows_alert(self):
        warning = self.run_failing_export(ExportError("disk full"))
        warning.assert_called_once()
        self.assertIn("disk full", warning.call_args[0][2])

    def test_unexpected_error_shows_alert(self):
        warning = self.run_failing_export(MemoryError("buffer"))
        warning.assert_called_once()
        self.assertIn("MemoryError", warning.call_args[0][2])

    @unittest.skipIf(not HAS_PIL, "Pillow not available")
    def test_encoder_failure_shows_alert(self):
        placed = self.scene.placed
        with mock.patch.object(Image.Image, "save", side_effect=ValueError("encoder error -2")), \
                mock.patch.object(mainwindow.QMessageBox, "warning") as warning:
            self.window._run_export(export_png, "PNG")
        warning.assert_called_once()
        self.assertIn("encoder error -2", warning.call_args[0][2])
        self.assertEqual(self.scene.placed, placed)
        self.assertTrue(all(item.is_settling for item in self.scene.placed))

    @unittest.skipIf(not HAS_PIL, "Pillow not available")
    def test_successful_export_reports_path(self):
        with mock.patch.object(mainwindow.QMessageBox, "warning") as warning:
            self.window._run_export(export_png, "PNG")
        warning.assert_not_called()
        self.assertEqual(len(list(self.directory.glob("artboard_stdres_*.png"))), 1)
        self.assertIn("Exported to", self.window.statusBar().currentMessage())


@unittest.skipIf(not HAS_QT, "PyQt6 not available")
class TestSavedComposition(unittest.TestCase):

    def load(self, values):
        with mock.patch.object(mainwindow, "QSettings", stored_settings(values)):
            window = MainWindow()
        window.canvas.stop()
        self.addCleanup(window.deleteLater)
        return window.settings

    def test_nothing_saved(self):
        self.assertEqual(self.load({}), CompositionSettings())

    def test_saved_overrides(self):
        saved = json.dumps({"artboard_width": 420.0, "snap_increment_deg": 30.0})
        loaded = self.load({"composition": saved})
        self.assertEqual(loaded.artboard_width, 420.0)

    def test_invalid_values_fall_back_to_defaults(self):
        saved = json.dumps({"artboard_width": -5})
        with self.assertLogs('driftboard.ui.mainwindow', level='WARNING'):
            self.assertEqual(self.load({"composition": saved}), CompositionSettings())

    def test_corrupt_json_falls_back_to_defaults(self):
        with self.assertLogs('driftboard.ui.mainwindow', level='WARNING'):
            self.assertEqual(self.load({"composition": "{not json"}), CompositionSettings())


if __name__ == '__main__':
    unittest.main()

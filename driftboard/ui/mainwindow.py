"""
Main Application Window for Driftboard
"""

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QLineEdit, QPushButton, QMessageBox
)
from PyQt6.QtCore import Qt, QSettings, QTimer, pyqtSignal
from typing import Callable, Optional
import json
import logging

from ..core.errors import ExportError
from ..core.items import Item
from ..core.palette import PLACEHOLDER_TEXT
from ..core.scene import ReleaseOutcome
from ..core.settings import CompositionSettings
from ..io.exporter import export_png, export_hires_png, export_pdf
from .canvas import ArtboardCanvas

logger = logging.getLogger(__name__)

INPUT_STYLE = (
    "QLineEdit { padding: 5px 10px; border: 1px solid %s; border-radius: 15px;"
    " background-color: rgba(255, 255, 255, 200); font-size: 14px; color: rgb(50, 50, 50); }"
)
INPUT_BORDER = "#ccc"
INPUT_REJECT_BORDER = "red"
REJECT_FLASH_MS = 500


class HeaderBar(QWidget):
    """Text input and action buttons shown in the header band."""

    text_submitted = pyqtSignal(str)
    refresh_requested = pyqtSignal()
    clear_requested = pyqtSignal()
    save_png_requested = pyqtSignal()
    save_hires_requested = pyqtSignal()
    save_pdf_requested = pyqtSignal()

    def __init__(self, input_width: int = 500, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        self.input = QLineEdit()
        self.input.setPlaceholderText(PLACEHOLDER_TEXT)
        self.input.setStyleSheet(INPUT_STYLE % INPUT_BORDER)
        self.input.returnPressed.connect(self._on_return)
        layout.addWidget(self.input)
        self.set_input_width(input_width)
        layout.addSpacing(10)

        buttons = [
            ("REFRESH", self.refresh_requested),
            ("CLEAR", self.clear_requested),
            ("SAVE PNG", self.save_png_requested),
            ("SAVE HI-RES PNG", self.save_hires_requested),
            ("SAVE PDF", self.save_pdf_requested),
        ]
        self.buttons = {}
        for label, signal in buttons:
            button = QPushButton(label)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            button.clicked.connect(signal.emit)
            layout.addWidget(button)
            self.buttons[label] = button
        layout.addStretch()

    def set_input_width(self, width: int):
        self.input.setFixedWidth(max(120, width))

    def _on_return(self):
        self.text_submitted.emit(self.input.text())

    def text(self) -> str:
        return self.input.text()

    def show_content(self, content: str):
        """Show a held label's text for editing."""
        self.input.setText(content)
        self.input.setPlaceholderText("")

    def reset(self):
        self.input.clear()
        self.input.setPlaceholderText(PLACEHOLDER_TEXT)

    def flash_rejected(self):
        """Briefly outline the input in red."""
        self.input.setStyleSheet(INPUT_STYLE % INPUT_REJECT_BORDER)
        QTimer.singleShot(REJECT_FLASH_MS,
                          lambda: self.input.setStyleSheet(INPUT_STYLE % INPUT_BORDER))


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings: Optional[CompositionSettings] = None):
        super().__init__()

        self.settings = settings if settings is not None else self._load_composition_settings()

        self.setWindowTitle("Driftboard")
        self.setMinimumSize(800, 900)

        self._create_central_widget()
        self._connect_signals()
        self._load_settings()

    def _create_central_widget(self):
        """Create the stage canvas and its header controls."""
        self.canvas = ArtboardCanvas(self.settings)
        self.header = HeaderBar(int(self.canvas.scene.artboard.width))
        self.canvas.set_header_widget(self.header)
        self.canvas.set_text_source(self.header.text)
        self.setCentralWidget(self.canvas)

    def _connect_signals(self):
        """Connect header and canvas signals."""
        self.header.text_submitted.connect(self._on_text_submitted)
        self.header.refresh_requested.connect(self._on_refresh)
        self.header.clear_requested.connect(self._on_clear)
        self.header.save_png_requested.connect(lambda: self._run_export(export_png, "PNG"))
        self.header.save_hires_requested.connect(
            lambda: self._run_export(export_hires_png, "high-resolution PNG"))
        self.header.save_pdf_requested.connect(lambda: self._run_export(export_pdf, "PDF"))

        self.canvas.item_grabbed.connect(self._on_item_grabbed)
        self.canvas.item_released.connect(self._on_item_released)
        self.canvas.item_deleted.connect(self._on_item_deleted)
        self.canvas.artboard_changed.connect(
            lambda artboard: self.header.set_input_width(int(artboard.width)))

    # Header actions
    def _on_text_submitted(self, content: str):
        item = self.canvas.scene.add_text(content)
        if item is None:
            logger.debug("Ignoring empty text input")
            self.header.flash_rejected()
        self.header.reset()
        self.header.input.setFocus()

    def _on_refresh(self):
        self.canvas.refresh()

    def _on_clear(self):
        self.canvas.clear()
        self.header.reset()

    def _run_export(self, exporter: Callable, label: str):
        """Run an exporter and report failures to the user."""
        directory = self.settings.export_dir or None
        try:
            filepath = exporter(self.canvas.scene, directory)
        except ExportError as e:
            logger.exception(f"{label} export failed")
            QMessageBox.warning(self, "Export Error", f"Failed to export {label}:\n{e}")
            return
        except Exception as e:
            logger.exception(f"Unexpected error during {label} export")
            QMessageBox.warning(self, "Export Error",
                                f"Failed to export {label}:\n{type(e).__name__}: {e}")
            return
        self.statusBar().showMessage(f"Exported to {filepath}", 5000)

    # Canvas events
    def _on_item_grabbed(self, item: Item):
        if item.is_text:
            self.header.show_content(item.kind.content)
        else:
            self.header.reset()

    def _on_item_released(self, outcome: ReleaseOutcome):
        logger.debug(f"Release outcome: {outcome.value}")
        self.header.reset()

    def _on_item_deleted(self, item: Item):
        self.header.reset()

    # Settings
    def _load_composition_settings(self) -> CompositionSettings:
        """Load composition overrides saved by a previous session."""
        settings = QSettings("Driftboard", "Driftboard")
        raw = settings.value("composition")
        if not raw:
            return CompositionSettings()
        try:
            loaded = CompositionSettings.from_dict(json.loads(raw))
        except (ValueError, TypeError) as e:
            # SettingsError and JSON decode errors are both ValueErrors
            logger.warning(f"Ignoring saved composition settings: {e}")
            return CompositionSettings()
        return loaded

    def _load_settings(self):
        """Load window settings."""
        settings = QSettings("Driftboard", "Driftboard")

        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

    def _save_settings(self):
        """Save window and composition settings."""
        settings = QSettings("Driftboard", "Driftboard")
        settings.setValue("geometry", self.saveGeometry())
        settings.setValue("composition", json.dumps(self.settings.to_dict()))

    def closeEvent(self, event):
        """Handle window close."""
        self.canvas.stop()
        self._save_settings()
        event.accept()

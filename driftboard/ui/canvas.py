"""
Driftboard Canvas - the stage widget.

Runs the tick timer, paints the stage (floating items, committed
artwork, grabbed item, header band) and routes pointer, wheel and key
input to the SceneContext.
"""

from typing import Callable, Optional
import logging

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, QTimer, pyqtSignal
from PyQt6.QtGui import (
    QPainter, QPen, QColor,
    QMouseEvent, QWheelEvent, QKeyEvent, QPaintEvent, QResizeEvent
)

from ..core.items import Item
from ..core.scene import SceneContext
from ..core.settings import CompositionSettings
from ..core.spawner import ItemFactory
from ..core.text_metrics import QtTextMeasurer, make_font
from ..graphics.painter import draw_item
from ..graphics.surface import CommittedSurface

logger = logging.getLogger(__name__)

STAGE_COLOR = QColor(0, 0, 0)
ARTBOARD_OUTLINE = QColor(200, 200, 200)
HEADER_COLOR = QColor(220, 220, 220)
LOGO_COLOR = QColor(50, 50, 50)
LOGO_TEXT = "PLACEHOLDER\nLOGO"
LOGO_MARGIN = 20
HEADER_RIGHT_MARGIN = 20


class ArtboardCanvas(QWidget):
    """
    Stage widget hosting the composition.

    Features:
    - Fixed-interval tick driving drift, drag follow and landing animations
    - Grab, drag and drop of floating and placed items
    - Wheel rotation and keyboard scaling/deletion of the held item
    - Cached committed artwork surface
    """

    # Signals
    item_grabbed = pyqtSignal(object)  # Grabbed Item
    item_released = pyqtSignal(object)  # ReleaseOutcome
    item_deleted = pyqtSignal(object)  # Deleted Item
    artboard_changed = pyqtSignal(object)  # Artboard after a layout change

    def __init__(self, settings: Optional[CompositionSettings] = None,
                 factory: Optional[ItemFactory] = None, parent=None):
        super().__init__(parent)

        self.settings = settings if settings is not None else CompositionSettings()
        self.measurer = QtTextMeasurer()
        self.scene = SceneContext(max(self.width(), 1), max(self.height(), 1),
                                  self.settings, factory=factory,
                                  measurer=self.measurer)
        self.scene.populate()
        self.surface = CommittedSurface(self.measurer.family)

        self._text_source: Optional[Callable[[], str]] = None
        self._header: Optional[QWidget] = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(400, 600)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_tick)
        self._timer.start(self.settings.tick_interval_ms)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def set_text_source(self, source: Callable[[], str]):
        """Callable returning the typed text, read when a text label is dropped."""
        self._text_source = source

    def set_header_widget(self, widget: QWidget):
        """Host the header controls inside the header band."""
        widget.setParent(self)
        self._header = widget
        self._place_header()
        widget.show()

    def _place_header(self):
        if self._header is None:
            return
        artboard = self.scene.artboard
        height = self._header.sizeHint().height()
        x = int(artboard.x)
        y = int((self.settings.header_height - height) / 2)
        width = max(self.width() - x - HEADER_RIGHT_MARGIN, self._header.minimumSizeHint().width())
        self._header.setGeometry(x, y, width, height)

    def stop(self):
        self._timer.stop()

    # ------------------------------------------------------------------
    # Tick and painting
    # ------------------------------------------------------------------

    def _on_tick(self):
        self.scene.tick()
        self.update()

    def paintEvent(self, event: QPaintEvent):
        """Paint the stage: floating items, artwork, grabbed item, header."""
        scene = self.scene
        artboard = scene.artboard

        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), STAGE_COLOR)

            for item in scene.floating:
                draw_item(painter, item, font_family=self.measurer.family)

            self.surface.update(scene, self.devicePixelRatioF())
            self.surface.composite(painter, artboard)

            painter.setPen(QPen(ARTBOARD_OUTLINE, 1))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(artboard.x, artboard.y, artboard.width, artboard.height))

            if scene.grabbed is not None:
                draw_item(painter, scene.grabbed, highlight=True,
                          font_family=self.measurer.family)

            self._draw_header(painter)
        finally:
            painter.end()

    def _draw_header(self, painter: QPainter):
        header_height = self.settings.header_height
        painter.fillRect(QRectF(0, 0, self.width(), header_height), HEADER_COLOR)

        font = make_font(self.measurer.family, 20)
        painter.setFont(font)
        painter.setPen(LOGO_COLOR)
        painter.drawText(QRectF(LOGO_MARGIN, 0, self.width(), header_height),
                         Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
                         LOGO_TEXT)

    def resizeEvent(self, event: QResizeEvent):
        super().resizeEvent(event)
        previous = self.scene.artboard
        self.scene.resize(self.width(), self.height())
        if self.scene.artboard != previous:
            self.artboard_changed.emit(self.scene.artboard)
        self._place_header()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent):
        """Grab the topmost item under the pointer."""
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        pos = event.position()
        item = self.scene.grab_at(pos.x(), pos.y())
        if item is not None:
            self.setFocus()
            self.item_grabbed.emit(item)

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position()
        self.scene.set_pointer(pos.x(), pos.y())

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Drop the held item onto the artboard or back to the stage."""
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return

        held = self.scene.grabbed
        if held is None:
            return

        text = None
        if held.is_text and self._text_source is not None:
            text = self._text_source()

        pos = event.position()
        outcome = self.scene.release(pos.x(), pos.y(), text)
        self.item_released.emit(outcome)
        self.update()

    def wheelEvent(self, event: QWheelEvent):
        """Rotate the held item; the wheel does nothing otherwise."""
        if event.position().y() < self.settings.header_height:
            event.ignore()
            return
        # Qt reports positive y for scrolling up; rotation follows scroll-down
        if self.scene.wheel(-event.angleDelta().y()):
            event.accept()
        else:
            event.ignore()

    def keyPressEvent(self, event: QKeyEvent):
        """Delete or rescale the held item."""
        held: Optional[Item] = self.scene.grabbed
        if held is None:
            super().keyPressEvent(event)
            return

        key = event.key()
        if key in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.scene.delete_grabbed()
            self.item_deleted.emit(held)
        elif key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self.scene.scale_grabbed(grow=True)
        elif key == Qt.Key.Key_Minus:
            self.scene.scale_grabbed(grow=False)
        else:
            super().keyPressEvent(event)
            return
        event.accept()
        self.update()

    # ------------------------------------------------------------------
    # Session actions
    # ------------------------------------------------------------------

    def refresh(self):
        self.scene.refresh()
        self.update()

    def clear(self):
        self.scene.clear()
        self.update()

"""
Committed artwork surface.

Placed items are painted into an off-screen QImage the size of the
artboard. The image is repainted only when the scene reports it dirty or
a landing animation is running; otherwise the cached image is composited
as-is.
"""

from typing import Optional
import logging
import math

from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QImage, QPainter

from ..core.artboard import Artboard
from ..core.scene import SceneContext
from ..core.text_metrics import DEFAULT_FONT_FAMILY
from .painter import paint_artboard

logger = logging.getLogger(__name__)


class CommittedSurface:
    """Off-screen buffer holding the placed artwork."""

    def __init__(self, font_family: str = DEFAULT_FONT_FAMILY):
        self.font_family = font_family
        self._image: Optional[QImage] = None
        self.redraw_count = 0

    @property
    def image(self) -> Optional[QImage]:
        return self._image

    def _ensure_size(self, artboard: Artboard, device_pixel_ratio: float) -> bool:
        """(Re)allocate the buffer for the artboard; True if it was replaced."""
        width = max(1, int(math.ceil(artboard.width * device_pixel_ratio)))
        height = max(1, int(math.ceil(artboard.height * device_pixel_ratio)))
        image = self._image
        if (image is not None and image.width() == width and image.height() == height
                and image.devicePixelRatio() == device_pixel_ratio):
            return False
        self._image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        self._image.setDevicePixelRatio(device_pixel_ratio)
        logger.debug(f"Allocated committed surface {width}x{height} @{device_pixel_ratio}x")
        return True

    def update(self, scene: SceneContext, device_pixel_ratio: float = 1.0) -> bool:
        """
        Repaint the buffer if the scene requires it.

        Args:
            scene: Scene providing the placed items and artboard
            device_pixel_ratio: Physical pixels per logical pixel of the target screen

        Returns:
            True if a full repaint happened
        """
        if self._ensure_size(scene.artboard, device_pixel_ratio):
            scene.mark_dirty()
        if not scene.needs_committed_redraw():
            return False

        image = self._image
        # Painting on an image with a pixel ratio works in logical coordinates
        painter = QPainter(image)
        try:
            paint_artboard(painter, scene.placed, scene.artboard,
                           scene.artboard.local_mapping(),
                           image.width() / device_pixel_ratio,
                           image.height() / device_pixel_ratio,
                           font_family=self.font_family)
        finally:
            painter.end()

        scene.mark_committed_drawn()
        self.redraw_count += 1
        return True

    def composite(self, painter: QPainter, artboard: Artboard):
        """Draw the buffer onto the stage at the artboard position."""
        if self._image is not None:
            painter.drawImage(QPointF(artboard.x, artboard.y), self._image)

"""
Item Painting for Driftboard

Draws items with QPainter. The same primitives are used for the live
stage, the committed artboard buffer, high-resolution images and PDF
pages, so every target shows identical geometry.
"""

from typing import Iterable, Optional
import math

from PyQt6.QtCore import QPointF, QRectF
from PyQt6.QtGui import (
    QBrush, QColor, QFontMetricsF, QPainter, QPainterPath, QPen, QPolygonF
)

from ..core.artboard import Artboard, ArtboardMapping
from ..core.geometry import ShapeKind, shape_vertices
from ..core.items import Item, ShapeGeometry, TextLabel
from ..core.palette import Color
from ..core.text_metrics import DEFAULT_FONT_FAMILY, make_font

HIGHLIGHT_COLOR = QColor(255, 255, 255, 200)
HIGHLIGHT_WIDTH = 3.0
ARTBOARD_BACKGROUND = QColor(255, 255, 255)
BORDER_COLOR = QColor(0, 0, 0)


def to_qcolor(color: Color) -> QColor:
    r, g, b = color
    return QColor(r, g, b)


def item_path(item: Item, font_family: str = DEFAULT_FONT_FAMILY) -> QPainterPath:
    """
    Outline of an item in its local frame (centered at the origin, unscaled).

    Empty text labels produce an empty path.
    """
    path = QPainterPath()
    kind = item.kind

    if isinstance(kind, TextLabel):
        if item.is_empty_text:
            return path
        font = make_font(font_family, int(round(item.font_size)))
        metrics = QFontMetricsF(font)
        width = metrics.horizontalAdvance(kind.content)
        # Baseline placed so the ascent/descent box is centered on the origin
        baseline = (metrics.ascent() - metrics.descent()) / 2
        path.addText(QPointF(-width / 2, baseline), font, kind.content)
        return path

    if isinstance(kind, ShapeGeometry):
        if kind.shape is ShapeKind.CIRCLE:
            radius = item.base_size
            path.addEllipse(QPointF(0, 0), radius, radius)
            return path
        polygon = QPolygonF([QPointF(v.x, v.y) for v in shape_vertices(kind.shape, item.base_size)])
        path.addPolygon(polygon)
        path.closeSubpath()
        return path

    raise TypeError(f"Unknown item kind: {kind!r}")


def draw_item(painter: QPainter, item: Item,
              mapping: Optional[ArtboardMapping] = None,
              highlight: bool = False,
              font_family: str = DEFAULT_FONT_FAMILY):
    """
    Draw one item.

    Args:
        painter: Active painter on any paint device
        item: Item to draw
        mapping: Maps world coordinates into the target; None draws in world space
        highlight: Draw the grabbed-item glow outline under the fill
        font_family: Font for text labels
    """
    if mapping is None:
        x, y = item.position.x, item.position.y
        target_scale = 1.0
    else:
        x, y = mapping.map_point(item.position.x, item.position.y)
        target_scale = mapping.scale

    path = item_path(item, font_family)
    if path.isEmpty():
        return

    painter.save()
    try:
        painter.translate(x, y)
        painter.rotate(math.degrees(item.rotation))
        scale = item.display_scale * target_scale
        painter.scale(scale, scale)

        if highlight:
            pen = QPen(HIGHLIGHT_COLOR, HIGHLIGHT_WIDTH)
            painter.strokePath(path, pen)

        painter.fillPath(path, QBrush(to_qcolor(item.color)))
    finally:
        painter.restore()


def paint_artboard(painter: QPainter, items: Iterable[Item], artboard: Artboard,
                   mapping: ArtboardMapping, target_width: float, target_height: float,
                   border_width: float = 0.0,
                   font_family: str = DEFAULT_FONT_FAMILY):
    """
    Paint artboard content into a target surface.

    Fills the target white, draws the items through the mapping and
    optionally outlines the mapped artboard rectangle.
    """
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.fillRect(QRectF(0, 0, target_width, target_height), ARTBOARD_BACKGROUND)

    for item in items:
        draw_item(painter, item, mapping, font_family=font_family)

    if border_width > 0:
        draw_border(painter, artboard, mapping, border_width)


def draw_border(painter: QPainter, artboard: Artboard, mapping: ArtboardMapping,
                border_width: float):
    """Outline the artboard, keeping the stroke inside the mapped rectangle."""
    left, top = mapping.map_point(artboard.x, artboard.y)
    right, bottom = mapping.map_point(artboard.right, artboard.bottom)
    inset = border_width / 2

    painter.save()
    try:
        painter.setPen(QPen(BORDER_COLOR, border_width))
        painter.setBrush(QBrush())
        painter.drawRect(QRectF(left + inset, top + inset,
                                right - left - border_width, bottom - top - border_width))
    finally:
        painter.restore()

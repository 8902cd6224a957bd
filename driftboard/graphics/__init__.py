"""
Driftboard Graphics Module

Contains the QPainter rendering components:
- Painter: item outlines and drawing shared by all targets
- Surface: the cached off-screen artboard buffer
"""

from .painter import item_path, draw_item, paint_artboard, draw_border, to_qcolor
from .surface import CommittedSurface

__all__ = [
    # Painter
    'item_path',
    'draw_item',
    'paint_artboard',
    'draw_border',
    'to_qcolor',
    # Surface
    'CommittedSurface',
]

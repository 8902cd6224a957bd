"""
Driftboard Core Module

Contains the Qt-free composition model:
- Geometry: transforms, angle snapping, polygon predicates
- Items: shapes and text labels with their lifecycle
- Hit testing
- Artboard layout and export mapping
- Scene: floating, placed and grabbed items plus the dirty flag
"""

# Import order matters - geometry first, then items, then scene
from .geometry import (
    Point, ShapeKind, to_local, to_world, normalize_angle, snap_angle,
    regular_polygon_vertices, shape_vertices
)
from .text_metrics import TextBounds, measure_text, QtTextMeasurer
from .items import Item, ShapeGeometry, TextLabel
from .hit_test import is_point_on_item
from .settings import CompositionSettings
from .artboard import Artboard, ArtboardMapping
from .spawner import ItemFactory
from .scene import SceneContext, ReleaseOutcome
from .errors import DriftboardError, ExportError, SettingsError

__all__ = [
    'Point', 'ShapeKind', 'to_local', 'to_world', 'normalize_angle', 'snap_angle',
    'regular_polygon_vertices', 'shape_vertices',
    'TextBounds', 'measure_text', 'QtTextMeasurer',
    'Item', 'ShapeGeometry', 'TextLabel',
    'is_point_on_item',
    'CompositionSettings',
    'Artboard', 'ArtboardMapping',
    'ItemFactory',
    'SceneContext', 'ReleaseOutcome',
    'DriftboardError', 'ExportError', 'SettingsError',
]

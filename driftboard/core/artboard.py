"""
Driftboard Artboard

The artboard is the fixed 1:√2 region placed items are committed to and
exported from. ArtboardMapping carries artboard content into another
target (the artboard-local buffer, a high-resolution image, a PDF page)
through the same transform used for hit testing.
"""

from dataclasses import dataclass
from typing import Tuple
import math

from .geometry import to_local, to_world
from .settings import CompositionSettings

ASPECT_RATIO = math.sqrt(2)

# Fraction of the viewport width the artboard may occupy
MAX_VIEWPORT_FRACTION = 0.95


@dataclass(frozen=True)
class ArtboardMapping:
    """
    Uniform scale + offset from world space into a target surface.

    A world point (x, y) maps to offset + scale * (point - origin).
    """
    origin_x: float
    origin_y: float
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        return to_world(x - self.origin_x, y - self.origin_y,
                        self.offset_x, self.offset_y, 0.0, self.scale)

    def unmap_point(self, x: float, y: float) -> Tuple[float, float]:
        local_x, local_y = to_local(x, y, self.offset_x, self.offset_y, 0.0, self.scale)
        return local_x + self.origin_x, local_y + self.origin_y


@dataclass(frozen=True)
class Artboard:
    """Artboard rectangle in viewport coordinates."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def layout(cls, viewport_width: float,
               settings: CompositionSettings) -> 'Artboard':
        """
        Center the artboard horizontally below the header.

        Args:
            viewport_width: Current viewport width in pixels
            settings: Provides preferred width, header height and margin
        """
        width = min(settings.artboard_width, viewport_width * MAX_VIEWPORT_FRACTION)
        width = max(width, 1.0)
        x = max(viewport_width / 2 - width / 2, 0.0)
        y = settings.header_height + settings.artboard_margin
        return cls(x, y, width, width * ASPECT_RATIO)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """Strictly inside the artboard (edges count as outside)."""
        return self.x < px < self.right and self.y < py < self.bottom

    def local_mapping(self) -> ArtboardMapping:
        """World -> artboard buffer coordinates at display size."""
        return ArtboardMapping(self.x, self.y)

    def fit_width_mapping(self, target_width: float,
                          target_height: float) -> ArtboardMapping:
        """
        Scale the artboard to the target width and center it vertically.

        Returns:
            Mapping whose content rectangle is (0, offset_y, target_width, height * scale)
        """
        scale = target_width / self.width
        offset_y = (target_height - self.height * scale) / 2
        return ArtboardMapping(self.x, self.y, scale, 0.0, offset_y)

"""
Driftboard Item Model

An Item is a shape or text label that floats across the stage, can be
grabbed with the pointer and placed onto the artboard. Its kind is a
tagged union of ShapeGeometry and TextLabel.
"""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID, uuid4
import math

from .geometry import Point, ShapeKind, normalize_angle, shape_radius
from .palette import Color, is_placeholder
from .text_metrics import TextBounds, TextMeasurer, measure_text


@dataclass
class ShapeGeometry:
    """A filled geometric shape."""
    shape: ShapeKind


@dataclass
class TextLabel:
    """A single line of text; font size is base_size * text_scale_adjust."""
    content: str
    text_scale_adjust: float = 0.2


ItemKind = Union[ShapeGeometry, TextLabel]


def settle_pulse(elapsed: float, duration: float, amplitude: float) -> float:
    """
    Scale multiplier of the landing pulse.

    Rises from 1 to 1 + amplitude at mid-animation and back to 1.
    """
    progress = min(max(elapsed / duration, 0.0), 1.0)
    return 1 + math.sin(progress * math.pi) * amplitude


class Item:
    """
    A movable, placeable entity on the stage.

    Attributes:
        kind: ShapeGeometry or TextLabel
        position: World-space center
        base_size: Nominal size driving geometry construction (> 0)
        scale_factor: Display multiplier of base_size (> 0)
        color: RGB color
        velocity: Drift per tick while floating
        spin: Angular velocity per tick while floating
        is_held: Under pointer control
        is_settling: Landing animation in progress
        settle_start_tick: Tick at which settling began (-1 when idle)
        pulse_scale: Current landing pulse multiplier (1 when idle)
    """

    def __init__(self, kind: ItemKind, x: float, y: float, base_size: float,
                 scale_factor: float = 1.0, rotation: float = 0.0,
                 color: Color = (0, 0, 0)):
        if not base_size > 0:
            raise ValueError(f"Base size must be positive, got {base_size}")
        if not scale_factor > 0:
            raise ValueError(f"Scale factor must be positive, got {scale_factor}")

        self.id: UUID = uuid4()
        self.kind = kind
        self.position = Point(x, y)
        self.base_size = base_size
        self.scale_factor = scale_factor
        self._rotation = normalize_angle(rotation)
        self.color = color

        self.velocity = Point(0.0, 0.0)
        self.spin = 0.0

        self.is_held = False
        self.is_settling = False
        self.settle_start_tick = -1
        self.pulse_scale = 1.0

    def __repr__(self) -> str:
        return (f"Item({self.describe()}, pos=({self.position.x:.1f}, {self.position.y:.1f}), "
                f"rot={math.degrees(self._rotation):.1f}°, scale={self.scale_factor:.2f})")

    # ------------------------------------------------------------------
    # Kind helpers
    # ------------------------------------------------------------------

    @property
    def is_text(self) -> bool:
        return isinstance(self.kind, TextLabel)

    @property
    def is_empty_text(self) -> bool:
        """True for a text label whose content is blank or the placeholder."""
        return isinstance(self.kind, TextLabel) and is_placeholder(self.kind.content)

    @property
    def font_size(self) -> float:
        """Effective font size in local units (0 for shapes)."""
        if isinstance(self.kind, TextLabel):
            return self.base_size * self.kind.text_scale_adjust
        return 0.0

    def describe(self) -> str:
        if isinstance(self.kind, TextLabel):
            return f"text {self.kind.content!r}"
        return self.kind.shape.value

    # ------------------------------------------------------------------
    # Transform state
    # ------------------------------------------------------------------

    @property
    def rotation(self) -> float:
        """Rotation in radians, always within [0, 2π)."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: float):
        self._rotation = normalize_angle(value)

    @property
    def display_scale(self) -> float:
        """Scale used for drawing and hit testing, including the landing pulse."""
        return self.scale_factor * self.pulse_scale

    def text_bounds(self, measurer: Optional[TextMeasurer] = None) -> TextBounds:
        """Local (unscaled) size of a text label."""
        if not isinstance(self.kind, TextLabel):
            raise TypeError("Only text labels have text bounds")
        return measure_text(self.kind.content, self.font_size, measurer)

    def max_effective_dimension(self, measurer: Optional[TextMeasurer] = None) -> float:
        """Largest local extent, used as a rough radius for culling and spawning."""
        if isinstance(self.kind, TextLabel):
            if not self.kind.content:
                return self.base_size
            bounds = self.text_bounds(measurer)
            return max(bounds.width, bounds.height)
        return shape_radius(self.kind.shape, self.base_size)

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def drift(self):
        """Advance one tick of autonomous motion (floating items only)."""
        if self.is_held or self.is_settling:
            return
        self.position.x += self.velocity.x
        self.position.y += self.velocity.y
        self.rotation = self._rotation + self.spin

    def solidify(self):
        """Stop all autonomous motion."""
        self.velocity = Point(0.0, 0.0)
        self.spin = 0.0

    def follow(self, target_x: float, target_y: float, blend: float):
        """Move a fraction of the way towards a pointer position."""
        self.position.x += (target_x - self.position.x) * blend
        self.position.y += (target_y - self.position.y) * blend

    def set_scale(self, scale: float, min_scale: float, max_scale: float):
        self.scale_factor = max(min_scale, min(max_scale, scale))

    def is_off_screen(self, viewport_width: float, viewport_height: float,
                      measurer: Optional[TextMeasurer] = None) -> bool:
        """Check if the item drifted well outside the visible region."""
        effective_radius = self.max_effective_dimension(measurer) * self.scale_factor / 2
        buffer = max(viewport_width, viewport_height) * 0.3
        margin = buffer + effective_radius
        return (self.position.x < -margin or
                self.position.x > viewport_width + margin or
                self.position.y < -margin or
                self.position.y > viewport_height + margin)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def grab(self):
        """Enter the held state: motion frozen, any settling cancelled."""
        self.is_held = True
        self.solidify()
        self.cancel_settling()

    def release(self):
        self.is_held = False

    def start_settling(self, tick: int):
        self.is_settling = True
        self.settle_start_tick = tick
        self.pulse_scale = 1.0

    def cancel_settling(self):
        self.is_settling = False
        self.settle_start_tick = -1
        self.pulse_scale = 1.0

    def update_settling(self, tick: int, duration: int, amplitude: float) -> bool:
        """
        Advance the landing pulse.

        Args:
            tick: Current scheduler tick
            duration: Animation length in ticks
            amplitude: Peak extra scale

        Returns:
            True if the animation finished on this tick
        """
        if not self.is_settling:
            self.pulse_scale = 1.0
            return False
        if self.is_held:
            return False
        elapsed = tick - self.settle_start_tick
        if elapsed <= duration:
            self.pulse_scale = settle_pulse(elapsed, duration, amplitude)
            return False
        self.cancel_settling()
        return True


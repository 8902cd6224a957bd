"""
Driftboard Item Factory

Creates items with randomized kind, size, color and motion. All randomness
comes from a numpy Generator so sessions and tests can be seeded.
"""

from typing import Optional, Sequence, TypeVar
import logging
import math

import numpy as np

from .artboard import Artboard
from .geometry import ShapeKind
from .items import Item, ShapeGeometry, TextLabel
from .palette import (
    PALETTE, TEXT_PRESETS, SIZE_CATEGORIES, Color, luma, get_size_category,
    is_placeholder, is_readable_on_artboard, is_visible_on_stage
)
from .text_metrics import TextMeasurer

logger = logging.getLogger(__name__)

T = TypeVar("T")

SHAPE_PROBABILITY = 0.7
COLOR_ATTEMPTS = 10

# Spawn motion
MIN_SPEED = 1.5
MAX_SPEED = 3.5
LATERAL_SPEED = 1.0
MAX_SPIN = 0.003
BASE_OFFSCREEN_OFFSET = 200.0

# Motion given back to an item dropped outside the artboard
RELEASE_SPEED = 1.5
MIN_RELEASE_SPEED = 1e-3


class ItemFactory:
    """
    Builds new items.

    Args:
        rng: numpy random Generator (a fresh unseeded one by default)
        measurer: Text measuring capability used for spawn offsets
    """

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 measurer: Optional[TextMeasurer] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.measurer = measurer

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def choice(self, options: Sequence[T]) -> T:
        return options[int(self.rng.integers(len(options)))]

    def pick_color(self, for_text: bool = False) -> Color:
        """
        Pick a palette color that contrasts with where the item will be seen.

        Text must stay readable on the white artboard, shapes must stay
        visible on the black stage.
        """
        accept = is_readable_on_artboard if for_text else is_visible_on_stage
        for _ in range(COLOR_ATTEMPTS):
            color = self.choice(PALETTE)
            if accept(color):
                return color
        if for_text:
            return min(PALETTE, key=luma)
        return max(PALETTE, key=luma)

    def spawn(self, viewport_width: float, viewport_height: float) -> Item:
        """
        Create a floating item just outside a random viewport edge, heading inwards.
        """
        category = self.choice(SIZE_CATEGORIES)
        size = self.uniform(*category.size_range)
        scale = self.uniform(*category.scale_range)

        if self.rng.random() < SHAPE_PROBABILITY:
            kind = ShapeGeometry(self.choice(list(ShapeKind)))
            color = self.pick_color(for_text=False)
        else:
            kind = TextLabel(self.choice(TEXT_PRESETS), category.text_scale_adjust)
            color = self.pick_color(for_text=True)

        item = Item(kind, 0.0, 0.0, size, scale,
                    rotation=self.uniform(0.0, 2 * math.pi), color=color)

        offset = max(item.max_effective_dimension(self.measurer) * scale * 0.8,
                     BASE_OFFSCREEN_OFFSET)
        edge = int(self.rng.integers(4))
        along = self.uniform(0.2, 0.8)
        lateral = self.uniform(-LATERAL_SPEED, LATERAL_SPEED)
        inward = self.uniform(MIN_SPEED, MAX_SPEED)

        if edge == 0:  # Top
            item.position.x, item.position.y = viewport_width * along, -offset
            item.velocity.x, item.velocity.y = lateral, inward
        elif edge == 1:  # Right
            item.position.x, item.position.y = viewport_width + offset, viewport_height * along
            item.velocity.x, item.velocity.y = -inward, lateral
        elif edge == 2:  # Bottom
            item.position.x, item.position.y = viewport_width * along, viewport_height + offset
            item.velocity.x, item.velocity.y = lateral, -inward
        else:  # Left
            item.position.x, item.position.y = -offset, viewport_height * along
            item.velocity.x, item.velocity.y = inward, lateral

        item.spin = self.uniform(-MAX_SPIN, MAX_SPIN) * self.uniform(1.0, 3.0)
        return item

    def create_text(self, content: str, artboard: Artboard,
                    header_height: float) -> Optional[Item]:
        """
        Create a text label from user input.

        Returns:
            The new item, or None if the content is empty or the placeholder
        """
        if is_placeholder(content):
            logger.debug("Ignoring empty text input")
            return None

        category = get_size_category("medium")
        size = self.uniform(category.size_range[0] * 0.8, category.size_range[1] * 1.2)
        item = Item(
            TextLabel(content.strip(), category.text_scale_adjust),
            self.uniform(artboard.x + artboard.width * 0.3, artboard.x + artboard.width * 0.7),
            header_height + 50,
            size,
            scale_factor=1.0,
            rotation=self.uniform(-0.05, 0.05),
            color=self.pick_color(for_text=True),
        )
        item.velocity.x = self.uniform(-0.5, 0.5)
        item.velocity.y = self.uniform(1.0, 1.5)
        item.spin = self.uniform(-0.0005, 0.0005)
        return item

    def restart_drift(self, item: Item):
        """Give an item dropped outside the artboard fresh, non-zero drift."""
        while True:
            vx = self.uniform(-RELEASE_SPEED, RELEASE_SPEED)
            vy = self.uniform(-RELEASE_SPEED, RELEASE_SPEED)
            if math.hypot(vx, vy) > MIN_RELEASE_SPEED:
                break
        item.velocity.x = vx
        item.velocity.y = vy
        item.spin = self.uniform(-MAX_SPIN, MAX_SPIN)

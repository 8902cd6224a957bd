"""
Driftboard Scene

SceneContext owns all mutable composition state:
- the transient collection (floating items)
- the placed collection (items committed to the artboard)
- the single grabbed item under pointer control
- the dirty flag of the committed artwork surface

An item is in exactly one of these at any time. Input handlers and the
tick scheduler mutate state only through SceneContext methods.
"""

from enum import Enum
from typing import List, Optional, Tuple
import logging

from .artboard import Artboard
from .geometry import Point, snap_angle
from .hit_test import is_point_on_item
from .items import Item, TextLabel
from .palette import Color, is_placeholder
from .settings import CompositionSettings
from .spawner import ItemFactory
from .text_metrics import TextMeasurer

logger = logging.getLogger(__name__)


class ReleaseOutcome(Enum):
    """What happened to the grabbed item on pointer release."""
    NOTHING_HELD = "nothing_held"
    PLACED = "placed"
    RETURNED = "returned"
    DISCARDED = "discarded"


class SceneContext:
    """
    Composition state and the operations that change it.

    Args:
        viewport_width, viewport_height: Visible stage size in pixels
        settings: Composition settings (defaults if None)
        factory: Item factory (a new unseeded one if None)
        measurer: Text measuring capability shared by hit tests and culling
    """

    def __init__(self, viewport_width: float, viewport_height: float,
                 settings: Optional[CompositionSettings] = None,
                 factory: Optional[ItemFactory] = None,
                 measurer: Optional[TextMeasurer] = None):
        self.settings = settings if settings is not None else CompositionSettings()
        self.measurer = measurer
        self.factory = factory if factory is not None else ItemFactory(measurer=measurer)
        if self.factory.measurer is None:
            self.factory.measurer = measurer

        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.artboard = Artboard.layout(viewport_width, self.settings)

        self._floating: List[Item] = []
        self._placed: List[Item] = []
        self._grabbed: Optional[Item] = None
        self._committed_dirty = True

        self.tick_count = 0
        self.pointer = Point(0.0, 0.0)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def floating(self) -> Tuple[Item, ...]:
        return tuple(self._floating)

    @property
    def placed(self) -> Tuple[Item, ...]:
        return tuple(self._placed)

    @property
    def grabbed(self) -> Optional[Item]:
        return self._grabbed

    def contains(self, item: Item) -> bool:
        return item is self._grabbed or item in self._floating or item in self._placed

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def resize(self, viewport_width: float, viewport_height: float):
        """Recompute the artboard layout for a new viewport size."""
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        artboard = Artboard.layout(viewport_width, self.settings)
        if artboard != self.artboard:
            self.artboard = artboard
            self._committed_dirty = True

    def populate(self, count: Optional[int] = None):
        """Spawn floating items until the transient collection holds `count`."""
        target = self.settings.initial_population if count is None else count
        while len(self._floating) < target:
            self._floating.append(
                self.factory.spawn(self.viewport_width, self.viewport_height)
            )

    def add_floating(self, item: Item) -> Item:
        """Put a new item on top of the transient collection."""
        if self.contains(item):
            raise ValueError(f"{item.describe()} is already in the scene")
        self._floating.append(item)
        return item

    def set_pointer(self, x: float, y: float):
        self.pointer = Point(x, y)

    # ------------------------------------------------------------------
    # Dirty flag
    # ------------------------------------------------------------------

    @property
    def committed_dirty(self) -> bool:
        return self._committed_dirty

    def mark_dirty(self):
        self._committed_dirty = True

    def has_settling_items(self) -> bool:
        return any(item.is_settling for item in self._placed)

    def needs_committed_redraw(self) -> bool:
        """The committed surface must be repainted (changed, or animating)."""
        return self._committed_dirty or self.has_settling_items()

    def mark_committed_drawn(self):
        """Called by the renderer after repainting the committed surface."""
        self._committed_dirty = False

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self):
        """
        Advance one frame.

        Order: floating motion and culling, grabbed item follow,
        then landing animations. Drawing happens after this returns.
        """
        self.tick_count += 1
        self._update_floating()
        self._update_grabbed()
        self._update_settling()

    def _update_floating(self):
        for item in self._floating:
            item.drift()

        kept = []
        for item in self._floating:
            if item.is_off_screen(self.viewport_width, self.viewport_height, self.measurer):
                logger.debug(f"Culled off-screen {item.describe()}")
            else:
                kept.append(item)
        self._floating = kept

        while len(self._floating) < self.settings.min_population:
            self._floating.append(
                self.factory.spawn(self.viewport_width, self.viewport_height)
            )

    def _update_grabbed(self):
        item = self._grabbed
        if item is None:
            return
        item.follow(self.pointer.x, self.pointer.y, self.settings.drag_blend)

    def _update_settling(self):
        for item in self._placed:
            finished = item.update_settling(self.tick_count,
                                            self.settings.settle_duration,
                                            self.settings.settle_amplitude)
            if finished:
                self._committed_dirty = True

    # ------------------------------------------------------------------
    # Pointer interaction
    # ------------------------------------------------------------------

    def item_at(self, x: float, y: float) -> Optional[Item]:
        """Topmost item under a point: placed items first, then floating ones."""
        tolerance = self.settings.click_tolerance
        for item in reversed(self._placed):
            if is_point_on_item(x, y, item, tolerance, self.measurer):
                return item
        for item in reversed(self._floating):
            if is_point_on_item(x, y, item, tolerance, self.measurer):
                return item
        return None

    def grab_at(self, x: float, y: float) -> Optional[Item]:
        """
        Try to grab the item under the pointer.

        Presses over the header, or while something is already held, are ignored.

        Returns:
            The grabbed item, or None
        """
        if y < self.settings.header_height or self._grabbed is not None:
            return None

        item = self.item_at(x, y)
        if item is None:
            return None

        if item in self._placed:
            self._placed.remove(item)
            self._committed_dirty = True
        else:
            self._floating.remove(item)

        item.grab()
        self._grabbed = item
        self.set_pointer(x, y)
        logger.debug(f"Grabbed {item.describe()}")
        return item

    def release(self, x: float, y: float, text: Optional[str] = None) -> ReleaseOutcome:
        """
        Drop the grabbed item.

        Args:
            x, y: Pointer position at release
            text: Text currently typed for a grabbed text label; None keeps
                its existing content

        Returns:
            ReleaseOutcome describing where the item went
        """
        item = self._grabbed
        if item is None:
            return ReleaseOutcome.NOTHING_HELD

        self._grabbed = None
        item.release()

        if isinstance(item.kind, TextLabel):
            content = item.kind.content if text is None else text
            if is_placeholder(content):
                logger.info("Discarding empty text item")
                return ReleaseOutcome.DISCARDED
            item.kind.content = content.strip()

        if self.artboard.contains(x, y):
            item.solidify()
            increment = self.settings.snap_increment
            if increment > 0:
                item.rotation = snap_angle(item.rotation, increment)
            self._placed.append(item)
            item.start_settling(self.tick_count)
            self._committed_dirty = True
            logger.debug(f"Placed {item!r}")
            return ReleaseOutcome.PLACED

        item.cancel_settling()
        self.factory.restart_drift(item)
        self._floating.append(item)
        logger.debug(f"Returned {item.describe()} to floating")
        return ReleaseOutcome.RETURNED

    def delete_item(self, item: Item) -> bool:
        """Remove an item from whichever container holds it."""
        if item is self._grabbed:
            self._grabbed = None
            item.release()
        elif item in self._placed:
            self._placed.remove(item)
            self._committed_dirty = True
        elif item in self._floating:
            self._floating.remove(item)
        else:
            return False
        logger.info(f"Deleted {item.describe()}")
        return True

    def delete_grabbed(self) -> bool:
        if self._grabbed is None:
            return False
        return self.delete_item(self._grabbed)

    def rotate_grabbed(self, delta: float) -> bool:
        """Rotate the held item by delta radians."""
        if self._grabbed is None:
            return False
        self._grabbed.rotation = self._grabbed.rotation + delta
        return True

    def wheel(self, delta: float) -> bool:
        """Turn a wheel delta into rotation of the held item."""
        return self.rotate_grabbed(delta * self.settings.wheel_rotation_factor)

    def scale_grabbed(self, grow: bool) -> bool:
        """Step the held item's scale up or down within the configured range."""
        item = self._grabbed
        if item is None:
            return False
        step = self.settings.scale_up_step if grow else self.settings.scale_down_step
        item.set_scale(item.scale_factor * step,
                       self.settings.min_scale, self.settings.max_scale)
        return True

    # ------------------------------------------------------------------
    # Placed item edits
    # ------------------------------------------------------------------

    def modify_placed(self, item: Item, rotation: Optional[float] = None,
                      scale_factor: Optional[float] = None,
                      color: Optional[Color] = None,
                      content: Optional[str] = None):
        """
        Change a placed item and invalidate the committed surface.

        Raises:
            ValueError: If the item is not placed, or content would be emptied
        """
        if item not in self._placed:
            raise ValueError(f"{item.describe()} is not placed")
        if content is not None:
            if not isinstance(item.kind, TextLabel):
                raise ValueError("Only text labels have content")
            if is_placeholder(content):
                raise ValueError("Placed text cannot be empty")
            item.kind.content = content.strip()
        if rotation is not None:
            item.rotation = rotation
        if scale_factor is not None:
            item.set_scale(scale_factor, self.settings.min_scale, self.settings.max_scale)
        if color is not None:
            item.color = color
        self._committed_dirty = True

    # ------------------------------------------------------------------
    # Session actions
    # ------------------------------------------------------------------

    def add_text(self, content: str) -> Optional[Item]:
        """Create a floating text label from input; None if the input is empty."""
        item = self.factory.create_text(content, self.artboard,
                                        self.settings.header_height)
        if item is not None:
            self.add_floating(item)
            logger.info(f"Added {item.describe()}")
        return item

    def refresh(self):
        """Replace every floating item with fresh spawns (the held item is kept)."""
        self._floating = []
        self.populate()
        logger.info(f"Refreshed floating items ({len(self._floating)})")

    def clear(self):
        """Drop everything, including the held item, and start over."""
        self._floating = []
        self._placed = []
        if self._grabbed is not None:
            self._grabbed.release()
        self._grabbed = None
        self._committed_dirty = True
        self.populate()
        logger.info("Cleared scene")

    def exportable_items(self) -> List[Item]:
        """Placed items in paint order, without empty text labels."""
        return [item for item in self._placed if not item.is_empty_text]

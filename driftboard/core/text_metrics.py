"""
Text measurement for Driftboard.

Text labels are hit-tested and culled against the rendered size of their
content. Measuring is delegated to a measurer callable (normally the Qt
font metrics of the drawing font); when no measurer is available or it
fails, a character-count heuristic is used instead.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "monospace"

# Heuristic used when real metrics are unavailable
HEURISTIC_CHAR_WIDTH = 0.6
HEURISTIC_LINE_HEIGHT = 1.2


@dataclass(frozen=True)
class TextBounds:
    """Rendered size of a piece of text, centered on its anchor."""
    width: float
    height: float

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2


# A measurer takes (content, font_size) and returns (width, height)
TextMeasurer = Callable[[str, float], Tuple[float, float]]


def estimate_text_bounds(content: str, font_size: float) -> TextBounds:
    """Approximate text size from character count alone."""
    return TextBounds(
        width=len(content) * font_size * HEURISTIC_CHAR_WIDTH,
        height=font_size * HEURISTIC_LINE_HEIGHT,
    )


def measure_text(content: str, font_size: float,
                 measurer: Optional[TextMeasurer] = None) -> TextBounds:
    """
    Measure text at an effective font size.

    Args:
        content: Text to measure
        font_size: Effective font size in pixels
        measurer: Measuring capability; None selects the heuristic

    Returns:
        TextBounds; never raises for measurer failures
    """
    if measurer is None:
        return estimate_text_bounds(content, font_size)
    try:
        width, height = measurer(content, font_size)
    except Exception as e:
        logger.warning(f"Text measurement failed for {content!r} at {font_size:.1f}px: {e}")
        return estimate_text_bounds(content, font_size)
    return TextBounds(float(width), float(height))


class QtTextMeasurer:
    """
    Measures text with QFontMetricsF for the drawing font.

    Results are cached per (content, pixel size) since the same labels are
    measured every tick for hit testing and culling.
    """

    def __init__(self, family: str = DEFAULT_FONT_FAMILY):
        self.family = family
        self._cache: Dict[Tuple[str, int], Tuple[float, float]] = {}

    def __call__(self, content: str, font_size: float) -> Tuple[float, float]:
        pixel_size = max(1, int(round(font_size)))
        key = (content, pixel_size)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        # Import Qt here so the core stays importable without a display
        from PyQt6.QtGui import QFontMetricsF, QGuiApplication

        if QGuiApplication.instance() is None:
            raise RuntimeError("Font metrics require a running QGuiApplication")

        metrics = QFontMetricsF(make_font(self.family, pixel_size))
        result = (metrics.horizontalAdvance(content),
                  metrics.ascent() + metrics.descent())
        self._cache[key] = result
        return result

    def clear_cache(self):
        """Forget cached measurements (call after changing fonts)."""
        self._cache.clear()


def make_font(family: str, pixel_size: int):
    """Create the QFont used for both measuring and drawing text."""
    from PyQt6.QtGui import QFont

    font = QFont(family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPixelSize(max(1, pixel_size))
    return font

"""
Driftboard palette, presets and size categories.
"""

from dataclasses import dataclass
from typing import List, Tuple

# RGB tuple, 0-255 per channel
Color = Tuple[int, int, int]

PALETTE_HEX: List[str] = [
    "#0000FE",  # Blue
    "#FFDD00",  # Yellow
    "#E70012",  # Red
    "#FE4DD3",  # Pink
    "#41AD4A",  # Green
    "#000000",  # Black
    "#222222",  # Dark grey
    "#FFFFFF",  # White
    "#FFA500",  # Orange
]

PLACEHOLDER_TEXT = "TYPE SOMETHING..."

TEXT_PRESETS: List[str] = [
    "I LOVE MOM",
    "MUZYKA MNIE DOTYKA",
    "SOMETHING something 123",
    "Hi, I'm...",
    "TOOL",
    "ART PIECE",
    "WORK WORK WORK",
]

# Shapes float over a black stage; anything darker disappears
MIN_SHAPE_LUMA = 30.0

# Text is placed on the white artboard and must stay readable
MAX_TEXT_LUMA = 255 * 0.6


def hex_to_rgb(value: str) -> Color:
    """Parse '#RRGGBB' into an RGB tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(color: Color) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color)


PALETTE: List[Color] = [hex_to_rgb(h) for h in PALETTE_HEX]


def luma(color: Color) -> float:
    """Perceived brightness (ITU-R BT.601 weights), 0-255."""
    r, g, b = color
    return 0.299 * r + 0.587 * g + 0.114 * b


def is_visible_on_stage(color: Color) -> bool:
    return luma(color) >= MIN_SHAPE_LUMA


def is_readable_on_artboard(color: Color) -> bool:
    return luma(color) <= MAX_TEXT_LUMA


def is_placeholder(content: str) -> bool:
    """True for empty, whitespace-only or placeholder text."""
    stripped = (content or "").strip()
    return stripped == "" or stripped == PLACEHOLDER_TEXT.strip()


@dataclass(frozen=True)
class SizeCategory:
    """Ranges used when spawning an item of a given size class."""
    name: str
    size_range: Tuple[float, float]
    scale_range: Tuple[float, float]
    text_scale_adjust: float


SIZE_CATEGORIES: List[SizeCategory] = [
    SizeCategory("small", (50.0, 80.0), (0.8, 1.2), 0.15),
    SizeCategory("medium", (80.0, 150.0), (1.0, 1.8), 0.2),
    SizeCategory("large", (150.0, 250.0), (1.2, 2.5), 0.25),
]


def get_size_category(name: str) -> SizeCategory:
    for category in SIZE_CATEGORIES:
        if category.name == name:
            return category
    raise KeyError(name)

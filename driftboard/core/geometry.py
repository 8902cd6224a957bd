"""
Driftboard Core Geometry Module

Elementary 2D geometry shared by hit testing, drawing and export:
- Point and the world <-> local transform pair
- Angle normalization and snapping
- Regular polygon vertex generators
- Point-in-polygon and edge proximity predicates
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple
import math

import numpy as np

TWO_PI = 2 * math.pi

# Cross products within this band count as "on the edge"
CONVEX_EPSILON = 1e-6


@dataclass
class Point:
    """A 2D point."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class ShapeKind(Enum):
    """Geometric shape variants."""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"


# kind -> (sides, radius as a fraction of base size, angle of first vertex)
# Odd-sided shapes start pointing up; the square is laid out axis-aligned.
POLYGON_LAYOUT = {
    ShapeKind.TRIANGLE: (3, 0.8, -math.pi / 2),
    ShapeKind.SQUARE: (4, math.sqrt(2) / 2, -3 * math.pi / 4),
    ShapeKind.PENTAGON: (5, 0.7, -math.pi / 2),
    ShapeKind.HEXAGON: (6, 1.0, 0.0),
}


def to_local(world_x: float, world_y: float,
             center_x: float, center_y: float,
             rotation: float, scale: float) -> Tuple[float, float]:
    """
    Convert a world-space point into an object's local frame.

    Applies the inverse rotation and then the inverse uniform scale about
    the object's center. A zero scale maps every point to the origin.

    Args:
        world_x, world_y: Point in world coordinates
        center_x, center_y: Object center in world coordinates
        rotation: Object rotation in radians
        scale: Object uniform scale

    Returns:
        (local_x, local_y) in the unrotated, unscaled frame
    """
    tx = world_x - center_x
    ty = world_y - center_y
    cos_a = math.cos(-rotation)
    sin_a = math.sin(-rotation)
    rx = tx * cos_a - ty * sin_a
    ry = tx * sin_a + ty * cos_a
    if scale == 0:
        return 0.0, 0.0
    return rx / scale, ry / scale


def to_world(local_x: float, local_y: float,
             center_x: float, center_y: float,
             rotation: float, scale: float) -> Tuple[float, float]:
    """Forward transform: scale, rotate, then translate to the center."""
    x = local_x * scale
    y = local_y * scale
    cos_a = math.cos(rotation)
    sin_a = math.sin(rotation)
    return (center_x + x * cos_a - y * sin_a,
            center_y + x * sin_a + y * cos_a)


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into [0, 2π)."""
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0:
        wrapped += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def snap_angle(angle: float, increment: float) -> float:
    """
    Snap an angle to the nearest multiple of an increment.

    Args:
        angle: Angle in radians (any range)
        increment: Snap step in radians; non-positive disables snapping

    Returns:
        Snapped angle normalized to [0, 2π)
    """
    if increment <= 0:
        return normalize_angle(angle)
    normalized = normalize_angle(angle)
    snapped = round(normalized / increment) * increment
    return normalize_angle(snapped)


def regular_polygon_vertices(sides: int, radius: float,
                             start_angle: float = -math.pi / 2) -> List[Point]:
    """
    Sample `sides` points evenly around a circle centered at the origin.

    Args:
        sides: Number of vertices (>= 3)
        radius: Circumradius
        start_angle: Angle of the first vertex in radians

    Returns:
        Vertices in drawing order
    """
    if sides < 3:
        raise ValueError("A polygon needs at least 3 sides")
    angles = start_angle + np.arange(sides) * (TWO_PI / sides)
    xs = np.cos(angles) * radius
    ys = np.sin(angles) * radius
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def shape_vertices(kind: ShapeKind, size: float) -> List[Point]:
    """
    Local vertices for a straight-edged shape kind.

    Circles have no vertices and return an empty list.
    """
    if kind is ShapeKind.CIRCLE:
        return []
    sides, radius_factor, start_angle = POLYGON_LAYOUT[kind]
    return regular_polygon_vertices(sides, size * radius_factor, start_angle)


def shape_radius(kind: ShapeKind, size: float) -> float:
    """Circumradius of a shape kind at a given base size."""
    if kind is ShapeKind.CIRCLE:
        return size
    return size * POLYGON_LAYOUT[kind][1]


def dist_to_segment(px: float, py: float,
                    x1: float, y1: float, x2: float, y2: float) -> float:
    """Shortest distance from point (px, py) to the segment (x1, y1)-(x2, y2)."""
    dx = x2 - x1
    dy = y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(px - x1, py - y1)
    t = ((px - x1) * dx + (py - y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(px - (x1 + t * dx), py - (y1 + t * dy))


def point_in_centered_rect(px: float, py: float, width: float, height: float,
                           tolerance: float = 0.0) -> bool:
    """Check a point against an origin-centered axis-aligned rectangle grown by tolerance."""
    half_w = width / 2
    half_h = height / 2
    return (-half_w - tolerance <= px <= half_w + tolerance and
            -half_h - tolerance <= py <= half_h + tolerance)


def point_in_convex_polygon(px: float, py: float, vertices: List[Point]) -> bool:
    """
    Check if a point is inside (or on) a convex polygon.

    The point is inside when the cross products of every directed edge
    against it never take both signs.
    """
    n = len(vertices)
    if n < 3:
        return False
    has_pos = False
    has_neg = False
    for i in range(n):
        v1 = vertices[i]
        v2 = vertices[(i + 1) % n]
        cross = (v2.x - v1.x) * (py - v1.y) - (v2.y - v1.y) * (px - v1.x)
        if cross > CONVEX_EPSILON:
            has_pos = True
        elif cross < -CONVEX_EPSILON:
            has_neg = True
        if has_pos and has_neg:
            return False
    return True


def point_near_polygon_edge(px: float, py: float, vertices: List[Point],
                            tolerance: float) -> bool:
    """Check if a point lies within tolerance of any edge of a closed polygon."""
    n = len(vertices)
    if n < 2:
        return False
    for i in range(n):
        v1 = vertices[i]
        v2 = vertices[(i + 1) % n]
        if dist_to_segment(px, py, v1.x, v1.y, v2.x, v2.y) <= tolerance:
            return True
    return False

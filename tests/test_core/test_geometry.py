"""
Tests for the core geometry helpers.

Covers the world/local transform pair, angle normalization and
snapping, polygon generators and the point predicates used by hit
testing.
"""

import unittest
import math

from driftboard.core.geometry import (
    Point, ShapeKind, TWO_PI, to_local, to_world, normalize_angle, snap_angle,
    regular_polygon_vertices, shape_vertices, shape_radius, dist_to_segment,
    point_in_centered_rect, point_in_convex_polygon, point_near_polygon_edge
)

SNAP_15 = math.radians(15)

SAMPLE_ANGLES = [
    0.0, 1e-12, -1e-12, -1e-18, 0.5, math.pi, TWO_PI, -TWO_PI, 3 * math.pi,
    -math.pi / 2, 7.5, -100.25, 1000.0, math.radians(37), math.radians(352.6),
]


class TestTransform(unittest.TestCase):
    """Test to_local / to_world."""

    def test_identity(self):
        """Zero rotation and unit scale only translate."""
        self.assertEqual(to_local(15, 25, 10, 20, 0.0, 1.0), (5, 5))

    def test_rotation_and_scale(self):
        """A point along +x of an object turned 90 degrees lies along local -y."""
        x, y = to_local(10, 0, 0, 0, math.pi / 2, 2.0)
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, -5.0)

    def test_zero_scale(self):
        """Zero scale maps everything to the origin instead of dividing by zero."""
        self.assertEqual(to_local(123, -45, 10, 10, 1.0, 0.0), (0.0, 0.0))

    def test_round_trip(self):
        """world -> local -> world recovers the original point."""
        for rotation in [0.0, 0.3, math.pi / 2, 2.5, 5.9, -1.2]:
            for scale in [0.1, 0.5, 1.0, 3.7, 6.0]:
                lx, ly = to_local(37.5, -12.25, 10.0, 20.0, rotation, scale)
                wx, wy = to_world(lx, ly, 10.0, 20.0, rotation, scale)
                self.assertAlmostEqual(wx, 37.5, places=9)
                self.assertAlmostEqual(wy, -12.25, places=9)


class TestAngles(unittest.TestCase):
    """Test normalize_angle and snap_angle."""

    def test_normalize_range(self):
        for angle in SAMPLE_ANGLES:
            result = normalize_angle(angle)
            self.assertGreaterEqual(result, 0.0)
            self.assertLess(result, TWO_PI)

    def test_normalize_values(self):
        self.assertAlmostEqual(normalize_angle(-math.pi / 2), 3 * math.pi / 2)
        self.assertEqual(normalize_angle(TWO_PI), 0.0)
        self.assertAlmostEqual(normalize_angle(3 * math.pi), math.pi)

    def test_snap_nearest(self):
        """37 degrees snaps to 30 degrees."""
        self.assertAlmostEqual(snap_angle(math.radians(37), SNAP_15), math.radians(30))
        self.assertAlmostEqual(snap_angle(math.radians(38), SNAP_15), math.radians(45))

    def test_snap_wraps(self):
        """Angles just below a full turn snap to (approximately) zero."""
        result = snap_angle(math.radians(359), SNAP_15)
        self.assertGreaterEqual(result, 0.0)
        self.assertLess(result, TWO_PI)
        self.assertAlmostEqual(math.cos(result), 1.0)

    def test_snap_idempotent(self):
        for angle in SAMPLE_ANGLES:
            once = snap_angle(angle, SNAP_15)
            self.assertAlmostEqual(snap_angle(once, SNAP_15), once, places=9)
            self.assertGreaterEqual(once, 0.0)
            self.assertLess(once, TWO_PI)

    def test_snap_disabled(self):
        self.assertAlmostEqual(snap_angle(-0.5, 0.0), TWO_PI - 0.5)


class TestPolygons(unittest.TestCase):
    """Test polygon vertex generators."""

    def test_first_vertex_points_up(self):
        vertices = regular_polygon_vertices(3, 10.0)
        self.assertEqual(len(vertices), 3)
        self.assertAlmostEqual(vertices[0].x, 0.0)
        self.assertAlmostEqual(vertices[0].y, -10.0)

    def test_vertices_on_circle(self):
        for v in regular_polygon_vertices(7, 4.0, 0.3):
            self.assertAlmostEqual(math.hypot(v.x, v.y), 4.0)

    def test_too_few_sides(self):
        with self.assertRaises(ValueError):
            regular_polygon_vertices(2, 10.0)

    def test_square_axis_aligned(self):
        vertices = shape_vertices(ShapeKind.SQUARE, 100.0)
        self.assertEqual(len(vertices), 4)
        for v in vertices:
            self.assertAlmostEqual(abs(v.x), 50.0)
            self.assertAlmostEqual(abs(v.y), 50.0)

    def test_hexagon_and_pentagon(self):
        hexagon = shape_vertices(ShapeKind.HEXAGON, 40.0)
        self.assertEqual(len(hexagon), 6)
        self.assertAlmostEqual(hexagon[0].x, 40.0)
        self.assertAlmostEqual(hexagon[0].y, 0.0)

        pentagon = shape_vertices(ShapeKind.PENTAGON, 100.0)
        self.assertEqual(len(pentagon), 5)
        self.assertAlmostEqual(pentagon[0].y, -70.0)

    def test_circle_has_no_vertices(self):
        self.assertEqual(shape_vertices(ShapeKind.CIRCLE, 50.0), [])
        self.assertEqual(shape_radius(ShapeKind.CIRCLE, 50.0), 50.0)

    def test_shape_radius_matches_vertices(self):
        for kind in ShapeKind:
            for v in shape_vertices(kind, 80.0):
                self.assertAlmostEqual(math.hypot(v.x, v.y), shape_radius(kind, 80.0))


class TestPredicates(unittest.TestCase):
    """Test point predicates."""

    def setUp(self):
        self.square = [Point(-10, -10), Point(10, -10), Point(10, 10), Point(-10, 10)]

    def test_dist_to_segment(self):
        self.assertAlmostEqual(dist_to_segment(0, 5, -10, 0, 10, 0), 5.0)
        self.assertAlmostEqual(dist_to_segment(15, 0, -10, 0, 10, 0), 5.0)
        self.assertAlmostEqual(dist_to_segment(3, 4, 0, 0, 0, 0), 5.0)

    def test_centered_rect(self):
        self.assertTrue(point_in_centered_rect(9, 4, 20, 10))
        self.assertFalse(point_in_centered_rect(11, 0, 20, 10))
        self.assertTrue(point_in_centered_rect(11, 0, 20, 10, tolerance=2))

    def test_convex_inside_either_winding(self):
        self.assertTrue(point_in_convex_polygon(3, -4, self.square))
        self.assertTrue(point_in_convex_polygon(3, -4, list(reversed(self.square))))

    def test_convex_outside(self):
        self.assertFalse(point_in_convex_polygon(11, 0, self.square))
        self.assertFalse(point_in_convex_polygon(-30, 25, self.square))

    def test_convex_on_edge(self):
        self.assertTrue(point_in_convex_polygon(10, 0, self.square))

    def test_convex_degenerate(self):
        self.assertFalse(point_in_convex_polygon(0, 0, [Point(0, 0), Point(1, 1)]))

    def test_near_edge(self):
        self.assertTrue(point_near_polygon_edge(13, 0, self.square, 5))
        self.assertFalse(point_near_polygon_edge(16, 0, self.square, 5))
        # Interior points far from every edge are not "near" it
        self.assertFalse(point_near_polygon_edge(0, 0, self.square, 5))


if __name__ == '__main__':
    unittest.main()

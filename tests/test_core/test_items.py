"""
Tests for the item model and its lifecycle.
"""

import unittest
import math

from driftboard.core.geometry import ShapeKind, TWO_PI
from driftboard.core.items import Item, ShapeGeometry, TextLabel, settle_pulse


def make_circle(size: float = 50.0, scale: float = 1.0) -> Item:
    return Item(ShapeGeometry(ShapeKind.CIRCLE), 100.0, 100.0, size, scale)


class TestItemCreation(unittest.TestCase):
    """Test Item construction and kind helpers."""

    def test_invalid_sizes(self):
        with self.assertRaises(ValueError):
            Item(ShapeGeometry(ShapeKind.SQUARE), 0, 0, 0.0)
        with self.assertRaises(ValueError):
            Item(ShapeGeometry(ShapeKind.SQUARE), 0, 0, 10.0, scale_factor=-1.0)

    def test_rotation_normalized(self):
        item = Item(ShapeGeometry(ShapeKind.SQUARE), 0, 0, 10.0, rotation=-math.pi / 2)
        self.assertAlmostEqual(item.rotation, 3 * math.pi / 2)
        item.rotation = 5 * math.pi
        self.assertAlmostEqual(item.rotation, math.pi)

    def test_unique_ids(self):
        self.assertNotEqual(make_circle().id, make_circle().id)

    def test_text_helpers(self):
        label = Item(TextLabel("ART PIECE", 0.25), 0, 0, 120.0)
        self.assertTrue(label.is_text)
        self.assertFalse(label.is_empty_text)
        self.assertAlmostEqual(label.font_size, 30.0)
        self.assertEqual(label.describe(), "text 'ART PIECE'")

        self.assertTrue(Item(TextLabel("  "), 0, 0, 10.0).is_empty_text)

    def test_shape_helpers(self):
        circle = make_circle()
        self.assertFalse(circle.is_text)
        self.assertFalse(circle.is_empty_text)
        self.assertEqual(circle.font_size, 0.0)
        self.assertEqual(circle.describe(), "circle")
        with self.assertRaises(TypeError):
            circle.text_bounds()

    def test_max_effective_dimension(self):
        self.assertEqual(make_circle(size=40.0).max_effective_dimension(), 40.0)
        # "AB" at font size 20: 24 x 24 with the heuristic
        label = Item(TextLabel("AB", 0.2), 0, 0, 100.0)
        self.assertAlmostEqual(label.max_effective_dimension(), 24.0)
        self.assertEqual(Item(TextLabel(""), 0, 0, 75.0).max_effective_dimension(), 75.0)


class TestMotion(unittest.TestCase):
    """Test drift, follow and scale."""

    def test_drift(self):
        item = make_circle()
        item.velocity.x, item.velocity.y = 2.0, -1.0
        item.spin = 0.1
        item.drift()
        self.assertEqual((item.position.x, item.position.y), (102.0, 99.0))
        self.assertAlmostEqual(item.rotation, 0.1)

    def test_no_drift_while_held_or_settling(self):
        item = make_circle()
        item.velocity.x = 5.0
        item.is_held = True
        item.drift()
        self.assertEqual(item.position.x, 100.0)

        item.is_held = False
        item.start_settling(0)
        item.drift()
        self.assertEqual(item.position.x, 100.0)

    def test_follow(self):
        item = make_circle()
        item.follow(200.0, 0.0, 0.4)
        self.assertAlmostEqual(item.position.x, 140.0)
        self.assertAlmostEqual(item.position.y, 60.0)

    def test_set_scale_clamps(self):
        item = make_circle()
        item.set_scale(10.0, 0.1, 6.0)
        self.assertEqual(item.scale_factor, 6.0)
        item.set_scale(0.01, 0.1, 6.0)
        self.assertEqual(item.scale_factor, 0.1)

    def test_off_screen(self):
        # Viewport 800x600: buffer 240 plus radius 25
        item = make_circle()
        item.position.x = -200
        self.assertFalse(item.is_off_screen(800, 600))
        item.position.x = -266
        self.assertTrue(item.is_off_screen(800, 600))
        item.position.x, item.position.y = 400, 866
        self.assertTrue(item.is_off_screen(800, 600))


class TestSettling(unittest.TestCase):
    """Test the landing pulse."""

    def test_pulse_curve(self):
        self.assertEqual(settle_pulse(0, 45, 0.05), 1.0)
        self.assertAlmostEqual(settle_pulse(22.5, 45, 0.05), 1.05)
        self.assertAlmostEqual(settle_pulse(45, 45, 0.05), 1.0)
        self.assertAlmostEqual(settle_pulse(90, 45, 0.05), 1.0)

    def test_pulse_at_tick_22(self):
        """Tick 22 of 45 with amplitude 0.05."""
        item = make_circle(scale=2.0)
        item.start_settling(10)
        finished = item.update_settling(32, 45, 0.05)
        expected = 1 + math.sin(22 / 45 * math.pi) * 0.05
        self.assertFalse(finished)
        self.assertAlmostEqual(item.pulse_scale, expected)
        self.assertAlmostEqual(item.display_scale, 2.0 * expected)

    def test_completion(self):
        item = make_circle()
        item.start_settling(0)
        self.assertFalse(item.update_settling(45, 45, 0.05))
        self.assertTrue(item.is_settling)
        self.assertTrue(item.update_settling(46, 45, 0.05))
        self.assertFalse(item.is_settling)
        self.assertEqual(item.pulse_scale, 1.0)
        self.assertEqual(item.settle_start_tick, -1)
        # Further updates are no-ops
        self.assertFalse(item.update_settling(47, 45, 0.05))

    def test_grab_cancels_settling(self):
        item = make_circle()
        item.velocity.x = 3.0
        item.spin = 0.2
        item.start_settling(0)
        item.update_settling(20, 45, 0.05)
        item.grab()
        self.assertTrue(item.is_held)
        self.assertFalse(item.is_settling)
        self.assertEqual(item.pulse_scale, 1.0)
        self.assertEqual((item.velocity.x, item.velocity.y, item.spin), (0.0, 0.0, 0.0))

    def test_rotation_stays_normalized_while_spinning(self):
        item = make_circle()
        item.spin = 1.0
        for _ in range(20):
            item.drift()
            self.assertGreaterEqual(item.rotation, 0.0)
            self.assertLess(item.rotation, TWO_PI)


if __name__ == '__main__':
    unittest.main()

import unittest

from controls import clamp_point, locked_dimensions


class ControlsTests(unittest.TestCase):
    def test_clamp_point(self):
        self.assertEqual(clamp_point((-5, 300), 100, 200), (0.0, 200.0))
        self.assertEqual(clamp_point((50.5, 20), 100, 200), (50.5, 20.0))

    def test_locked_width_edit(self):
        self.assertEqual(locked_dimensions(200, "w", 2.0), (200, 100))
        self.assertEqual(locked_dimensions(180, "w", 180 / 81), (180, 81))

    def test_locked_height_edit(self):
        self.assertEqual(locked_dimensions(50, "h", 1.5), (75, 50))

    def test_rounds_half_up(self):
        self.assertEqual(locked_dimensions(5, "w", 2.0), (5, 3))

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            locked_dimensions(0, "w", 1.0)
        with self.assertRaises(ValueError):
            locked_dimensions(10, "w", 0.0)
        with self.assertRaises(ValueError):
            locked_dimensions(10, "depth", 1.0)


if __name__ == "__main__":
    unittest.main()

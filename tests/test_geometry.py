import unittest

from geometry import (
    DegenerateGeometryError,
    Point,
    check_quadrilateral,
    default_corners,
    distance,
    order_points,
    to_quad,
)


class GeometryTests(unittest.TestCase):
    def test_distance(self):
        self.assertAlmostEqual(distance((0, 0), (3, 4)), 5.0)
        self.assertEqual(distance(Point(2.5, 1.0), Point(2.5, 1.0)), 0.0)

    def test_default_corners_inset_by_twenty_percent(self):
        corners = default_corners(200, 100)
        self.assertEqual(corners, (
            Point(40.0, 20.0),
            Point(160.0, 20.0),
            Point(160.0, 80.0),
            Point(40.0, 80.0),
        ))

    def test_default_corners_custom_inset(self):
        tl, tr, br, bl = default_corners(100, 100, inset=0.0)
        self.assertEqual((tl, tr, br, bl), ((0, 0), (100, 0), (100, 100), (0, 100)))

    def test_to_quad_requires_four_points(self):
        self.assertEqual(to_quad([[1, 2], (3, 4), (5, 6), (7, 8)])[0], Point(1.0, 2.0))
        with self.assertRaises(DegenerateGeometryError):
            to_quad([(0, 0), (1, 0), (1, 1)])

    def test_order_points(self):
        shuffled = [(190, 90), (20, 10), (10, 90), (180, 10)]
        self.assertEqual(order_points(shuffled), (
            Point(20.0, 10.0),
            Point(180.0, 10.0),
            Point(190.0, 90.0),
            Point(10.0, 90.0),
        ))

    def test_check_quadrilateral_accepts_convex_quad(self):
        quad = [(20, 10), (180, 10), (190, 90), (10, 90)]
        self.assertEqual(check_quadrilateral(quad), to_quad(quad))

    def test_check_quadrilateral_rejects_collinear_corners(self):
        with self.assertRaises(DegenerateGeometryError):
            check_quadrilateral([(0, 0), (50, 0), (100, 0), (0, 50)])

    def test_check_quadrilateral_rejects_repeated_corner(self):
        with self.assertRaises(DegenerateGeometryError):
            check_quadrilateral([(0, 0), (0, 0), (10, 10), (0, 10)])

    def test_degenerate_error_is_value_error(self):
        self.assertTrue(issubclass(DegenerateGeometryError, ValueError))


if __name__ == "__main__":
    unittest.main()

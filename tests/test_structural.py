import math
import unittest

from shapely.geometry import MultiPolygon, Point

from fanmount.config import SMIDGE, GeometryConfig
from fanmount.library.generators.structural_generators import (
    grill,
    line,
    polar_lines,
    rounded_box,
    rounded_square,
    screw_hole,
    tangent_line_connector,
)


CONFIG = GeometryConfig(fn=48)


class RoundedTests(unittest.TestCase):
    def test_rounded_square(self):
        shape = rounded_square((20, 10), 2, CONFIG)
        self.assertTrue(shape.is_valid)
        for actual, expected in zip(shape.bounds, (0.0, 0.0, 20.0, 10.0)):
            self.assertAlmostEqual(actual, expected)
        exact = 200 - (4 - math.pi) * 4
        self.assertLess(shape.area, 200)
        self.assertAlmostEqual(shape.area, exact, delta=0.1)

    def test_radius_limits(self):
        self.assertAlmostEqual(rounded_square((20, 10), 0, CONFIG).area, 200)
        stadium = rounded_square((20, 10), 100, CONFIG)
        self.assertTrue(stadium.is_valid)
        self.assertAlmostEqual(stadium.area, 10 * 10 + math.pi * 25, delta=0.5)
        with self.assertRaises(ValueError):
            rounded_square((20, 10), -1, CONFIG)
        with self.assertRaises(ValueError):
            rounded_square((20, 0), 1, CONFIG)

    def test_rounded_box(self):
        solid = rounded_box((20, 10, 5), 2, CONFIG)
        self.assertTrue(solid.is_volume)
        self.assertAlmostEqual(solid.bounds[1][2], 5.0)
        self.assertAlmostEqual(solid.volume, rounded_square((20, 10), 2, CONFIG).area * 5, places=6)


class LineTests(unittest.TestCase):
    def test_line(self):
        shape = line((0, 0), (10, 0), 2)
        self.assertAlmostEqual(shape.area, 20.0)
        for actual, expected in zip(shape.bounds, (0.0, -1.0, 10.0, 1.0)):
            self.assertAlmostEqual(actual, expected)

    def test_degenerate_line(self):
        with self.assertRaises(ValueError):
            line((1, 1), (1, 1), 2)
        with self.assertRaises(ValueError):
            line((0, 0), (1, 1), 0)

    def test_tangent_line_connector(self):
        shape = tangent_line_connector((0, 0), 5, (20, 0), 3, CONFIG)
        self.assertTrue(shape.contains(Point(10, 0)))
        self.assertAlmostEqual(shape.bounds[0], -5.0)
        self.assertAlmostEqual(shape.bounds[2], 23.0)
        self.assertAlmostEqual(shape.area, shape.convex_hull.area)


class PolarTests(unittest.TestCase):
    def test_separate_spokes(self):
        shape = polar_lines(4, 5, 10, 1)
        self.assertIsInstance(shape, MultiPolygon)
        self.assertEqual(len(shape.geoms), 4)
        self.assertAlmostEqual(shape.area, 20.0, places=6)

    def test_spokes_from_centre_join(self):
        shape = polar_lines(6, 0, 10, 1, start_angle=15)
        self.assertEqual(shape.geom_type, "Polygon")
        self.assertTrue(shape.contains(Point(0, 0)))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            polar_lines(0, 0, 10, 1)
        with self.assertRaises(ValueError):
            polar_lines(3, 10, 5, 1)

    def test_grill(self):
        shape = grill(100, 3, 2, 4, 2, CONFIG)
        self.assertTrue(shape.is_valid)
        self.assertGreater(shape.area, 0)
        self.assertLess(shape.area, math.pi * 50 * 50)
        minx, miny, maxx, maxy = shape.bounds
        self.assertGreaterEqual(minx, -50.0 - 1e-9)
        self.assertLessEqual(maxx, 50.0 + 1e-9)
        self.assertFalse(shape.contains(Point(12, 12)))

    def test_grill_rings_must_fit(self):
        with self.assertRaises(ValueError):
            grill(20, 5, 2, 4, 1, CONFIG)


class ScrewHoleTests(unittest.TestCase):
    def test_plain_bore(self):
        solid = screw_hole("M3", 10, config=CONFIG)
        self.assertAlmostEqual(solid.bounds[0][2], -SMIDGE)
        self.assertAlmostEqual(solid.bounds[1][2], 10 + SMIDGE)
        self.assertAlmostEqual(solid.bounds[1][0] - solid.bounds[0][0], 3.2)

    def test_nut_trap(self):
        solid = screw_hole("M3", 10, nut_trap_depth=2.4, config=CONFIG)
        self.assertTrue(solid.is_volume)
        width = solid.bounds[1][0] - solid.bounds[0][0]
        self.assertAlmostEqual(width, 5.7 / math.cos(math.radians(30)), places=4)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            screw_hole("M3", 0, config=CONFIG)
        with self.assertRaises(ValueError):
            screw_hole("M3", 5, clearance=-1, config=CONFIG)


if __name__ == "__main__":
    unittest.main()

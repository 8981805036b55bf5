import unittest

from roof_engine.models import Point2D, points_from_pairs
from roof_engine.core import metrics
from roof_engine.core.errors import DegeneratePolygon


SQUARE = points_from_pairs([[0, 0], [0, 100], [100, 100], [100, 0]])


class MetricsTests(unittest.TestCase):
    def test_square_area_and_perimeter(self):
        self.assertAlmostEqual(metrics.area(SQUARE), 10000.0)
        self.assertAlmostEqual(metrics.perimeter(SQUARE), 400.0)

    def test_signed_area_follows_winding(self):
        self.assertAlmostEqual(metrics.signed_area(SQUARE), -10000.0)
        self.assertAlmostEqual(metrics.signed_area(list(reversed(SQUARE))), 10000.0)

    def test_closing_duplicate_is_equivalent(self):
        closed = SQUARE + [SQUARE[0]]
        self.assertAlmostEqual(metrics.area(closed), 10000.0)
        self.assertAlmostEqual(metrics.perimeter(closed), 400.0)
        self.assertEqual(len(metrics.normalize_ring(closed)), 4)

    def test_area_scales_quadratically(self):
        k = 3.5
        scaled = [Point2D(x=p.x * k, y=p.y * k) for p in SQUARE]
        self.assertAlmostEqual(metrics.area(scaled), metrics.area(SQUARE) * k * k)

    def test_triangle(self):
        tri = points_from_pairs([[0, 0], [10, 0], [0, 10]])
        self.assertAlmostEqual(metrics.area(tri), 50.0)

    def test_degenerate_input(self):
        two = points_from_pairs([[0, 0], [3, 4]])
        self.assertEqual(metrics.area(two), 0.0)
        self.assertAlmostEqual(metrics.perimeter(two), 10.0)
        self.assertEqual(metrics.area([]), 0.0)
        self.assertEqual(metrics.perimeter([Point2D(x=1, y=1)]), 0.0)
        repeated = points_from_pairs([[1, 1], [1, 1], [1, 1]])
        self.assertEqual(metrics.area(repeated), 0.0)

    def test_centroid(self):
        c = metrics.centroid(SQUARE)
        self.assertAlmostEqual(c.x, 50.0)
        self.assertAlmostEqual(c.y, 50.0)
        # Area-weighted, not the vertex mean
        poly = points_from_pairs([[0, 0], [10, 0], [10, 10], [5, 10], [0, 10]])
        c = metrics.centroid(poly)
        self.assertAlmostEqual(c.x, 5.0)
        self.assertAlmostEqual(c.y, 5.0)

    def test_centroid_of_segment_is_midpoint(self):
        c = metrics.centroid(points_from_pairs([[0, 0], [4, 2]]))
        self.assertAlmostEqual(c.x, 2.0)
        self.assertAlmostEqual(c.y, 1.0)

    def test_centroid_of_nothing(self):
        with self.assertRaises(DegeneratePolygon):
            metrics.centroid([])

    def test_far_from_origin(self):
        # 1e-5 degree square near -105, 40
        d = 1e-5
        poly = points_from_pairs([[-105, 40], [-105 + d, 40], [-105 + d, 40 + d], [-105, 40 + d]])
        self.assertAlmostEqual(metrics.area(poly) / (d * d), 1.0, places=6)
        c = metrics.centroid(poly)
        self.assertAlmostEqual((c.x + 105) / d, 0.5, places=6)
        self.assertAlmostEqual((c.y - 40) / d, 0.5, places=6)

    def test_tiny_ring_keeps_its_vertices(self):
        tiny = [Point2D(x=p.x * 1e-7, y=p.y * 1e-7) for p in SQUARE]
        self.assertEqual(len(metrics.normalize_ring(tiny)), 4)
        self.assertAlmostEqual(metrics.area(tiny) / 1e-10, 1.0)

    def test_unit_conversion(self):
        self.assertAlmostEqual(metrics.area_to_sqft(100.0, 0.5), 25.0)
        self.assertAlmostEqual(metrics.length_to_ft(100.0, 0.5), 50.0)
        self.assertAlmostEqual(metrics.area_sqft(SQUARE, 0.1), 100.0)
        self.assertAlmostEqual(metrics.perimeter_ft(SQUARE, 0.1), 40.0)

    def test_point_in_polygon(self):
        self.assertTrue(metrics.point_in_polygon(Point2D(x=50, y=50), SQUARE))
        self.assertFalse(metrics.point_in_polygon(Point2D(x=150, y=50), SQUARE))

    def test_remove_collinear_points(self):
        poly = points_from_pairs([[0, 0], [50, 0.1], [100, 0], [100, 100], [0, 100]])
        cleaned = metrics.remove_collinear_points(poly)
        self.assertEqual(len(cleaned), 4)
        self.assertNotIn(Point2D(x=50, y=0.1), cleaned)

    def test_snap_to_edge(self):
        self.assertEqual(metrics.snap_to_edge(Point2D(x=50, y=3), SQUARE, 5), Point2D(x=50, y=0))
        self.assertIsNone(metrics.snap_to_edge(Point2D(x=50, y=3), SQUARE, 2))
        self.assertIsNone(metrics.snap_to_edge(Point2D(x=50, y=50), SQUARE, 5))

    def test_closest_edge(self):
        # Edges: 0 west, 1 top, 2 east, 3 bottom
        self.assertEqual(metrics.closest_edge(Point2D(x=2, y=40), SQUARE, 5), 0)
        self.assertEqual(metrics.closest_edge(Point2D(x=97, y=40), SQUARE, 5), 2)
        # Near a corner the nearer edge wins
        self.assertEqual(metrics.closest_edge(Point2D(x=1, y=98), SQUARE, 5), 0)

    def test_simplify_ring(self):
        noisy = points_from_pairs([[0, 0], [50, 0.2], [100, 0], [100, 100], [50, 99.8], [0, 100]])
        simplified = metrics.simplify_ring(noisy, tolerance=1.0)
        self.assertEqual(simplified, points_from_pairs([[0, 0], [100, 0], [100, 100], [0, 100]]))
        self.assertEqual(metrics.simplify_ring(noisy, tolerance=0.1), noisy)
        self.assertEqual(metrics.simplify_ring(noisy, tolerance=0), noisy)

    def test_simplify_never_collapses(self):
        sliver = points_from_pairs([[0, 0], [100, 0], [100, 0.5], [0, 0.5]])
        self.assertEqual(len(metrics.simplify_ring(sliver, tolerance=10.0)), 4)

    def test_cleanup_ring(self):
        poly = points_from_pairs([[0, 0], [50, 0.01], [100, 0], [100, 100], [0, 100]])
        self.assertEqual(len(metrics.cleanup_ring(poly)), 4)
        self.assertEqual(len(metrics.cleanup_ring(poly, remove_collinear=False)), 5)
        simplified = metrics.cleanup_ring(poly, simplify_tolerance=1.0, remove_collinear=False)
        self.assertEqual(len(simplified), 4)

    def test_polyline_length(self):
        line = points_from_pairs([[0, 0], [3, 4], [3, 10]])
        self.assertAlmostEqual(metrics.polyline_length(line), 11.0)


if __name__ == "__main__":
    unittest.main()

import math
import unittest

from roof_engine.models import GeoPoint, Point2D, ProjectionContext
from roof_engine.core import projection
from roof_engine.core.errors import DegeneratePolygon


class ProjectionTests(unittest.TestCase):
    def setUp(self):
        self.ctx = ProjectionContext(
            center=GeoPoint(lng=-96.797, lat=32.7767), zoom=20, width=800, height=600,
        )

    def test_center_maps_to_canvas_middle(self):
        p = projection.to_planar(self.ctx.center, self.ctx)
        self.assertAlmostEqual(p.x, 400.0, places=6)
        self.assertAlmostEqual(p.y, 300.0, places=6)

    def test_round_trip(self):
        for dlng, dlat in [(0.0, 0.0), (0.0004, -0.0003), (-0.001, 0.0008), (0.01, 0.01)]:
            geo = GeoPoint(lng=self.ctx.center.lng + dlng, lat=self.ctx.center.lat + dlat)
            back = projection.to_geo(projection.to_planar(geo, self.ctx), self.ctx)
            self.assertAlmostEqual(back.lng, geo.lng, delta=1e-9)
            self.assertAlmostEqual(back.lat, geo.lat, delta=1e-9)

    def test_round_trip_far_from_equator(self):
        ctx = ProjectionContext(center=GeoPoint(lng=18.07, lat=69.65), zoom=18)
        geo = GeoPoint(lng=18.0712, lat=69.6488)
        back = projection.to_geo(projection.to_planar(geo, ctx), ctx)
        self.assertAlmostEqual(back.lng, geo.lng, delta=1e-9)
        self.assertAlmostEqual(back.lat, geo.lat, delta=1e-9)

    def test_north_is_up_on_canvas(self):
        north = GeoPoint(lng=self.ctx.center.lng, lat=self.ctx.center.lat + 0.0001)
        east = GeoPoint(lng=self.ctx.center.lng + 0.0001, lat=self.ctx.center.lat)
        self.assertLess(projection.to_planar(north, self.ctx).y, 300.0)
        self.assertGreater(projection.to_planar(east, self.ctx).x, 400.0)

    def test_meters_per_pixel(self):
        self.assertAlmostEqual(projection.meters_per_pixel(0.0, 0), 156543.03392, places=5)
        self.assertAlmostEqual(
            projection.meters_per_pixel(60.0, 1), 156543.03392 * 0.5 / 2, places=6,
        )

    def test_pixel_distance_matches_ground_resolution(self):
        # 0.001 degrees of longitude at the equator is about 111.32 m.
        ctx = ProjectionContext(center=GeoPoint(lng=0.0, lat=0.0), zoom=20)
        p = projection.to_planar(GeoPoint(lng=0.001, lat=0.0), ctx)
        meters = (p.x - ctx.width / 2) * projection.meters_per_pixel(0.0, 20)
        self.assertAlmostEqual(meters, 111.3195, delta=0.01)

    def test_context_for_outline_centers_on_bbox(self):
        outline = [GeoPoint(lng=10.0, lat=50.0), GeoPoint(lng=10.002, lat=50.0),
                   GeoPoint(lng=10.002, lat=50.001)]
        ctx = projection.context_for_outline(outline, zoom=19)
        self.assertAlmostEqual(ctx.center.lng, 10.001)
        self.assertAlmostEqual(ctx.center.lat, 50.0005)
        self.assertEqual(ctx.zoom, 19)

    def test_context_for_empty_outline(self):
        with self.assertRaises(DegeneratePolygon):
            projection.context_for_outline([])

    def test_feet_per_pixel(self):
        expected = projection.meters_per_pixel(self.ctx.center.lat, 20) * 3.28084
        self.assertAlmostEqual(projection.feet_per_pixel(self.ctx), expected)

    def test_unproject_ring(self):
        ring = [Point2D(x=0, y=0), Point2D(x=800, y=600)]
        geo = projection.unproject_ring(ring, self.ctx)
        again = projection.project_ring(geo, self.ctx)
        for a, b in zip(ring, again):
            self.assertTrue(math.isclose(a.x, b.x, abs_tol=1e-6))
            self.assertTrue(math.isclose(a.y, b.y, abs_tol=1e-6))


if __name__ == "__main__":
    unittest.main()

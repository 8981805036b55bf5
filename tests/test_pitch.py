import math
import unittest

from roof_engine.models import Facet, LinearFeatureType, Point2D
from roof_engine.core import pitch
from roof_engine.core.errors import InvalidMeasurement, UnknownPitchLabel


class PitchTableTests(unittest.TestCase):
    def test_table_shape(self):
        self.assertEqual(len(pitch.PITCH_TABLE), 13)
        self.assertEqual(pitch.PITCH_TABLE[0].label, "flat")
        self.assertEqual(pitch.PITCH_TABLE[-1].label, "12/12")
        multipliers = [e.multiplier for e in pitch.PITCH_TABLE]
        self.assertEqual(multipliers, sorted(multipliers))

    def test_multiplier_lookup(self):
        self.assertEqual(pitch.multiplier_for("6/12"), 1.1180)
        self.assertEqual(pitch.multiplier_for("flat"), 1.0)
        self.assertEqual(pitch.multiplier_for("12/12"), 1.4142)

    def test_unknown_label(self):
        with self.assertRaises(UnknownPitchLabel) as ctx:
            pitch.multiplier_for("13/12")
        self.assertEqual(ctx.exception.label, "13/12")
        # Also a KeyError for callers doing dict-style lookups
        with self.assertRaises(KeyError):
            pitch.multiplier_for("steep")

    def test_lookup_is_exact(self):
        for label in (" 6/12", "6/12 ", "FLAT", "Flat", "6 / 12", ""):
            with self.assertRaises(UnknownPitchLabel):
                pitch.multiplier_for(label)
        with self.assertRaises(UnknownPitchLabel):
            pitch.pitch_entry(None)

    def test_multipliers_close_to_slope_factor(self):
        for entry in pitch.PITCH_TABLE:
            self.assertAlmostEqual(entry.multiplier, pitch.slope_factor(entry.rise), places=3)

    def test_nearest_pitch(self):
        self.assertEqual(pitch.nearest_pitch(1.12), "6/12")
        self.assertEqual(pitch.nearest_pitch(1.0), "flat")
        self.assertEqual(pitch.nearest_pitch(3.0), "12/12")

    def test_nearest_pitch_between_entries(self):
        self.assertEqual(pitch.nearest_pitch(1.10), "5/12")
        self.assertEqual(pitch.nearest_pitch(1.102), "6/12")

    def test_nearest_pitch_recovers_every_label(self):
        for entry in pitch.PITCH_TABLE:
            self.assertEqual(pitch.nearest_pitch(entry.multiplier), entry.label)
            self.assertEqual(pitch.nearest_pitch(pitch.multiplier_for(entry.label)), entry.label)

    def test_nearest_pitch_low_slope(self):
        self.assertEqual(pitch.nearest_pitch(1.09), "5/12")

    def test_nearest_pitch_rejects_negative(self):
        with self.assertRaises(InvalidMeasurement):
            pitch.nearest_pitch(-1.0)

    def test_degrees(self):
        self.assertAlmostEqual(pitch.pitch_degrees("12/12"), 45.0)
        self.assertEqual(pitch.pitch_from_degrees(45.0), "12/12")
        self.assertEqual(pitch.pitch_from_degrees(26.57), "6/12")
        self.assertEqual(pitch.pitch_from_degrees(1.0), "flat")
        self.assertEqual(pitch.pitch_from_degrees(80.0), "12/12")


class AreaTests(unittest.TestCase):
    def test_roof_area_and_squares(self):
        roof = pitch.roof_area(2000, "6/12")
        self.assertAlmostEqual(roof, 2236.0)
        total = pitch.total_with_waste(roof, 10)
        self.assertAlmostEqual(total, 2459.6)
        self.assertAlmostEqual(pitch.squares(total), 24.596)

    def test_thousand_square_feet_at_six_twelve(self):
        roof = pitch.roof_area(1000, "6/12")
        self.assertAlmostEqual(roof, 1118.0)
        total = pitch.total_with_waste(roof, 12)
        self.assertAlmostEqual(total, 1252.16)
        self.assertAlmostEqual(pitch.squares(total), 12.52, places=2)

    def test_zero_waste_is_identity(self):
        self.assertEqual(pitch.total_with_waste(1234.5, 0), 1234.5)

    def test_invalid_inputs(self):
        for bad in (-1, float("nan"), float("inf")):
            with self.assertRaises(InvalidMeasurement):
                pitch.roof_area(bad, "6/12")
            with self.assertRaises(InvalidMeasurement):
                pitch.total_with_waste(100, bad)
        with self.assertRaises(InvalidMeasurement):
            pitch.squares("lots")

    def test_waste_table(self):
        rows = pitch.waste_table(1000)
        self.assertEqual([r.waste_percent for r in rows], [10, 12, 15, 20])
        self.assertAlmostEqual(rows[0].total_area_sqft, 1100.0)
        self.assertAlmostEqual(rows[3].squares, 12.0)

    def test_predominant_pitch(self):
        square = (Point2D(x=0, y=0), Point2D(x=1, y=0), Point2D(x=1, y=1))
        facets = [
            Facet(id="facet-1", points=square, area=300, color="#000", pitch="8/12"),
            Facet(id="facet-2", points=square, area=200, color="#000", pitch="4/12"),
            Facet(id="facet-3", points=square, area=200, color="#000", pitch="4/12"),
            Facet(id="facet-4", points=square, area=900, color="#000"),
        ]
        self.assertEqual(pitch.predominant_pitch(facets), "4/12")
        self.assertEqual(pitch.predominant_pitch(facets[3:]), pitch.DEFAULT_PITCH)


class TrueLengthTests(unittest.TestCase):
    def test_rake_length(self):
        self.assertAlmostEqual(pitch.rake_length(12, "6/12"), math.sqrt(180))
        self.assertAlmostEqual(pitch.rake_length(10, "12/12"), 10 * math.sqrt(2))
        self.assertEqual(pitch.rake_length(10, "flat"), 10.0)

    def test_hip_valley_length(self):
        self.assertAlmostEqual(pitch.hip_valley_length(10, "12/12"), 10 * math.sqrt(1.5))
        self.assertAlmostEqual(pitch.hip_valley_length(10, "6/12"), 10 * math.sqrt(1.125))
        self.assertEqual(pitch.hip_valley_length(10, "flat"), 10.0)

    def test_true_length_by_feature(self):
        self.assertAlmostEqual(
            pitch.true_length(LinearFeatureType.RAKE, 10, "12/12"), 10 * math.sqrt(2),
        )
        for kind in (LinearFeatureType.HIP, LinearFeatureType.VALLEY):
            self.assertAlmostEqual(pitch.true_length(kind, 10, "12/12"), 10 * math.sqrt(1.5))
        for kind in (LinearFeatureType.RIDGE, LinearFeatureType.EAVE, LinearFeatureType.STEP):
            self.assertEqual(pitch.true_length(kind, 10, "12/12"), 10.0)

    def test_bad_lengths(self):
        with self.assertRaises(InvalidMeasurement):
            pitch.rake_length(-1, "6/12")
        with self.assertRaises(InvalidMeasurement):
            pitch.true_length(LinearFeatureType.RIDGE, float("nan"), "6/12")
        with self.assertRaises(UnknownPitchLabel):
            pitch.hip_valley_length(10, "13/12")


class WasteRecommendationTests(unittest.TestCase):
    def test_simple_roof(self):
        rec = pitch.recommend_waste(planes=2)
        self.assertEqual(rec.band, "simple")
        self.assertEqual(rec.total_percent, 10.0)
        self.assertIn("No additional complexity adders", rec.justification)

    def test_bands(self):
        self.assertEqual(pitch.recommend_waste(planes=6, valleys=2).band, "moderate")
        self.assertEqual(pitch.recommend_waste(planes=10, valleys=5).band, "cut_up")
        self.assertEqual(pitch.recommend_waste(planes=20, valleys=10, dormers=6).band, "extreme")

    def test_adders(self):
        rec = pitch.recommend_waste(planes=6, valleys=2, dormers=2, pitch="10/12")
        self.assertEqual(rec.base_percent, 12.0)
        self.assertEqual([pct for _, pct in rec.adders], [5.0, 3.0])
        self.assertEqual(rec.total_percent, 20.0)
        self.assertIn("+5% for Steep pitch (10/12)", rec.justification)

    def test_cap(self):
        rec = pitch.recommend_waste(
            planes=20, valleys=10, dormers=6, penetrations=12, pitch="12/12",
        )
        self.assertEqual(rec.total_percent, 25.0)


class CardinalDirectionTests(unittest.TestCase):
    def test_directions(self):
        self.assertEqual(pitch.cardinal_direction(0), "N")
        self.assertEqual(pitch.cardinal_direction(359), "N")
        self.assertEqual(pitch.cardinal_direction(90), "E")
        self.assertEqual(pitch.cardinal_direction(200), "S")
        self.assertEqual(pitch.cardinal_direction(-45), "NW")


if __name__ == "__main__":
    unittest.main()

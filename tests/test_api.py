import unittest

from fastapi.testclient import TestClient

from roof_engine.api.main import create_app


OUTLINE = [[-105.0002, 40.0], [-105.0, 40.0], [-105.0, 40.0001], [-105.0002, 40.0001]]
SQUARE_FACET = {
    "id": "facet-0",
    "points": [[0, 0], [0, 100], [100, 100], [100, 0]],
    "area": 10000.0,
    "color": "#3b82f6",
}


class ApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(create_app())

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_pitches(self):
        rows = self.client.get("/api/pitches").json()
        self.assertEqual(len(rows), 13)
        self.assertEqual(rows[0], {"label": "flat", "multiplier": 1.0})
        self.assertEqual(rows[6]["label"], "6/12")

    def test_rules(self):
        rules = self.client.get("/api/rules").json()
        self.assertIn({"id": "pattern.l_shape", "name": "L-Shape"}, rules)

    def test_measure(self):
        response = self.client.post("/api/measure", json={
            "outline": OUTLINE,
            "features": [{"type": "eave", "geometry": OUTLINE[:2]}],
            "params": {"pitch": "4/12", "waste_percent": 12},
        })
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["pitch_multiplier"], 1.0541)
        self.assertGreater(body["linear_totals"]["eave"], 55.0)
        self.assertEqual(body["facets"][0]["id"], "facet-0")
        self.assertEqual(body["detection"]["pattern"], "gable")

    def test_measure_wkt(self):
        ring = OUTLINE + [OUTLINE[0]]
        text = "POLYGON((" + ", ".join(f"{lng} {lat}" for lng, lat in ring) + "))"
        response = self.client.post("/api/measure", json={"wkt": text})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["pitch"], "6/12")

    def test_measure_errors(self):
        self.assertEqual(self.client.post("/api/measure", json={}).status_code, 422)
        response = self.client.post("/api/measure", json={"outline": OUTLINE, "params": {"pitch": "99/12"}})
        self.assertEqual(response.status_code, 422)
        self.assertIn("99/12", response.json()["detail"])
        response = self.client.post("/api/measure", json={"wkt": "POLYGON((0 0, 1 0, 1 x, 0 0))"})
        self.assertEqual(response.status_code, 422)
        self.assertIn("1 x", response.json()["detail"])

    def test_measure_too_few_vertices(self):
        response = self.client.post("/api/measure", json={"outline": OUTLINE[:2]})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["plan_area_sqft"], 0.0)
        self.assertEqual(body["facets"], [])
        self.assertEqual(body["detection"]["pattern"], "complex")

    def test_split(self):
        response = self.client.post("/api/split", json={
            "facets": [SQUARE_FACET],
            "facet_id": "facet-0",
            "line": {"start": [50, -10], "end": [50, 110]},
        })
        self.assertEqual(response.status_code, 200)
        facets = response.json()["facets"]
        self.assertEqual([f["id"] for f in facets], ["facet-1", "facet-2"])
        self.assertEqual([f["area"] for f in facets], [5000.0, 5000.0])
        self.assertEqual(sorted(f["direction"] for f in facets), ["E", "W"])

    def test_split_with_snapping(self):
        response = self.client.post("/api/split", json={
            "facets": [SQUARE_FACET],
            "facet_id": "facet-0",
            "line": {"start": [50, 3], "end": [50, 97]},
            "snap_distance": 5,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual([f["area"] for f in response.json()["facets"]], [5000.0, 5000.0])

    def test_split_errors(self):
        response = self.client.post("/api/split", json={
            "facets": [SQUARE_FACET],
            "facet_id": "facet-0",
            "line": {"start": [-10, -10], "end": [-10, 110]},
        })
        self.assertEqual(response.status_code, 422)
        self.assertIn("does not properly divide", response.json()["detail"])

        response = self.client.post("/api/split", json={
            "facets": [SQUARE_FACET],
            "facet_id": "facet-7",
            "line": {"start": [50, -10], "end": [50, 110]},
        })
        self.assertEqual(response.status_code, 404)

    def test_detect(self):
        response = self.client.post("/api/detect", json={
            "points": [[0, 0], [100, 0], [100, 40], [40, 40], [40, 100], [0, 100]],
        })
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["pattern"], "l_shape")
        self.assertEqual(len(body["suggested_splits"]), 2)


if __name__ == "__main__":
    unittest.main()

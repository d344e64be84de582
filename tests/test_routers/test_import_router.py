import unittest
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from dataimport.schemas import ImportResult


class ImportRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    @patch("dataimport.router.service.apply_import")
    def test_import_array_rejected_before_writing(self, mock_apply):
        resp = self.client.post("/api/import", json=[{"providers": []}])
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["detail"], "Import document must be a JSON object")
        mock_apply.assert_not_called()

    @patch("dataimport.router.service.apply_import")
    def test_import_shape_error_422(self, mock_apply):
        resp = self.client.post("/api/import", json={"providers": [], "clinicTypes": []})
        self.assertEqual(resp.status_code, 422)
        mock_apply.assert_not_called()

    @patch("dataimport.router.service.apply_import")
    def test_import_ok(self, mock_apply):
        mock_apply.return_value = ImportResult(providers=1)
        doc = {
            "providers": [{"id": "1", "name": "Dr. Smith", "color": "#4f46e5", "isActive": True}],
            "clinicTypes": [],
            "shifts": [],
        }
        resp = self.client.post("/api/import", json=doc)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["providers"], 1)
        self.assertEqual(resp.json()["clinicTypes"], 0)

    def test_template(self):
        resp = self.client.get("/api/import/template")
        self.assertEqual(resp.status_code, 200, resp.text)
        data = resp.json()
        self.assertEqual(len(data["providers"]), 5)
        self.assertEqual(len(data["clinicTypes"]), 5)
        self.assertEqual([s["notes"] for s in data["shifts"]], ["Regular shift", "Specialty clinic"])
        self.assertIn("startTime", data["shifts"][0])


if __name__ == "__main__":
    unittest.main()

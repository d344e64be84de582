import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db


class ClinicTypeRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    @patch("clinictype.router.service.get_clinic_types")
    def test_list_clinic_types(self, mock_get):
        mock_get.return_value = [Obj(id="1", name="Primary Care", color="#3b82f6", is_active=True)]
        resp = self.client.get("/api/clinic-types")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["isActive"], True)

    @patch("clinictype.router.service.get_clinic_type")
    def test_detail_404(self, mock_get):
        mock_get.return_value = None
        resp = self.client.get("/api/clinic-types/9")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Clinic type not found")

    @patch("clinictype.router.service.create_clinic_type")
    def test_create_clinic_type(self, mock_create):
        mock_create.return_value = Obj(id="6", name="Dialysis", color="#3b82f6", is_active=True)
        resp = self.client.post("/api/clinic-types", json={"name": "Dialysis"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["name"], "Dialysis")

    def test_create_clinic_type_extra_field_422(self):
        resp = self.client.post("/api/clinic-types", json={"name": "Dialysis", "orgId": 1})
        self.assertEqual(resp.status_code, 422)

    @patch("clinictype.router.service.delete_clinic_type")
    def test_delete_clinic_type(self, mock_delete):
        mock_delete.return_value = True
        resp = self.client.delete("/api/clinic-types/1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Clinic type deleted"})


if __name__ == "__main__":
    unittest.main()

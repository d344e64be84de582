# tests/test_services/test_provider_services.py
import unittest
from datetime import date

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import models_bootstrap  # noqa: F401
from core.database import Base
from provider.models import Provider
from provider import service
from provider.schemas import ProviderCreatePayload, ProviderUpdate
from shift.models import Shift


class ProviderServiceTests(unittest.TestCase):
    def setUp(self):
        # Fresh in-memory DB
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)

        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        self.db.add_all([
            Provider(id="p1", name="Dr. Smith", color="#4f46e5"),
            Provider(id="p2", name="Dr. Adams", color="#10b981"),
            Provider(id="p3", name="Dr. Quinn", color="#f59e0b", is_active=False),
        ])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    # ---- get ----
    def test_get_provider_found(self):
        got = service.get_provider(self.db, "p1")
        self.assertIsNotNone(got)
        self.assertEqual(got.name, "Dr. Smith")

    def test_get_provider_not_found(self):
        self.assertIsNone(service.get_provider(self.db, "nope"))

    def test_get_providers_sorted_by_name(self):
        names = [p.name for p in service.get_providers(self.db)]
        self.assertEqual(names, ["Dr. Adams", "Dr. Quinn", "Dr. Smith"])

    def test_get_providers_active_filter(self):
        self.assertEqual({p.id for p in service.get_providers(self.db, active=True)}, {"p1", "p2"})
        self.assertEqual([p.id for p in service.get_providers(self.db, active=False)], ["p3"])

    # ---- create / update ----
    def test_create_provider_assigns_id_and_defaults(self):
        row = service.create_provider(self.db, ProviderCreatePayload(name="Dr. New"))
        self.assertTrue(row.id)
        self.assertEqual(row.color, "#4f46e5")
        self.assertTrue(row.is_active)

    def test_create_provider_keeps_given_id(self):
        row = service.create_provider(self.db, ProviderCreatePayload(id="p9", name="Dr. Nine", color="#000000"))
        self.assertEqual(row.id, "p9")

    def test_update_provider(self):
        row = service.update_provider(self.db, "p1", ProviderUpdate(is_active=False))
        self.assertFalse(row.is_active)
        self.assertEqual(row.name, "Dr. Smith")

    def test_update_provider_not_found(self):
        self.assertIsNone(service.update_provider(self.db, "nope", ProviderUpdate(name="x")))

    # ---- delete ----
    def test_delete_provider(self):
        self.assertTrue(service.delete_provider(self.db, "p2"))
        self.assertIsNone(service.get_provider(self.db, "p2"))
        self.assertFalse(service.delete_provider(self.db, "p2"))

    def test_delete_provider_with_shifts_conflicts(self):
        self.db.add(Shift(id="s1", provider_id="p1", clinic_type_id="c1",
                          start_date=date(2026, 3, 9), end_date=date(2026, 3, 9)))
        self.db.commit()
        with self.assertRaises(HTTPException) as ctx:
            service.delete_provider(self.db, "p1")
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertIsNotNone(service.get_provider(self.db, "p1"))

    # ---- seed ----
    def test_seed_only_fills_empty_table(self):
        self.assertEqual(service.seed_default_providers(self.db), 0)
        for row in service.get_providers(self.db):
            service.delete_provider(self.db, row.id)

        self.assertEqual(service.seed_default_providers(self.db), 5)
        inactive = [p.name for p in service.get_providers(self.db, active=False)]
        self.assertEqual(inactive, ["Dr. Davis"])


if __name__ == "__main__":
    unittest.main()

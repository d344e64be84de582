# tests/test_services/test_shift_store.py
import unittest
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import models_bootstrap  # noqa: F401  registers every table on Base
from core.database import Base
from shift import service
from shift.models import Shift
from shift.schemas import DeleteScope, ShiftDefinition, ShiftKind
from shift.store import SqlShiftStore


def make_shift(**kwargs) -> ShiftDefinition:
    data = dict(provider_id="1", clinic_type_id="1", start_date=date(2026, 3, 16))
    data.update(kwargs)
    return ShiftDefinition(**data)


class SqlShiftStoreTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()
        self.store = SqlShiftStore(self.db)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_insert_and_get_round_trip_fields(self):
        self.store.insert(make_shift(
            id="r1",
            is_recurring=True,
            recurrence_pattern="weekly",
            recurrence_end_date=date(2026, 5, 1),
            series_id="series-r1",
            notes="morning",
            location="Main Clinic",
        ))
        self.store.commit()

        got = self.store.get("r1")
        self.assertEqual(got.kind, ShiftKind.recurring)
        self.assertEqual(got.end_date, date(2026, 3, 16))
        self.assertEqual(got.recurrence_end_date, date(2026, 5, 1))
        self.assertEqual((got.series_id, got.notes, got.location), ("series-r1", "morning", "Main Clinic"))
        self.assertIsNone(self.store.get("missing"))

    def test_list_window_keeps_overlapping_and_recurring_rows(self):
        self.store.insert(make_shift(id="before", start_date=date(2026, 2, 1)))
        self.store.insert(make_shift(id="vac", start_date=date(2026, 2, 27), end_date=date(2026, 3, 2), is_vacation=True))
        self.store.insert(make_shift(id="weekly", start_date=date(2026, 1, 5), is_recurring=True, recurrence_pattern="weekly"))
        self.store.insert(make_shift(id="after", start_date=date(2026, 4, 1)))
        self.store.commit()

        got = [s.id for s in self.store.list(start=date(2026, 3, 1), end=date(2026, 3, 31))]
        self.assertEqual(got, ["weekly", "vac"])

    def test_list_filters(self):
        self.store.insert(make_shift(id="a", provider_id="1"))
        self.store.insert(make_shift(id="b", provider_id="2", clinic_type_id="3"))
        self.store.insert(make_shift(id="v", provider_id="2", is_vacation=True))
        self.store.commit()

        self.assertEqual([s.id for s in self.store.list(provider_id="2")], ["b", "v"])
        self.assertEqual([s.id for s in self.store.list(clinic_type_id="3")], ["b"])
        self.assertEqual([s.id for s in self.store.list(is_vacation=False)], ["a", "b"])

    def test_update_and_delete_many(self):
        self.store.insert(make_shift(id="a"))
        self.store.insert(make_shift(id="b"))
        self.store.commit()

        updated = self.store.update("a", {"notes": "covered"})
        self.assertEqual(updated.notes, "covered")
        self.assertIsNone(self.store.update("nope", {"notes": "x"}))

        self.assertEqual(self.store.delete_many(["a", "b", "nope"]), 2)
        self.assertEqual(self.store.delete_many([]), 0)
        self.store.commit()
        self.assertEqual(self.db.query(Shift).count(), 0)

    def test_saved_series_delete_scopes(self):
        rows = service.save_series(self.store, make_shift(
            id="X",
            is_recurring=True,
            recurrence_pattern="daily",
            recurrence_end_date=date(2026, 3, 20),
        ))
        self.assertEqual([r.id for r in rows], ["X", "X-1", "X-2", "X-3"])
        series_id = rows[0].series_id
        self.assertEqual([s.series_index for s in self.store.series(series_id)], [0, 1, 2, 3])

        self.assertEqual(service.delete_shift(self.store, "X-1", DeleteScope.single), ["X-1"])
        self.assertEqual(sorted(service.delete_shift(self.store, "X-3", DeleteScope.all)), ["X", "X-2", "X-3"])
        self.assertEqual(self.store.list(), [])


if __name__ == "__main__":
    unittest.main()

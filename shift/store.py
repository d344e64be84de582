from __future__ import annotations
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import select, delete, or_
from sqlalchemy.orm import Session

from .models import Shift
from .schemas import ShiftDefinition


class ShiftStore(ABC):
    """
    Stored shift records keyed by id, with a secondary index by series id.

    Mutations are staged until ``commit``; the service layer decides when a
    logical operation is complete.
    """

    @abstractmethod
    def get(self, shift_id: str) -> Optional[ShiftDefinition]: ...

    @abstractmethod
    def list(
        self,
        *,
        provider_id: Optional[str] = None,
        clinic_type_id: Optional[str] = None,
        is_vacation: Optional[bool] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[ShiftDefinition]: ...

    @abstractmethod
    def series(self, series_id: str) -> List[ShiftDefinition]: ...

    @abstractmethod
    def insert(self, shift: ShiftDefinition) -> ShiftDefinition: ...

    @abstractmethod
    def update(self, shift_id: str, patch: Dict[str, Any]) -> Optional[ShiftDefinition]: ...

    @abstractmethod
    def delete_many(self, shift_ids: Iterable[str]) -> int: ...

    def delete(self, shift_id: str) -> bool:
        return self.delete_many([shift_id]) > 0

    def commit(self) -> None:
        return None

    def rollback(self) -> None:
        return None


def _in_window(shift: ShiftDefinition, start: Optional[date], end: Optional[date]) -> bool:
    # recurring definitions may reach forward past their stored end date
    if end is not None and shift.start_date > end:
        return False
    if start is not None and shift.end_date < start and not shift.is_recurring:
        return False
    return True


class InMemoryShiftStore(ShiftStore):
    def __init__(self, shifts: Iterable[ShiftDefinition] = ()) -> None:
        self._rows: Dict[str, ShiftDefinition] = {}
        self._by_series: Dict[str, Set[str]] = defaultdict(set)
        for s in shifts:
            self.insert(s)

    def _index(self, shift: ShiftDefinition) -> None:
        if shift.series_id:
            self._by_series[shift.series_id].add(shift.id)

    def _unindex(self, shift: ShiftDefinition) -> None:
        if shift.series_id:
            self._by_series[shift.series_id].discard(shift.id)
            if not self._by_series[shift.series_id]:
                del self._by_series[shift.series_id]

    def get(self, shift_id: str) -> Optional[ShiftDefinition]:
        return self._rows.get(shift_id)

    def list(self, *, provider_id=None, clinic_type_id=None, is_vacation=None, start=None, end=None):
        rows = [
            s for s in self._rows.values()
            if (provider_id is None or s.provider_id == provider_id)
            and (clinic_type_id is None or s.clinic_type_id == clinic_type_id)
            and (is_vacation is None or s.is_vacation == is_vacation)
            and _in_window(s, start, end)
        ]
        return sorted(rows, key=lambda s: (s.start_date, s.id))

    def series(self, series_id: str) -> List[ShiftDefinition]:
        rows = [self._rows[i] for i in self._by_series.get(series_id, ())]
        return sorted(rows, key=lambda s: (s.start_date, s.id))

    def insert(self, shift: ShiftDefinition) -> ShiftDefinition:
        if shift.id is None:
            raise ValueError("stored shifts need an id")
        self._rows[shift.id] = shift
        self._index(shift)
        return shift

    def update(self, shift_id: str, patch: Dict[str, Any]) -> Optional[ShiftDefinition]:
        row = self._rows.get(shift_id)
        if row is None:
            return None
        self._unindex(row)
        row = row.model_copy(update=patch)
        self._rows[shift_id] = row
        self._index(row)
        return row

    def delete_many(self, shift_ids: Iterable[str]) -> int:
        removed = 0
        for shift_id in shift_ids:
            row = self._rows.pop(shift_id, None)
            if row is not None:
                self._unindex(row)
                removed += 1
        return removed


class SqlShiftStore(ShiftStore):
    """``ShiftStore`` over the ``shifts`` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @staticmethod
    def _to_definition(row: Shift) -> ShiftDefinition:
        return ShiftDefinition.model_validate(row)

    def get(self, shift_id: str) -> Optional[ShiftDefinition]:
        row = self.db.get(Shift, shift_id)
        return self._to_definition(row) if row else None

    def list(self, *, provider_id=None, clinic_type_id=None, is_vacation=None, start=None, end=None):
        stmt = select(Shift)
        if provider_id is not None:
            stmt = stmt.where(Shift.provider_id == provider_id)
        if clinic_type_id is not None:
            stmt = stmt.where(Shift.clinic_type_id == clinic_type_id)
        if is_vacation is not None:
            stmt = stmt.where(Shift.is_vacation == is_vacation)
        if end is not None:
            stmt = stmt.where(Shift.start_date <= end)
        if start is not None:
            stmt = stmt.where(or_(Shift.end_date >= start, Shift.is_recurring.is_(True)))
        stmt = stmt.order_by(Shift.start_date, Shift.id)
        return [self._to_definition(r) for r in self.db.scalars(stmt)]

    def series(self, series_id: str) -> List[ShiftDefinition]:
        stmt = select(Shift).where(Shift.series_id == series_id).order_by(Shift.start_date, Shift.id)
        return [self._to_definition(r) for r in self.db.scalars(stmt)]

    def insert(self, shift: ShiftDefinition) -> ShiftDefinition:
        row = Shift(**shift.model_dump(exclude={"is_part_of_series"}))
        self.db.add(row)
        self.db.flush()
        return self._to_definition(row)

    def update(self, shift_id: str, patch: Dict[str, Any]) -> Optional[ShiftDefinition]:
        row = self.db.get(Shift, shift_id)
        if not row:
            return None
        for k, v in patch.items():
            setattr(row, k, v)
        self.db.flush()
        return self._to_definition(row)

    def delete_many(self, shift_ids: Iterable[str]) -> int:
        ids = list(shift_ids)
        if not ids:
            return 0
        res = self.db.execute(delete(Shift).where(Shift.id.in_(ids)))
        return res.rowcount or 0

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

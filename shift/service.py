# shift/service.py
from __future__ import annotations
import logging
from datetime import date
from typing import Optional
from uuid import uuid4

from fastapi import HTTPException

from core.config_loader import settings, FutureDeleteMode
from .recurrence import (
    days_in_month,
    days_in_three_months,
    expand,
    occurrences_between,
    series_id_for,
    shifts_for_date,
)
from .schemas import DeleteScope, ShiftDefinition, ShiftKind, ShiftUpdate
from .store import ShiftStore

logger = logging.getLogger(__name__)

_NOT_NULL = ("provider_id", "clinic_type_id", "start_date", "end_date", "is_vacation", "is_recurring")


class ShiftNotFoundError(HTTPException):
    def __init__(self, shift_id: str):
        super().__init__(status_code=404, detail="Shift not found")
        self.shift_id = shift_id


def _expand_kwargs() -> dict:
    return {
        "max_occurrences": settings.MAX_OCCURRENCES,
        "horizon_days": settings.RECURRENCE_HORIZON_DAYS,
    }

def month_bounds(month: str) -> tuple[date, date]:
    """``"2026-03"`` -> first and last day of March 2026."""
    try:
        year, mon = (int(p) for p in month.split("-"))
        first = date(year, mon, 1)
    except ValueError:
        raise HTTPException(status_code=422, detail="month must look like YYYY-MM")
    return first, days_in_month(first)[-1]


# ---------- queries ----------

def get_shift(store: ShiftStore, shift_id: str) -> ShiftDefinition | None:
    return store.get(shift_id)

def get_shifts(
    store: ShiftStore,
    *,
    provider_id: Optional[str] = None,
    clinic_type_id: Optional[str] = None,
    is_vacation: Optional[bool] = None,
    month: Optional[str] = None,
) -> list[ShiftDefinition]:
    start = end = None
    if month:
        start, end = month_bounds(month)
    return store.list(
        provider_id=provider_id,
        clinic_type_id=clinic_type_id,
        is_vacation=is_vacation,
        start=start,
        end=end,
    )

def get_calendar(
    store: ShiftStore,
    start: date,
    end: date,
    *,
    provider_id: Optional[str] = None,
    clinic_type_id: Optional[str] = None,
) -> list[ShiftDefinition]:
    """Occurrences visible in ``start..end`` (inclusive), recurring shifts expanded."""
    if end < start:
        raise HTTPException(status_code=422, detail="end must be on or after start")
    rows = store.list(provider_id=provider_id, clinic_type_id=clinic_type_id, start=start, end=end)
    return occurrences_between(rows, start, end, **_expand_kwargs())

def get_shifts_for_day(store: ShiftStore, day: date, **filters) -> list[ShiftDefinition]:
    return shifts_for_date(get_calendar(store, day, day, **filters), day)

def get_month_grid(store: ShiftStore, month: str, *, span: int = 1, **filters) -> list[tuple[date, list]]:
    """
    One entry per calendar day with the occurrences on it. ``span=3`` covers
    the previous, current and next month like the quarter view.
    """
    if span not in (1, 3):
        raise HTTPException(status_code=422, detail="span must be 1 or 3")
    first, _ = month_bounds(month)
    days = days_in_month(first) if span == 1 else days_in_three_months(first)
    occurrences = get_calendar(store, days[0], days[-1], **filters)
    return [(d, shifts_for_date(occurrences, d)) for d in days]


# ---------- mutations ----------

def find_shift(store: ShiftStore, shift_id: str) -> ShiftDefinition | None:
    """
    The stored record for ``shift_id``. A derived occurrence id such as
    ``"W-2"`` resolves to the recurring definition ``W`` it was expanded from.
    """
    row = store.get(shift_id)
    if row:
        return row
    base_id, sep, index = shift_id.rpartition("-")
    if not sep or not index.isdigit():
        return None
    base = store.get(base_id)
    if not base or base.kind is not ShiftKind.recurring:
        return None
    if any(occ.id == shift_id for occ in expand(base, **_expand_kwargs())):
        return base
    return None

def materialize(store: ShiftStore, definition: ShiftDefinition) -> list[ShiftDefinition]:
    """
    Replace a stored recurring definition with one stored record per
    occurrence. The definition's own row becomes occurrence 0; records that
    already exist under an occurrence id are kept as they are. Not committed.
    """
    rows = []
    for occ in expand(definition, **_expand_kwargs()):
        data = occ.model_dump(exclude={"is_part_of_series"})
        data["is_recurring"] = False
        if occ.series_index == 0:
            data.pop("id")
            rows.append(store.update(definition.id, data))
        else:
            rows.append(store.get(occ.id) or store.insert(ShiftDefinition(**data)))
    logger.info("Materialized series %s into %d records", rows[0].series_id, len(rows))
    return rows

def create_shift(store: ShiftStore, shift: ShiftDefinition) -> ShiftDefinition:
    patch = {}
    if not shift.id:
        patch["id"] = str(uuid4())
    if shift.is_recurring and not shift.series_id:
        patch["series_id"] = str(uuid4())
    row = store.insert(shift.model_copy(update=patch) if patch else shift)
    store.commit()
    logger.info("Created shift %s (%s)", row.id, row.kind.value)
    return row

def save_series(store: ShiftStore, shift: ShiftDefinition) -> list[ShiftDefinition]:
    """
    Store every occurrence of a recurring shift as its own record. The rows
    share the series id, so single/future/all deletes can address them.
    """
    if shift.kind is not ShiftKind.recurring:
        return [create_shift(store, shift)]

    base = shift.model_copy(update={"id": shift.id or str(uuid4())})
    base = base.model_copy(update={"series_id": series_id_for(base)})
    rows = []
    for occ in expand(base, **_expand_kwargs()):
        data = occ.model_dump(exclude={"is_part_of_series"})
        data["is_recurring"] = False
        rows.append(store.insert(ShiftDefinition(**data)))
    store.commit()
    logger.info("Saved series %s with %d occurrences", base.series_id, len(rows))
    return rows

def update_shift(store: ShiftStore, shift_id: str, patch: ShiftUpdate) -> ShiftDefinition:
    row = find_shift(store, shift_id)
    if not row:
        logger.warning("Update of unknown shift %s", shift_id)
        raise ShiftNotFoundError(shift_id)
    if row.id != shift_id:
        # editing one occurrence splits the series into stored records first
        materialize(store, row)
        row = store.get(shift_id)

    data = {
        k: v for k, v in patch.model_dump(exclude_unset=True).items()
        if v is not None or k not in _NOT_NULL
    }

    new_start = data.get("start_date") or row.start_date
    new_end = data.get("end_date") or row.end_date
    if "start_date" in data and "end_date" not in data and row.end_date == row.start_date:
        # single-day shifts move as a whole
        new_end = new_start
        data["end_date"] = new_end
    if new_end < new_start:
        raise HTTPException(status_code=422, detail="endDate must be on or after startDate")

    recurrence_end = data.get("recurrence_end_date", row.recurrence_end_date)
    if data.get("is_recurring", row.is_recurring) and recurrence_end and recurrence_end < new_start:
        raise HTTPException(status_code=422, detail="recurrenceEndDate must be on or after startDate")

    if data.get("is_recurring") and not row.series_id:
        data["series_id"] = str(uuid4())

    updated = store.update(shift_id, data)
    store.commit()
    return updated

def delete_shift(
    store: ShiftStore,
    shift_id: str,
    scope: DeleteScope = DeleteScope.single,
    *,
    future_mode: Optional[FutureDeleteMode] = None,
) -> list[str]:
    """
    Delete a shift, or part of its series, and return the removed ids.

    - ``single``: only ``shift_id``.
    - ``all``: every record sharing its series id.
    - ``future``: depends on ``future_mode`` (settings default). ``preceding``
      removes the siblings dated strictly before the target and keeps the
      target and later ones, which is what the calendar has always done.
      ``this_and_following`` removes the target and every later sibling.

    ``shift_id`` may be a derived occurrence id of a stored recurring
    definition. ``all`` then removes the definition; ``single`` and
    ``future`` first store the definition's occurrences as records.
    A shift without a series id is always deleted as ``single``.
    """
    target = find_shift(store, shift_id)
    if not target:
        logger.warning("Delete of unknown shift %s", shift_id)
        raise ShiftNotFoundError(shift_id)

    scope = DeleteScope(scope)
    if target.kind is ShiftKind.recurring and scope is not DeleteScope.all:
        materialize(store, target)
        target = store.get(shift_id)

    if scope is DeleteScope.single or not target.series_id:
        ids = [target.id]
    elif scope is DeleteScope.all:
        ids = [s.id for s in store.series(target.series_id)]
    else:
        mode = FutureDeleteMode(future_mode or settings.FUTURE_DELETE_MODE)
        siblings = store.series(target.series_id)
        if mode is FutureDeleteMode.preceding:
            ids = [s.id for s in siblings if s.start_date < target.start_date]
        else:
            ids = [s.id for s in siblings if s.start_date >= target.start_date]

    store.delete_many(ids)
    store.commit()
    logger.info("Deleted %d shift(s) for %s with scope=%s", len(ids), shift_id, scope.value)
    return ids

"""
Date engine for the shift calendar.

Everything here works on calendar days (``datetime.date``). Timestamps are
collapsed to their local day first, so two values on the same day always
compare equal no matter their time of day.
"""
from __future__ import annotations
import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional, Union
from uuid import NAMESPACE_URL, uuid4, uuid5

from .models import RecurrencePattern
from .schemas import ShiftDefinition, ShiftKind, ShiftOccurrence

DateLike = Union[date, datetime, str]

DEFAULT_HORIZON_DAYS = 365
DEFAULT_MAX_OCCURRENCES = 100

STEP_DAYS = {
    RecurrencePattern.daily: 1,
    RecurrencePattern.weekly: 7,
    RecurrencePattern.biweekly: 14,
}

_SERIES_NAMESPACE = uuid5(NAMESPACE_URL, "shift-series")


# ---------- normalization ----------

def normalize(value: DateLike) -> date:
    """Collapse a date, datetime or ISO-8601 string to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def format_date(value: DateLike) -> str:
    return normalize(value).isoformat()


def is_date_in_range(value: DateLike, start: DateLike, end: DateLike) -> bool:
    return normalize(start) <= normalize(value) <= normalize(end)


# ---------- recurrence generation ----------

def iter_occurrence_dates(
    start: DateLike,
    end: Optional[DateLike] = None,
    pattern: Union[RecurrencePattern, str] = RecurrencePattern.weekly,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    *,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> Iterator[date]:
    """
    Yield occurrence days from ``start`` stepping by ``pattern``.

    The anchor day is always yielded. Later days are yielded only while they
    stay strictly before the horizon: ``end`` when given, otherwise
    ``start + horizon_days``. At most ``max_occurrences`` days come out.
    """
    if max_occurrences < 1:
        raise ValueError("max_occurrences must be at least 1")
    step = timedelta(days=STEP_DAYS[RecurrencePattern(pattern)])

    current = normalize(start)
    horizon = normalize(end) if end is not None else current + timedelta(days=horizon_days)

    yield current
    produced = 1
    while produced < max_occurrences:
        current += step
        if current >= horizon:
            return
        yield current
        produced += 1


def generate_occurrence_dates(
    start: DateLike,
    end: Optional[DateLike] = None,
    pattern: Union[RecurrencePattern, str] = RecurrencePattern.weekly,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    *,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> list[date]:
    return list(iter_occurrence_dates(start, end, pattern, max_occurrences, horizon_days=horizon_days))


# ---------- membership ----------

def occurs_on(shift, day: DateLike) -> bool:
    """True when ``shift`` covers ``day``: the same day, or inside a multi-day span."""
    start = normalize(shift.start_date)
    end = normalize(shift.end_date) if shift.end_date is not None else start
    target = normalize(day)
    if start == end:
        return target == start
    return start <= target <= end


def shifts_for_date(shifts: Iterable, day: DateLike) -> list:
    return [s for s in shifts if occurs_on(s, day)]


# ---------- expansion ----------

def _occurrence_id(base_id: Optional[str], index: int) -> Optional[str]:
    if index == 0 or base_id is None:
        return base_id
    return f"{base_id}-{index}"


def series_id_for(shift: ShiftDefinition) -> str:
    if shift.series_id:
        return shift.series_id
    if shift.id:
        return str(uuid5(_SERIES_NAMESPACE, shift.id))
    return str(uuid4())


def expand(
    shift: ShiftDefinition,
    *,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> list[ShiftDefinition]:
    """
    Materialize the occurrences of one stored shift.

    Single shifts and vacations come back as ``[shift]``, untouched. A
    recurring shift yields one ``ShiftOccurrence`` per generated day; the
    first keeps the shift's id, the i-th gets ``"<id>-<i>"``, and all of
    them share one series id.
    """
    if shift.kind is not ShiftKind.recurring:
        return [shift]

    days = generate_occurrence_dates(
        shift.start_date,
        shift.recurrence_end_date,
        shift.recurrence_pattern,
        max_occurrences,
        horizon_days=horizon_days,
    )
    series_id = series_id_for(shift)
    base = shift.model_dump(exclude={"is_part_of_series"})
    occurrences: list[ShiftDefinition] = []
    for index, day in enumerate(days):
        base.update(
            id=_occurrence_id(shift.id, index),
            start_date=day,
            end_date=day,
            series_id=series_id,
            series_index=index,
        )
        occurrences.append(ShiftOccurrence(**base, is_part_of_series=True))
    return occurrences


def expand_all(shifts: Iterable[ShiftDefinition], **kwargs) -> list[ShiftDefinition]:
    out: list[ShiftDefinition] = []
    for s in shifts:
        out.extend(expand(s, **kwargs))
    return out


def occurrences_between(
    shifts: Iterable[ShiftDefinition],
    start: DateLike,
    end: DateLike,
    **kwargs,
) -> list[ShiftDefinition]:
    """Expanded occurrences that touch the inclusive window ``start..end``, by day then id."""
    lo, hi = normalize(start), normalize(end)
    hits = [
        occ for occ in expand_all(shifts, **kwargs)
        if occ.start_date <= hi and occ.end_date >= lo
    ]
    hits.sort(key=lambda occ: (occ.start_date, occ.id or ""))
    return hits


# ---------- month grids ----------

def days_in_month(value: DateLike) -> list[date]:
    d = normalize(value)
    _, last = calendar.monthrange(d.year, d.month)
    return [date(d.year, d.month, n) for n in range(1, last + 1)]


def _shift_month(d: date, months: int) -> date:
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def days_in_three_months(value: DateLike) -> list[date]:
    """Every day of the previous, current and next month."""
    d = normalize(value)
    days: list[date] = []
    for offset in (-1, 0, 1):
        days.extend(days_in_month(_shift_month(d, offset)))
    return days

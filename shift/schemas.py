from __future__ import annotations
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import ConfigDict, Field, model_validator

from core.schemas import CamelModel

from .models import RecurrencePattern


class ShiftKind(str, Enum):
    single = "single"
    recurring = "recurring"
    vacation = "vacation"

class DeleteScope(str, Enum):
    single = "single"
    future = "future"
    all = "all"


# ---------- domain records ----------

class ShiftDefinition(CamelModel):
    id: Optional[str] = None
    provider_id: str
    clinic_type_id: str
    start_date: date
    end_date: Optional[date] = None
    is_vacation: bool = False
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_end_date: Optional[date] = None
    series_id: Optional[str] = None
    series_index: Optional[int] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    @model_validator(mode="after")
    def default_end_date(self):
        if self.end_date is None:
            self.end_date = self.start_date
        if self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        return self

    @property
    def kind(self) -> ShiftKind:
        # a recurring flag without a pattern is treated as a plain shift
        if self.is_recurring and self.recurrence_pattern is not None:
            return ShiftKind.recurring
        if self.is_vacation:
            return ShiftKind.vacation
        return ShiftKind.single


class ShiftOccurrence(ShiftDefinition):
    series_id: str
    series_index: int
    is_part_of_series: bool = True


# ---------- DB → API (read) ----------

class ShiftSchema(ShiftDefinition):
    id: str

class CalendarShiftSchema(ShiftDefinition):
    is_part_of_series: bool = False

class CalendarDaySchema(CamelModel):
    day: date = Field(..., alias="date")
    shifts: list[CalendarShiftSchema] = Field(default_factory=list)

class ShiftDeleteResult(CamelModel):
    deleted: list[str]


# ---------- Client → API ----------

class ShiftCreatePayload(CamelModel):
    id: Optional[str] = None
    provider_id: str
    clinic_type_id: str
    start_date: date
    end_date: Optional[date] = None
    is_vacation: bool = False
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_end_date: Optional[date] = None
    series_id: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        if self.recurrence_end_date is not None and self.recurrence_end_date < self.start_date:
            raise ValueError("recurrenceEndDate must be on or after startDate")
        return self

    def to_definition(self) -> ShiftDefinition:
        return ShiftDefinition(**self.model_dump())


class ShiftUpdate(CamelModel):
    provider_id: Optional[str] = None
    clinic_type_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_vacation: Optional[bool] = None
    is_recurring: Optional[bool] = None
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_end_date: Optional[date] = None
    notes: Optional[str] = None
    location: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_dates_if_both_present(self):
        if self.start_date is not None and self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        return self

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status, HTTPException
from sqlalchemy.orm import Session
from core.config_loader import FutureDeleteMode
from core.database import get_db
from .schemas import (
    CalendarDaySchema,
    CalendarShiftSchema,
    DeleteScope,
    ShiftCreatePayload,
    ShiftDeleteResult,
    ShiftSchema,
    ShiftUpdate,
)
from .store import ShiftStore, SqlShiftStore
from shift import service

shift_router = APIRouter(prefix="/shifts", tags=["Shifts"])

def get_store(db: Session = Depends(get_db)) -> ShiftStore:
    return SqlShiftStore(db)

def _calendar_rows(rows) -> list[CalendarShiftSchema]:
    return [CalendarShiftSchema(**r.model_dump()) for r in rows]

@shift_router.get("", response_model=list[ShiftSchema])
def list_shifts(
    provider_id: Optional[str] = None,
    clinic_type_id: Optional[str] = None,
    is_vacation: Optional[bool] = None,
    month: Optional[str] = Query(None, description="YYYY-MM, rows touching that month"),
    store: ShiftStore = Depends(get_store),
):
    return service.get_shifts(
        store,
        provider_id=provider_id,
        clinic_type_id=clinic_type_id,
        is_vacation=is_vacation,
        month=month,
    )

@shift_router.get("/calendar", response_model=list[CalendarShiftSchema])
def calendar_window(
    start: date,
    end: date,
    provider_id: Optional[str] = None,
    clinic_type_id: Optional[str] = None,
    store: ShiftStore = Depends(get_store),
):
    rows = service.get_calendar(store, start, end, provider_id=provider_id, clinic_type_id=clinic_type_id)
    return _calendar_rows(rows)

@shift_router.get("/calendar/month", response_model=list[CalendarDaySchema])
def calendar_month(
    month: str = Query(..., description="YYYY-MM"),
    span: int = Query(1, description="1 for a month view, 3 for the quarter view"),
    provider_id: Optional[str] = None,
    clinic_type_id: Optional[str] = None,
    store: ShiftStore = Depends(get_store),
):
    grid = service.get_month_grid(
        store, month, span=span, provider_id=provider_id, clinic_type_id=clinic_type_id
    )
    return [CalendarDaySchema(date=d, shifts=_calendar_rows(rows)) for d, rows in grid]

@shift_router.get("/day/{day}", response_model=list[CalendarShiftSchema])
def shifts_on_day(day: date, store: ShiftStore = Depends(get_store)):
    return _calendar_rows(service.get_shifts_for_day(store, day))

@shift_router.get("/{shift_id}", response_model=ShiftSchema)
def get_shift(shift_id: str, store: ShiftStore = Depends(get_store)):
    obj = service.get_shift(store, shift_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Shift not found")
    return obj

@shift_router.post("", response_model=list[ShiftSchema], status_code=status.HTTP_201_CREATED)
def create_shift(
    payload: ShiftCreatePayload,
    materialize: bool = Query(False, description="store each occurrence of a recurring shift"),
    store: ShiftStore = Depends(get_store),
):
    definition = payload.to_definition()
    if materialize:
        return service.save_series(store, definition)
    return [service.create_shift(store, definition)]

@shift_router.patch("/{shift_id}", response_model=ShiftSchema)
def patch_shift(shift_id: str, payload: ShiftUpdate, store: ShiftStore = Depends(get_store)):
    return service.update_shift(store, shift_id, payload)

@shift_router.delete("/{shift_id}", response_model=ShiftDeleteResult)
def delete_shift(
    shift_id: str,
    scope: DeleteScope = DeleteScope.single,
    future_mode: Optional[FutureDeleteMode] = None,
    store: ShiftStore = Depends(get_store),
):
    deleted = service.delete_shift(store, shift_id, scope, future_mode=future_mode)
    return ShiftDeleteResult(deleted=deleted)

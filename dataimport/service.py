from __future__ import annotations
import logging
from datetime import datetime, time, timedelta
from typing import Any, Optional
from uuid import uuid4

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config_loader import settings
from calendarnote.models import CalendarComment, CalendarNote
from calendarnote import service as note_service
from clinictype.models import ClinicType
from clinictype.service import get_clinic_types
from provider.models import Provider
from provider.service import get_providers
from shift.recurrence import expand_all, normalize
from shift import service as shift_service
from shift.schemas import ShiftDefinition
from shift.store import SqlShiftStore
from .schemas import (
    ClinicTypeImport,
    CommentImport,
    ImportDocument,
    ImportResult,
    MonthlyNoteImport,
    ProviderImport,
    ShiftImport,
)

logger = logging.getLogger(__name__)


# ---------- validation ----------

def validate_import_document(data: Any) -> ImportDocument:
    """Parse an uploaded document; anything malformed rejects the whole file."""
    if not isinstance(data, dict):
        logger.warning("Rejected import: top level is %s", type(data).__name__)
        raise HTTPException(status_code=422, detail="Import document must be a JSON object")
    try:
        return ImportDocument.model_validate(data)
    except ValidationError as e:
        logger.warning("Rejected import: %d validation error(s)", e.error_count())
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

def shift_from_import(item: ShiftImport) -> ShiftDefinition:
    return ShiftDefinition(
        id=item.id or str(uuid4()),
        provider_id=item.provider_id,
        clinic_type_id=item.clinic_type_id,
        start_date=normalize(item.start_time),
        end_date=normalize(item.end_time),
        is_vacation=item.is_vacation,
        notes=item.notes,
        location=item.location,
    )


# ---------- import ----------

# the import format has no recurrence or series fields
_IMPORTED_FIELDS = {"provider_id", "clinic_type_id", "start_date", "end_date", "is_vacation", "notes", "location"}

def _series_link(store: SqlShiftStore, shift_id: str) -> dict:
    """``series_id``/``series_index`` for an ``"<base>-<n>"`` id whose base row belongs to a series."""
    base_id, sep, index = shift_id.rpartition("-")
    if not sep or not index.isdigit():
        return {}
    base = store.get(base_id)
    if not base or not base.series_id:
        return {}
    return {"series_id": base.series_id, "series_index": int(index)}

def _upsert_shift(store: SqlShiftStore, incoming: ShiftDefinition) -> None:
    found = shift_service.find_shift(store, incoming.id)
    if found is not None and found.id != incoming.id:
        # an exported occurrence of a stored recurring definition
        shift_service.materialize(store, found)
        found = store.get(incoming.id)
    if found is None:
        store.insert(incoming.model_copy(update=_series_link(store, incoming.id)))
    else:
        store.update(incoming.id, incoming.model_dump(include=_IMPORTED_FIELDS))

def apply_import(db: Session, doc: ImportDocument) -> ImportResult:
    """
    Upsert everything in ``doc`` in one transaction. Rows are matched by id
    (notes by month); nothing is written if any row fails.
    """
    result = ImportResult()
    try:
        for p in doc.providers:
            db.merge(Provider(id=p.id, name=p.name, color=p.color, is_active=p.is_active))
            result.providers += 1
        for c in doc.clinic_types:
            db.merge(ClinicType(id=c.id, name=c.name, color=c.color, is_active=c.is_active))
            result.clinic_types += 1
        store = SqlShiftStore(db)
        for s in doc.shifts:
            _upsert_shift(store, shift_from_import(s))
            result.shifts += 1
        for note in doc.monthly_notes or []:
            row = note_service.get_note(db, note.month)
            if row is None:
                db.add(CalendarNote(period=note.month, notes=note.notes))
                db.flush()
            else:
                row.notes = note.notes
            result.monthly_notes += 1
            for cm in note.comments or []:
                db.merge(CalendarComment(
                    id=cm.id,
                    period=note.month,
                    author=cm.author,
                    author_id=cm.author_id,
                    avatar_url=cm.avatar_url,
                    content=cm.content,
                    created_at=cm.created_at,
                ))
                result.comments += 1
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Import rolled back on integrity error")
        raise HTTPException(status_code=409, detail="Import conflicts with existing data")

    logger.info(
        "Imported %d providers, %d clinic types, %d shifts, %d notes",
        result.providers, result.clinic_types, result.shifts, result.monthly_notes,
    )
    return result


# ---------- export / template ----------

def _as_datetime(d) -> datetime:
    return datetime.combine(d, time.min)

def export_document(db: Session) -> ImportDocument:
    """Current data in import shape. Recurring shifts are written out occurrence by occurrence."""
    shifts = expand_all(
        SqlShiftStore(db).list(),
        max_occurrences=settings.MAX_OCCURRENCES,
        horizon_days=settings.RECURRENCE_HORIZON_DAYS,
    )
    month_notes = [n for n in note_service.get_notes(db) if len(n.period) == 7]
    return ImportDocument(
        providers=[
            ProviderImport(id=p.id, name=p.name, color=p.color, is_active=p.is_active)
            for p in get_providers(db)
        ],
        clinic_types=[
            ClinicTypeImport(id=c.id, name=c.name, color=c.color, is_active=c.is_active)
            for c in get_clinic_types(db)
        ],
        shifts=[
            ShiftImport(
                id=s.id,
                provider_id=s.provider_id,
                clinic_type_id=s.clinic_type_id,
                start_time=_as_datetime(s.start_date),
                end_time=_as_datetime(s.end_date),
                is_vacation=s.is_vacation,
                notes=s.notes,
                location=s.location,
            )
            for s in shifts
        ],
        monthly_notes=[
            MonthlyNoteImport(
                month=n.period,
                notes=n.notes or "",
                comments=[
                    CommentImport(
                        id=cm.id,
                        author=cm.author,
                        author_id=cm.author_id,
                        content=cm.content,
                        created_at=cm.created_at,
                        avatar_url=cm.avatar_url,
                    )
                    for cm in note_service.get_comments(db, n.period)
                ],
            )
            for n in month_notes
        ],
    )

def build_template(now: Optional[datetime] = None) -> ImportDocument:
    """Example document users can fill in."""
    now = now or datetime.now()
    tomorrow = now + timedelta(days=1)
    return ImportDocument(
        providers=[ProviderImport(**p.model_dump()) for p in settings.DEFAULT_PROVIDERS],
        clinic_types=[ClinicTypeImport(**c.model_dump()) for c in settings.DEFAULT_CLINIC_TYPES],
        shifts=[
            ShiftImport(
                id="1",
                provider_id="1",
                clinic_type_id="1",
                start_time=now,
                end_time=now + timedelta(hours=8),
                is_vacation=False,
                notes="Regular shift",
                location="Main Clinic",
            ),
            ShiftImport(
                id="2",
                provider_id="2",
                clinic_type_id="2",
                start_time=tomorrow,
                end_time=tomorrow,
                is_vacation=False,
                notes="Specialty clinic",
                location="North Branch",
            ),
        ],
    )

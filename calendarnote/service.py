from __future__ import annotations
import re
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import CalendarNote, CalendarComment
from .schemas import PERIOD_PATTERN, CalendarNoteUpsert, CalendarCommentCreatePayload

_PERIOD_RE = re.compile(PERIOD_PATTERN)


def check_period(period: str) -> str:
    if not _PERIOD_RE.match(period):
        raise HTTPException(status_code=422, detail="period must be YYYY-MM or YYYY-MM-DD")
    return period


# ---------- notes ----------

def get_notes(db: Session, *, period_prefix: Optional[str] = None) -> List[CalendarNote]:
    """Notes whose period starts with ``period_prefix`` ("2026-03" → the month note and its day notes)."""
    stmt = select(CalendarNote)
    if period_prefix:
        stmt = stmt.where(CalendarNote.period.startswith(period_prefix))
    stmt = stmt.order_by(CalendarNote.period.asc())
    return list(db.scalars(stmt))

def get_note(db: Session, period: str) -> CalendarNote | None:
    return db.scalars(select(CalendarNote).where(CalendarNote.period == period)).first()

def upsert_note(db: Session, period: str, payload: CalendarNoteUpsert) -> CalendarNote:
    check_period(period)
    row = get_note(db, period)
    if row is None:
        row = CalendarNote(period=period, notes=payload.notes)
        db.add(row)
    else:
        row.notes = payload.notes
    db.commit()
    db.refresh(row)
    return row

def delete_note(db: Session, period: str) -> bool:
    row = get_note(db, period)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True


# ---------- comments ----------

def get_comments(db: Session, period: str) -> List[CalendarComment]:
    stmt = (
        select(CalendarComment)
        .where(CalendarComment.period == period)
        .order_by(CalendarComment.created_at.asc(), CalendarComment.id.asc())
    )
    return list(db.scalars(stmt))

def add_comment(db: Session, period: str, payload: CalendarCommentCreatePayload) -> CalendarComment:
    check_period(period)
    row = CalendarComment(period=period, **payload.model_dump(exclude_none=True))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def delete_comment(db: Session, comment_id: str) -> bool:
    row = db.get(CalendarComment, comment_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from .schemas import (
    CalendarNoteSchema,
    CalendarNoteUpsert,
    CalendarCommentSchema,
    CalendarCommentCreatePayload,
)
from . import service

calendarnote_router = APIRouter(prefix="/calendar-notes", tags=["Calendar Notes"])

@calendarnote_router.get("", response_model=list[CalendarNoteSchema])
def list_notes(
    period: Optional[str] = Query(None, description="YYYY, YYYY-MM or YYYY-MM-DD prefix"),
    db: Session = Depends(get_db),
):
    return service.get_notes(db, period_prefix=period)

# Comment routes go first so "comments" is never read as a period
@calendarnote_router.delete("/comments/{comment_id}")
def delete_comment(comment_id: str, db: Session = Depends(get_db)):
    if not service.delete_comment(db, comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment deleted"}

@calendarnote_router.get("/{period}", response_model=CalendarNoteSchema)
def get_note(period: str, db: Session = Depends(get_db)):
    obj = service.get_note(db, period)
    if not obj:
        raise HTTPException(status_code=404, detail="Note not found")
    return obj

@calendarnote_router.put("/{period}", response_model=CalendarNoteSchema)
def put_note(period: str, payload: CalendarNoteUpsert, db: Session = Depends(get_db)):
    return service.upsert_note(db, period, payload)

@calendarnote_router.delete("/{period}")
def delete_note(period: str, db: Session = Depends(get_db)):
    if not service.delete_note(db, period):
        raise HTTPException(status_code=404, detail="Note not found")
    return {"message": "Note deleted"}

@calendarnote_router.get("/{period}/comments", response_model=list[CalendarCommentSchema])
def list_comments(period: str, db: Session = Depends(get_db)):
    return service.get_comments(db, period)

@calendarnote_router.post("/{period}/comments", response_model=CalendarCommentSchema, status_code=status.HTTP_201_CREATED)
def post_comment(period: str, payload: CalendarCommentCreatePayload, db: Session = Depends(get_db)):
    return service.add_comment(db, period, payload)

from __future__ import annotations
from datetime import datetime
from uuid import uuid4
from sqlalchemy import DateTime, String, Text, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base

class CalendarNote(Base):
    __tablename__ = "calendar_notes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))
    # "YYYY-MM" for a month note, "YYYY-MM-DD" for a day note
    period: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

class CalendarComment(Base):
    __tablename__ = "calendar_comments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))
    period: Mapped[str] = mapped_column(String(10), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[str] = mapped_column(String(64), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

Index("ix_calendar_comments_period_created", CalendarComment.period, CalendarComment.created_at)

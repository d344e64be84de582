from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from uuid import uuid4
from sqlalchemy import Boolean, Date, DateTime, Integer, String, Text, ForeignKey, Enum as SAEnum, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from core.database import Base

class RecurrencePattern(str, Enum):
    daily = "daily"
    weekly = "weekly"
    biweekly = "biweekly"

class Shift(Base):
    __tablename__ = "shifts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    provider_id: Mapped[str] = mapped_column(ForeignKey("providers.id"), index=True)
    clinic_type_id: Mapped[str] = mapped_column(ForeignKey("clinic_types.id"), index=True)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date:   Mapped[date] = mapped_column(Date, nullable=False)

    is_vacation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[RecurrencePattern | None] = mapped_column(
        SAEnum(RecurrencePattern, name="recurrence_pattern"), nullable=True
    )
    recurrence_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # shared by every stored member of one recurring series
    series_id: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    series_index: Mapped[int | None] = mapped_column(Integer, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

Index("ix_shifts_start_end", Shift.start_date, Shift.end_date)
Index("ix_shifts_series_start", Shift.series_id, Shift.start_date)

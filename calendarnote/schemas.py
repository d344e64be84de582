from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict, Field

from core.schemas import CamelModel

PERIOD_PATTERN = r"^\d{4}-\d{2}(-\d{2})?$"


class CalendarNoteSchema(CamelModel):
    id: str
    period: str
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None

class CalendarNoteUpsert(CamelModel):
    notes: str = ""
    model_config = ConfigDict(extra="forbid")


class CalendarCommentSchema(CamelModel):
    id: str
    period: str
    author: str
    author_id: str
    avatar_url: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None

class CalendarCommentCreatePayload(CamelModel):
    id: Optional[str] = None
    author: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)
    avatar_url: Optional[str] = None
    content: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
    model_config = ConfigDict(extra="forbid")

from __future__ import annotations
from datetime import datetime
from typing import Optional, List
from pydantic import Field, model_validator

from core.schemas import CamelModel


class ProviderImport(CamelModel):
    id: str
    name: str
    color: str
    is_active: bool

class ClinicTypeImport(CamelModel):
    id: str
    name: str
    color: str
    is_active: bool

class ShiftImport(CamelModel):
    id: Optional[str] = None
    provider_id: str
    clinic_type_id: str
    start_time: datetime = Field(..., description="ISO8601")
    end_time: datetime = Field(..., description="ISO8601")
    is_vacation: bool
    notes: Optional[str] = None
    location: Optional[str] = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_time < self.start_time:
            raise ValueError("endTime must not be before startTime")
        return self

class CommentImport(CamelModel):
    id: str
    author: str
    author_id: str
    content: str
    created_at: datetime
    avatar_url: Optional[str] = None

class MonthlyNoteImport(CamelModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    notes: str  # HTML
    comments: Optional[List[CommentImport]] = None

class ImportDocument(CamelModel):
    providers: List[ProviderImport]
    clinic_types: List[ClinicTypeImport]
    shifts: List[ShiftImport]
    monthly_notes: Optional[List[MonthlyNoteImport]] = None

class ImportResult(CamelModel):
    providers: int = 0
    clinic_types: int = 0
    shifts: int = 0
    monthly_notes: int = 0
    comments: int = 0

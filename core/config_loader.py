from __future__ import annotations
from enum import Enum
from typing import List

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class FutureDeleteMode(str, Enum):
    # "preceding" keeps the behavior the calendar has always had: a "future"
    # delete drops the siblings dated before the chosen occurrence.
    preceding = "preceding"
    this_and_following = "this_and_following"


class DefaultEntry(BaseModel):
    id: str
    name: str
    color: str
    is_active: bool = True


DEFAULT_PROVIDERS = [
    DefaultEntry(id="1", name="Dr. Smith", color="#4f46e5"),
    DefaultEntry(id="2", name="Dr. Johnson", color="#10b981"),
    DefaultEntry(id="3", name="Dr. Williams", color="#f59e0b"),
    DefaultEntry(id="4", name="Dr. Brown", color="#ec4899"),
    DefaultEntry(id="5", name="Dr. Davis", color="#6366f1", is_active=False),
]

DEFAULT_CLINIC_TYPES = [
    DefaultEntry(id="1", name="Primary Care", color="#3b82f6"),
    DefaultEntry(id="2", name="Specialty", color="#ec4899"),
    DefaultEntry(id="3", name="Urgent Care", color="#ef4444"),
    DefaultEntry(id="4", name="Pediatrics", color="#8b5cf6"),
    DefaultEntry(id="5", name="Geriatrics", color="#f97316", is_active=False),
]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Provider Shift Calendar"
    DATABASE_URL: str = "sqlite:///./calendar.db"
    BACKEND_CORS_ORIGINS: List[str] = []
    LOG_LEVEL: str = "INFO"

    # recurrence
    RECURRENCE_HORIZON_DAYS: int = 365
    MAX_OCCURRENCES: int = 100
    FUTURE_DELETE_MODE: FutureDeleteMode = FutureDeleteMode.preceding

    DEFAULT_PROVIDERS: List[DefaultEntry] = DEFAULT_PROVIDERS
    DEFAULT_CLINIC_TYPES: List[DefaultEntry] = DEFAULT_CLINIC_TYPES
    SEED_DEFAULTS: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

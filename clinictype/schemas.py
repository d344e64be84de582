from typing import Optional
from pydantic import ConfigDict, Field

from core.schemas import CamelModel

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"

class ClinicTypeSchema(CamelModel):
    id: str
    name: str
    color: str
    is_active: bool

# PUBLIC payload, what clients send
class ClinicTypeCreatePayload(CamelModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    color: str = Field("#3b82f6", pattern=HEX_COLOR)
    is_active: bool = True
    model_config = ConfigDict(extra="forbid")

class ClinicTypeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    is_active: Optional[bool] = None
    model_config = ConfigDict(extra="forbid")

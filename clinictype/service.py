import logging
from typing import Optional, List
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, func

from core.config_loader import settings
from shift.models import Shift
from .models import ClinicType
from .schemas import ClinicTypeCreatePayload, ClinicTypeUpdate

logger = logging.getLogger(__name__)

def get_clinic_types(db: Session, *, active: Optional[bool] = None) -> List[ClinicType]:
    stmt = select(ClinicType)
    if active is not None:
        stmt = stmt.where(ClinicType.is_active == active)
    stmt = stmt.order_by(ClinicType.name.asc())
    return list(db.scalars(stmt))

def get_clinic_type(db: Session, clinic_type_id: str) -> Optional[ClinicType]:
    return db.get(ClinicType, clinic_type_id)

def create_clinic_type(db: Session, payload: ClinicTypeCreatePayload) -> ClinicType:
    row = ClinicType(**payload.model_dump(exclude_none=True))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_clinic_type(db: Session, clinic_type_id: str, patch: ClinicTypeUpdate) -> Optional[ClinicType]:
    row = db.get(ClinicType, clinic_type_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    for k, v in data.items():
        setattr(row, k, v)
    db.commit(); db.refresh(row)
    return row

def delete_clinic_type(db: Session, clinic_type_id: str) -> bool:
    row = db.get(ClinicType, clinic_type_id)
    if not row:
        return False
    in_use = db.scalar(select(func.count(Shift.id)).where(Shift.clinic_type_id == clinic_type_id))
    if in_use:
        raise HTTPException(status_code=409, detail="Clinic type still has shifts")
    db.delete(row); db.commit()
    return True

def seed_default_clinic_types(db: Session) -> int:
    """Fill an empty clinic types table from the configured defaults."""
    if db.scalar(select(func.count(ClinicType.id))):
        return 0
    rows = [ClinicType(**entry.model_dump()) for entry in settings.DEFAULT_CLINIC_TYPES]
    db.add_all(rows)
    db.commit()
    logger.info("Seeded %d default clinic types", len(rows))
    return len(rows)

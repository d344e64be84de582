import logging
from typing import Optional, List
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select, func

from core.config_loader import settings
from shift.models import Shift
from .models import Provider
from .schemas import ProviderCreatePayload, ProviderUpdate

logger = logging.getLogger(__name__)

def get_providers(db: Session, *, active: Optional[bool] = None) -> List[Provider]:
    stmt = select(Provider)
    if active is not None:
        stmt = stmt.where(Provider.is_active == active)
    stmt = stmt.order_by(Provider.name.asc())
    return list(db.scalars(stmt))

def get_provider(db: Session, provider_id: str) -> Optional[Provider]:
    return db.get(Provider, provider_id)

def create_provider(db: Session, payload: ProviderCreatePayload) -> Provider:
    row = Provider(**payload.model_dump(exclude_none=True))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def update_provider(db: Session, provider_id: str, patch: ProviderUpdate) -> Optional[Provider]:
    row = db.get(Provider, provider_id)
    if not row:
        return None
    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    for k, v in data.items():
        setattr(row, k, v)
    db.commit(); db.refresh(row)
    return row

def delete_provider(db: Session, provider_id: str) -> bool:
    row = db.get(Provider, provider_id)
    if not row:
        return False
    in_use = db.scalar(select(func.count(Shift.id)).where(Shift.provider_id == provider_id))
    if in_use:
        raise HTTPException(status_code=409, detail="Provider still has shifts")
    db.delete(row); db.commit()
    return True

def seed_default_providers(db: Session) -> int:
    """Fill an empty providers table from the configured defaults."""
    if db.scalar(select(func.count(Provider.id))):
        return 0
    rows = [Provider(**entry.model_dump()) for entry in settings.DEFAULT_PROVIDERS]
    db.add_all(rows)
    db.commit()
    logger.info("Seeded %d default providers", len(rows))
    return len(rows)

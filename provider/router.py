from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from .schemas import ProviderSchema, ProviderCreatePayload, ProviderUpdate
from . import service

provider_router = APIRouter(prefix="/providers", tags=["Providers"])

# List providers, optionally only active/inactive ones
@provider_router.get("", response_model=list[ProviderSchema])
def list_providers(active: Optional[bool] = None, db: Session = Depends(get_db)):
    return service.get_providers(db, active=active)

@provider_router.get("/{provider_id}", response_model=ProviderSchema)
def provider_detail(provider_id: str, db: Session = Depends(get_db)):
    obj = service.get_provider(db, provider_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Provider not found")
    return obj

@provider_router.post("", response_model=ProviderSchema, status_code=status.HTTP_201_CREATED)
def provider_post(payload: ProviderCreatePayload, db: Session = Depends(get_db)):
    try:
        return service.create_provider(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Provider id already exists")

@provider_router.patch("/{provider_id}", response_model=ProviderSchema)
def provider_patch(provider_id: str, payload: ProviderUpdate, db: Session = Depends(get_db)):
    obj = service.update_provider(db, provider_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Provider not found")
    return obj

@provider_router.delete("/{provider_id}")
def provider_delete(provider_id: str, db: Session = Depends(get_db)):
    if not service.delete_provider(db, provider_id):
        raise HTTPException(status_code=404, detail="Provider not found")
    return {"message": "Provider deleted"}

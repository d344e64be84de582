from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from .schemas import ClinicTypeSchema, ClinicTypeCreatePayload, ClinicTypeUpdate
from . import service

clinic_type_router = APIRouter(prefix="/clinic-types", tags=["Clinic Types"])

# List clinic types, optionally only active/inactive ones
@clinic_type_router.get("", response_model=list[ClinicTypeSchema])
def list_clinic_types(active: Optional[bool] = None, db: Session = Depends(get_db)):
    return service.get_clinic_types(db, active=active)

@clinic_type_router.get("/{clinic_type_id}", response_model=ClinicTypeSchema)
def clinic_type_detail(clinic_type_id: str, db: Session = Depends(get_db)):
    obj = service.get_clinic_type(db, clinic_type_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Clinic type not found")
    return obj

@clinic_type_router.post("", response_model=ClinicTypeSchema, status_code=status.HTTP_201_CREATED)
def clinic_type_post(payload: ClinicTypeCreatePayload, db: Session = Depends(get_db)):
    try:
        return service.create_clinic_type(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Clinic type id already exists")

@clinic_type_router.patch("/{clinic_type_id}", response_model=ClinicTypeSchema)
def clinic_type_patch(clinic_type_id: str, payload: ClinicTypeUpdate, db: Session = Depends(get_db)):
    obj = service.update_clinic_type(db, clinic_type_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Clinic type not found")
    return obj

@clinic_type_router.delete("/{clinic_type_id}")
def clinic_type_delete(clinic_type_id: str, db: Session = Depends(get_db)):
    if not service.delete_clinic_type(db, clinic_type_id):
        raise HTTPException(status_code=404, detail="Clinic type not found")
    return {"message": "Clinic type deleted"}

from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from .schemas import ImportDocument, ImportResult
from . import service

import_router = APIRouter(tags=["Import / Export"])

@import_router.post("/import", response_model=ImportResult)
def import_data(data: Any = Body(...), db: Session = Depends(get_db)):
    doc = service.validate_import_document(data)
    return service.apply_import(db, doc)

@import_router.get("/import/template", response_model=ImportDocument)
def import_template():
    return service.build_template()

@import_router.get("/export", response_model=ImportDocument)
def export_data(db: Session = Depends(get_db)):
    return service.export_document(db)

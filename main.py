from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.database import SessionLocal
from core.logging_config import configure_logging

from shift.router import shift_router
from provider.router import provider_router
from provider.service import seed_default_providers
from clinictype.router import clinic_type_router
from clinictype.service import seed_default_clinic_types
from calendarnote.router import calendarnote_router
from dataimport.router import import_router
import models_bootstrap

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEFAULTS:
        with SessionLocal() as db:
            seed_default_providers(db)
            seed_default_clinic_types(db)
    yield


openapi_tags = [
    {
        "name": "Shifts",
        "description": "Shifts, recurring series and calendar views",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title=settings.PROJECT_NAME, openapi_tags=openapi_tags, lifespan=lifespan)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(shift_router, prefix="/api")
app.include_router(provider_router, prefix="/api")
app.include_router(clinic_type_router, prefix="/api")
app.include_router(calendarnote_router, prefix="/api")
app.include_router(import_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}

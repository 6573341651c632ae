"""Registrations API: admission and manager listing."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.identity import require_manager
from app.core.request_context import RequestContext
from app.db import get_db
from app.schemas.registration import (
    RegistrationCreate,
    RegistrationListResponse,
    RegistrationRead,
    RegistrationResponse,
)
from app.services.registration_service import RegistrationService

registrations_router = APIRouter(prefix="/api/registrations", tags=["registrations"])


@registrations_router.post("", response_model=RegistrationResponse, status_code=201)
def create_registration(
    data: RegistrationCreate,
    db: Session = Depends(get_db),
) -> RegistrationResponse:
    """Register for an event. Full and duplicate registrations are 400s."""
    registration = RegistrationService(db).register(data)
    return RegistrationResponse(
        message="Registration successful",
        registration=RegistrationRead.model_validate(registration),
    )


@registrations_router.get("/event/{event_id}", response_model=RegistrationListResponse)
def list_event_registrations(
    event_id: str,
    _ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> RegistrationListResponse:
    registrations = RegistrationService(db).get_registrations_for_event(event_id)
    return RegistrationListResponse(
        registrations=[RegistrationRead.model_validate(r) for r in registrations]
    )

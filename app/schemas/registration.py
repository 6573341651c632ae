"""Pydantic schemas for Registration."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from app.schemas.common import CamelModel, Envelope


class RegistrationCreate(CamelModel):
    event_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    transaction_screenshot: Optional[str] = None


class RegistrationRead(CamelModel):
    id: UUID
    event_id: UUID
    name: str
    email: str
    phone_number: Optional[str] = None
    transaction_screenshot: Optional[str] = None
    registered_at: datetime
    created_at: datetime


class RegistrationResponse(Envelope):
    message: Optional[str] = None
    registration: RegistrationRead


class RegistrationListResponse(Envelope):
    registrations: list[RegistrationRead]

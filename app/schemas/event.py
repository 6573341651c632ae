"""Pydantic schemas for Event."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel, Envelope


class EventBase(CamelModel):
    event_name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    last_date: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    venue: Optional[str] = None
    contact: Optional[str] = None
    custom_fields: Optional[dict[str, Any]] = None
    capacity: int = Field(ge=0)


class EventCreate(EventBase):
    pass


class EventUpdate(CamelModel):
    """All fields optional. ``registeredCount`` is not accepted here."""

    event_name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    last_date: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    venue: Optional[str] = None
    contact: Optional[str] = None
    custom_fields: Optional[dict[str, Any]] = None
    capacity: Optional[int] = Field(default=None, ge=0)


class EventRead(EventBase):
    id: UUID
    registered_count: int
    manager_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class EventResponse(Envelope):
    message: Optional[str] = None
    event: EventRead


class EventListResponse(Envelope):
    events: list[EventRead]

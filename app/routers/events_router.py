"""Events API: the minimal CRUD managers need to open events for registration."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.identity import require_manager
from app.core.request_context import RequestContext
from app.db import get_db
from app.schemas.common import MessageEnvelope
from app.schemas.event import (
    EventCreate,
    EventListResponse,
    EventRead,
    EventResponse,
    EventUpdate,
)
from app.services.event_service import EventService

events_router = APIRouter(prefix="/api/events", tags=["events"])


@events_router.post("", response_model=EventResponse, status_code=201)
def create_event(
    data: EventCreate,
    ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> EventResponse:
    event = EventService(db).create_event(data, manager_id=UUID(ctx.user_id))
    return EventResponse(
        message="Event created successfully", event=EventRead.model_validate(event)
    )


@events_router.get("", response_model=EventListResponse)
def list_events(db: Session = Depends(get_db)) -> EventListResponse:
    """All live events, newest first."""
    events = EventService(db).get_events()
    return EventListResponse(events=[EventRead.model_validate(e) for e in events])


@events_router.get("/manager", response_model=EventListResponse)
def list_manager_events(
    ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> EventListResponse:
    events = EventService(db).get_events_for_manager(UUID(ctx.user_id))
    return EventListResponse(events=[EventRead.model_validate(e) for e in events])


@events_router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, db: Session = Depends(get_db)) -> EventResponse:
    event = EventService(db).require_event(event_id)
    return EventResponse(event=EventRead.model_validate(event))


@events_router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    data: EventUpdate,
    ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> EventResponse:
    event = EventService(db).update_event(event_id, data, manager_id=UUID(ctx.user_id))
    return EventResponse(
        message="Event updated successfully", event=EventRead.model_validate(event)
    )


@events_router.delete("/{event_id}", response_model=MessageEnvelope)
def delete_event(
    event_id: str,
    ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> MessageEnvelope:
    EventService(db).delete_event(event_id, manager_id=UUID(ctx.user_id))
    return MessageEnvelope(message="Event deleted successfully")

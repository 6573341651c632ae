"""Event CRUD. ``registered_count`` is never written here."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.refs import to_uuid
from app.exceptions import NotFoundError, ValidationError
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate
from app.services.soft_delete_service import SoftDeleteService


class EventService(SoftDeleteService[Event]):
    def __init__(self, db: Session) -> None:
        super().__init__(db, Event)

    def get_event(self, event_id) -> Optional[Event]:
        """Fetch a live event by id; malformed ids are treated as unknown."""
        try:
            event_uuid = to_uuid(event_id)
        except ValueError:
            return None
        return self.active().filter(Event.id == event_uuid).first()

    def require_event(self, event_id) -> Event:
        event = self.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def get_events(self) -> List[Event]:
        return self.active().order_by(Event.created_at.desc()).all()

    def get_events_for_manager(self, manager_id: UUID) -> List[Event]:
        return (
            self.active()
            .filter(Event.manager_id == manager_id)
            .order_by(Event.created_at.desc())
            .all()
        )

    def create_event(self, data: EventCreate, manager_id: Optional[UUID]) -> Event:
        event = Event(**data.model_dump(), manager_id=manager_id, registered_count=0)
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        return event

    def _require_owned(self, event_id, manager_id: UUID) -> Event:
        event = self.get_event(event_id)
        if event is None or event.manager_id != manager_id:
            raise NotFoundError("Event not found or unauthorized")
        return event

    def update_event(self, event_id, data: EventUpdate, manager_id: UUID) -> Event:
        """
        Update an event owned by ``manager_id``.

        Capacity is changed with a conditional UPDATE so that it can never be
        lowered below a registered_count committed by a concurrent admission.
        """
        event = self._require_owned(event_id, manager_id)
        changes = data.model_dump(exclude_unset=True)
        capacity = changes.pop("capacity", None)
        if capacity is not None:
            result = self.db.execute(
                update(Event)
                .where(Event.id == event.id, Event.registered_count <= capacity)
                .values(capacity=capacity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                raise ValidationError(
                    "Capacity cannot be lower than the number of registrations"
                )
        for key, value in changes.items():
            setattr(event, key, value)
        self.db.commit()
        self.db.refresh(event)
        return event

    def delete_event(self, event_id, manager_id: UUID) -> None:
        event = self._require_owned(event_id, manager_id)
        self.delete_record(event.id)

"""Registration ledger: admission against event capacity."""

from __future__ import annotations

from typing import List

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    ValidationError,
)
from app.infra.logging_config import get_logger
from app.models.event import Event
from app.models.registration import Registration
from app.schemas.registration import RegistrationCreate
from app.services.event_service import EventService

logger = get_logger("registrations")

REQUIRED_FIELDS = ("event_id", "name", "email")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class RegistrationService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self._event_svc = EventService(db)

    def get_by_event_and_email(self, event_id, email: str) -> Registration | None:
        return (
            self.db.query(Registration)
            .filter(
                Registration.event_id == event_id,
                Registration.email == normalize_email(email),
            )
            .first()
        )

    def get_registrations_for_event(self, event_id) -> List[Registration]:
        event = self._event_svc.require_event(event_id)
        return (
            self.db.query(Registration)
            .filter(Registration.event_id == event.id)
            .order_by(Registration.registered_at.desc())
            .all()
        )

    def register(self, data: RegistrationCreate) -> Registration:
        """
        Admit one registration.

        The seat is taken with ``UPDATE ... WHERE registered_count < capacity``
        in the same transaction as the INSERT: a concurrent admission either
        waits on the row or sees the incremented count, so registered_count
        never passes capacity. A racing duplicate trips the unique constraint
        and rolls the increment back with it.
        """
        for field in REQUIRED_FIELDS:
            value = getattr(data, field)
            if value is None or not str(value).strip():
                raise ValidationError(f"{field} is required")

        event = self._event_svc.require_event(data.event_id)
        email = normalize_email(data.email)

        if self.get_by_event_and_email(event.id, email) is not None:
            logger.info("Duplicate registration for event %s", event.id)
            raise DuplicateRegistrationError()

        result = self.db.execute(
            update(Event)
            .where(
                Event.id == event.id,
                Event.deleted_at.is_(None),
                Event.registered_count < Event.capacity,
            )
            .values(registered_count=Event.registered_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            logger.info("Registration rejected, event %s is full", event.id)
            raise CapacityExceededError()

        registration = Registration(
            event_id=event.id,
            name=data.name.strip(),
            email=email,
            phone_number=data.phone_number,
            transaction_screenshot=data.transaction_screenshot,
        )
        self.db.add(registration)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Duplicate registration for event %s (concurrent)", event.id)
            raise DuplicateRegistrationError() from e
        self.db.refresh(registration)
        logger.info("Registration %s admitted for event %s", registration.id, event.id)
        return registration

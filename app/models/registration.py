"""Registration model: one admitted attendee for an event."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid

from app.db import Base
from app.models.mixins import TimestampMixin, utcnow


class Registration(Base, TimestampMixin):
    """Immutable after creation. ``email`` is stored lower-cased."""

    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_registrations_event_email"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(256), nullable=False)
    email = Column(String(320), nullable=False)
    phone_number = Column(String(64), nullable=True)
    transaction_screenshot = Column(Text, nullable=True)  # proof-of-payment reference
    registered_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

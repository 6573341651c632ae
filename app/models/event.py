"""Event model. Only the admission counter is owned by this service's core."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)

from app.db import Base
from app.models.mixins import SoftDeleteMixin, TimestampMixin


class Event(Base, TimestampMixin, SoftDeleteMixin):
    """An event with a fixed capacity.

    ``registered_count`` is changed only by ``RegistrationService.register``
    through a conditional UPDATE; the check constraint is the storage-level
    backstop for ``registered_count <= capacity``.
    """

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="ck_events_capacity_non_negative"),
        CheckConstraint(
            "registered_count >= 0 AND registered_count <= capacity",
            name="ck_events_registered_within_capacity",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_name = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    last_date = Column(String(32), nullable=True)
    event_date = Column(String(32), nullable=True)
    event_time = Column(String(32), nullable=True)
    venue = Column(String(512), nullable=True)
    contact = Column(String(256), nullable=True)
    custom_fields = Column(JSON, nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    registered_count = Column(Integer, nullable=False, default=0)
    manager_id = Column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

"""Query model: one conversation thread between an attendee and event managers."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import TimestampMixin

QUERY_STATUS_OPEN = "open"
QUERY_STATUS_CLOSED = "closed"
QUERY_STATUSES = (QUERY_STATUS_OPEN, QUERY_STATUS_CLOSED)


class Query(Base, TimestampMixin):
    """
    Conversation for an (event, user) pair.

    No unique constraint on (event_id, user_id):
    ``QueryManager`` is the only place that prevents duplicate threads.
    """

    __tablename__ = "queries"
    __table_args__ = (
        Index("ix_queries_event_id_user_id", "event_id", "user_id"),
        Index("ix_queries_updated_at", "updated_at"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id"), nullable=False)
    event_name = Column(String(256), nullable=True)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )  # absent for anonymous threads
    user_name = Column(String(256), nullable=True)
    status = Column(String(16), nullable=False, default=QUERY_STATUS_OPEN)

    messages = relationship(
        "QueryMessage",
        back_populates="query",
        cascade="all, delete-orphan",
        order_by="QueryMessage.id",
    )

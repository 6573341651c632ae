"""QueryMessage model: one chat entry inside a Query."""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.mixins import utcnow

SENDER_USER = "user"
SENDER_MANAGER = "manager"
SENDERS = (SENDER_USER, SENDER_MANAGER)


class QueryMessage(Base):
    """Append-only; the integer key follows insert order, which is the thread order."""

    __tablename__ = "query_messages"

    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    query_id = Column(
        Uuid,
        ForeignKey("queries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender = Column(String(16), nullable=False)  # 'user' | 'manager'
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    query = relationship("Query", back_populates="messages")

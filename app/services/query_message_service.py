"""Append path for QueryMessage."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.exceptions import ValidationError
from app.models.mixins import utcnow
from app.models.query import Query
from app.models.query_message import SENDER_MANAGER, SENDER_USER, SENDERS, QueryMessage
from app.models.user import USER_TYPE_MANAGER
from app.services.query_service import QueryService


def resolve_sender(explicit: Optional[str], role: Optional[str]) -> str:
    """An explicit 'user'/'manager' wins; otherwise manager callers post as manager."""
    if explicit in SENDERS:
        return explicit
    if role == USER_TYPE_MANAGER:
        return SENDER_MANAGER
    return SENDER_USER


class QueryMessageService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def append_message(self, query_id, sender: str, text: Optional[str]) -> QueryMessage:
        """
        Append one message and bump the thread's updated_at.

        The message is a row INSERT and the timestamp an UPDATE expression, so
        concurrent appends to the same thread never overwrite each other.
        Committed before returning.
        """
        trimmed = (text or "").strip()
        if not trimmed:
            raise ValidationError("Message text required")
        if sender not in SENDERS:
            raise ValidationError(f"Sender must be one of: {', '.join(SENDERS)}")

        query = QueryService(self.db).require_query(query_id)
        now = utcnow()
        msg = QueryMessage(query_id=query.id, sender=sender, text=trimmed, created_at=now)
        self.db.add(msg)
        self.db.execute(
            update(Query)
            .where(Query.id == query.id)
            .values(updated_at=now)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(msg)
        return msg

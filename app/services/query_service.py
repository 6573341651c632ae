"""Query (conversation) store: create, get, list, status changes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Query as DBQuery, Session

from app.core.refs import to_uuid
from app.exceptions import NotFoundError, ValidationError
from app.models.query import QUERY_STATUS_OPEN, QUERY_STATUSES, Query
from app.models.query_message import SENDER_USER, QueryMessage
from app.services.event_service import EventService
from app.utils.db.filtering import apply_filters


class QueryService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_query(self, query_id) -> Optional[Query]:
        try:
            query_uuid = to_uuid(query_id)
        except ValueError:
            return None
        return self.db.query(Query).filter(Query.id == query_uuid).first()

    def require_query(self, query_id) -> Query:
        query = self.get_query(query_id)
        if query is None:
            raise NotFoundError("Query not found")
        return query

    def create_query(
        self,
        event_id,
        event_name: Optional[str] = None,
        user_id=None,
        user_name: Optional[str] = None,
        initial_message_text: Optional[str] = None,
    ) -> Query:
        """
        Create an open query, seeded with one user message when
        ``initial_message_text`` is non-empty after trimming.

        Callers acting for a signed-in user go through
        ``QueryManager.resolve_or_create`` instead, which reuses an existing
        thread.
        """
        if event_id is None or (isinstance(event_id, str) and not event_id.strip()):
            raise ValidationError("eventId is required")
        event = EventService(self.db).require_event(event_id)

        query = Query(
            event_id=event.id,
            event_name=event_name or "",
            user_id=to_uuid(user_id) if user_id is not None else None,
            user_name=user_name,
            status=QUERY_STATUS_OPEN,
        )
        text = (initial_message_text or "").strip()
        if text:
            query.messages.append(QueryMessage(sender=SENDER_USER, text=text))
        self.db.add(query)
        self.db.commit()
        self.db.refresh(query)
        return query

    def get_queries(self, event_id=None, user_id=None) -> List[Query]:
        """List queries, most recently active first. No filter means all."""
        return self.get_queries_query(event_id=event_id, user_id=user_id).all()

    def get_queries_query(self, event_id=None, user_id=None) -> DBQuery[Query]:
        filters: Dict[str, Any] = {}
        try:
            if event_id is not None:
                filters["event_id"] = to_uuid(event_id)
            if user_id is not None:
                filters["user_id"] = to_uuid(user_id)
        except ValueError as e:
            raise ValidationError("Invalid id filter") from e
        query = apply_filters(self.db.query(Query), Query, filters)
        return query.order_by(Query.updated_at.desc(), Query.created_at.desc())

    def set_status(self, query_id, status: str) -> Query:
        if status not in QUERY_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(QUERY_STATUSES)}")
        query = self.require_query(query_id)
        query.status = status
        query.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(query)
        return query

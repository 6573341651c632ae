"""QueryManager: facade for resolve_or_create, ask, post_message and caller-scoped listing."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.request_context import RequestContext
from app.core.refs import same_ref
from app.exceptions import AuthenticationError, ValidationError
from app.infra.logging_config import get_logger
from app.models.query import Query
from app.models.query_message import QueryMessage
from app.services.query_message_service import QueryMessageService, resolve_sender
from app.services.event_service import EventService
from app.services.query_service import QueryService

logger = get_logger("queries")


class QueryManager:
    """
    Resolution protocol for "the query for this (event, user)".

    Queries are not deduplicated by the schema; this class is the only
    boundary that keeps a caller from accumulating several threads per
    event. When duplicates already exist the most recently active one is
    used (listing is ordered by updated_at, first match wins).
    """

    def __init__(self, db: Session) -> None:
        self._db = db
        self._query_svc = QueryService(db)
        self._message_svc = QueryMessageService(db)

    def _require_event_id(self, event_id):
        if event_id is None or (isinstance(event_id, str) and not event_id.strip()):
            raise ValidationError("eventId is required")
        return EventService(self._db).require_event(event_id).id

    def find_for_user(self, event_id, ctx: RequestContext) -> Optional[Query]:
        event_id = self._require_event_id(event_id)
        candidates = self._query_svc.get_queries(event_id=event_id)
        matches = [
            q
            for q in candidates
            if same_ref(q.event_id, event_id) and same_ref(q.user_id, ctx.user_id)
        ]
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Found %d queries for event %s and user %s; using %s",
                len(matches),
                event_id,
                ctx.user_id,
                matches[0].id,
            )
        return matches[0]

    def resolve_or_create(
        self,
        event_id,
        ctx: RequestContext,
        event_name: Optional[str] = None,
    ) -> Tuple[Query, bool]:
        """Return (query, created). A new query starts with no messages."""
        existing = self.find_for_user(event_id, ctx)
        if existing is not None:
            logger.info("Resolved query %s for user %s", existing.id, ctx.user_id)
            return existing, False
        query = self._query_svc.create_query(
            event_id,
            event_name=event_name,
            user_id=ctx.user_id,
            user_name=ctx.name,
            initial_message_text="",
        )
        logger.info("Created query %s for user %s", query.id, ctx.user_id)
        return query, True

    def ask(
        self,
        event_id,
        ctx: RequestContext,
        event_name: Optional[str] = None,
        initial_message: Optional[str] = None,
    ) -> Tuple[Query, bool]:
        """
        Ask a question about an event.

        Reuses the caller's thread when there is one (appending the message),
        otherwise creates the thread seeded with the message.
        """
        text = (initial_message or "").strip()
        existing = self.find_for_user(event_id, ctx)
        if existing is None:
            query = self._query_svc.create_query(
                event_id,
                event_name=event_name,
                user_id=ctx.user_id,
                user_name=ctx.name,
                initial_message_text=text,
            )
            logger.info("Created query %s for user %s", query.id, ctx.user_id)
            return query, True
        if text:
            self._message_svc.append_message(existing.id, resolve_sender(None, ctx.role), text)
            self._db.refresh(existing)
        return existing, False

    def post_message(
        self,
        query_id,
        ctx: RequestContext,
        text: Optional[str],
        sender: Optional[str] = None,
    ) -> QueryMessage:
        return self._message_svc.append_message(
            query_id, resolve_sender(sender, ctx.role), text
        )

    def list_for_caller(
        self,
        ctx: Optional[RequestContext],
        event_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Query]:
        """
        List queries. Explicit filters are applied as given; with no filter a
        manager sees everything, a user sees their own threads and an
        anonymous caller is rejected.
        """
        if not event_id and not user_id:
            if ctx is None:
                raise AuthenticationError()
            if not ctx.is_manager:
                user_id = ctx.user_id
        return self._query_svc.get_queries(event_id=event_id or None, user_id=user_id or None)

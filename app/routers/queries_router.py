"""Queries API: per-event question threads between attendees and managers."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.identity import get_request_context, require_manager, require_user
from app.core.request_context import RequestContext
from app.db import get_db
from app.schemas.query import (
    MessageCreate,
    MessageRead,
    MessageResponse,
    QueryCreate,
    QueryListResponse,
    QueryRead,
    QueryResolveRequest,
    QueryResponse,
    QueryStatusUpdate,
)
from app.services.query_manager import QueryManager
from app.services.query_service import QueryService

queries_router = APIRouter(prefix="/api/queries", tags=["queries"])


@queries_router.get("", response_model=QueryListResponse)
def list_queries(
    event_id: Optional[str] = Query(None, alias="eventId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    ctx: Optional[RequestContext] = Depends(get_request_context),
    db: Session = Depends(get_db),
) -> QueryListResponse:
    """List queries, most recently active first.

    Without filters: managers get every query, users get their own,
    anonymous callers get 401.
    """
    queries = QueryManager(db).list_for_caller(ctx, event_id=event_id, user_id=user_id)
    return QueryListResponse(queries=[QueryRead.model_validate(q) for q in queries])


@queries_router.post("", response_model=QueryResponse, status_code=201)
def ask_query(
    data: QueryCreate,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
) -> QueryResponse:
    """Ask about an event; ``created`` tells whether the caller's thread was reused."""
    query, created = QueryManager(db).ask(
        data.event_id,
        ctx,
        event_name=data.event_name,
        initial_message=data.initial_message,
    )
    return QueryResponse(query=QueryRead.model_validate(query), created=created)


@queries_router.post("/resolve", response_model=QueryResponse)
def resolve_query(
    data: QueryResolveRequest,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
) -> QueryResponse:
    """Find the caller's thread for an event, creating an empty one if needed."""
    query, created = QueryManager(db).resolve_or_create(
        data.event_id, ctx, event_name=data.event_name
    )
    return QueryResponse(query=QueryRead.model_validate(query), created=created)


@queries_router.get("/manager/all", response_model=QueryListResponse)
def list_all_queries(
    _ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> QueryListResponse:
    """All queries for manager dashboards."""
    queries = QueryService(db).get_queries()
    return QueryListResponse(queries=[QueryRead.model_validate(q) for q in queries])


@queries_router.get("/{query_id}", response_model=QueryResponse)
def get_query(
    query_id: str,
    db: Session = Depends(get_db),
) -> QueryResponse:
    """Get a query with its messages."""
    query = QueryService(db).require_query(query_id)
    return QueryResponse(query=QueryRead.model_validate(query))


@queries_router.post("/{query_id}/messages", response_model=MessageResponse)
def post_message(
    query_id: str,
    data: MessageCreate,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Append a message; sender defaults from the caller's role."""
    message = QueryManager(db).post_message(query_id, ctx, data.text, sender=data.sender)
    return MessageResponse(message=MessageRead.model_validate(message))


@queries_router.patch("/{query_id}/status", response_model=QueryResponse)
def update_query_status(
    query_id: str,
    data: QueryStatusUpdate,
    _ctx: RequestContext = Depends(require_manager),
    db: Session = Depends(get_db),
) -> QueryResponse:
    """Open or close a query."""
    query = QueryService(db).set_status(query_id, data.status)
    return QueryResponse(query=QueryRead.model_validate(query))

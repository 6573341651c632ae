"""Pydantic schemas for Query (conversation) and QueryMessage."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel, Envelope

# -----------------------------------------------------------------------------
# Message schemas
# -----------------------------------------------------------------------------

MessageSender = Literal["user", "manager"]
QueryStatus = Literal["open", "closed"]


class MessageRead(CamelModel):
    """One message in a thread."""

    id: int
    sender: MessageSender
    text: str
    created_at: datetime


class MessageCreate(CamelModel):
    """
    Body for appending a message.

    ``sender`` is only honoured when it is exactly ``user`` or ``manager``;
    anything else falls back to the caller's role.
    """

    text: Optional[str] = None
    sender: Optional[str] = None


# -----------------------------------------------------------------------------
# Query schemas
# -----------------------------------------------------------------------------


class QueryCreate(CamelModel):
    """Body for asking a question about an event."""

    event_id: Optional[str] = None
    event_name: Optional[str] = None
    initial_message: Optional[str] = None


class QueryResolveRequest(CamelModel):
    event_id: Optional[str] = None
    event_name: Optional[str] = None


class QueryStatusUpdate(CamelModel):
    status: str


class QueryRead(CamelModel):
    """Query with its full message history."""

    id: UUID
    event_id: UUID
    event_name: Optional[str] = None
    user_id: Optional[UUID] = None
    user_name: Optional[str] = None
    status: QueryStatus
    messages: list[MessageRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# -----------------------------------------------------------------------------
# Envelopes
# -----------------------------------------------------------------------------


class QueryListResponse(Envelope):
    queries: list[QueryRead]


class QueryResponse(Envelope):
    query: QueryRead
    created: Optional[bool] = None


class MessageResponse(Envelope):
    message: MessageRead

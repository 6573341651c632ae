"""Pydantic schemas for the signed-in user."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from app.schemas.common import CamelModel, Envelope


class UserRead(CamelModel):
    id: UUID
    name: Optional[str] = None
    email: str
    profile_picture: Optional[str] = None
    user_type: str


class CurrentUserResponse(Envelope):
    user: UserRead

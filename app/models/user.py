"""User model: one row per identity known to the OAuth provider."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Uuid

from app.db import Base
from app.models.mixins import TimestampMixin

USER_TYPE_USER = "user"
USER_TYPE_MANAGER = "manager"
USER_TYPES = (USER_TYPE_USER, USER_TYPE_MANAGER)


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    google_id = Column(String(128), unique=True, nullable=True, index=True)
    email = Column(String(320), nullable=False)
    name = Column(String(256), nullable=True)
    profile_picture = Column(String(1024), nullable=True)
    user_type = Column(String(16), nullable=False, default=USER_TYPE_USER)

    @property
    def is_manager(self) -> bool:
        return self.user_type == USER_TYPE_MANAGER

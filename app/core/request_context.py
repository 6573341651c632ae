"""Per-request caller identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.models.user import USER_TYPE_MANAGER, USER_TYPE_USER


@dataclass(frozen=True)
class RequestContext:
    """Snapshot of the caller, resolved once per request and never mutated."""

    user_id: str
    role: str = USER_TYPE_USER
    name: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == USER_TYPE_MANAGER

    @classmethod
    def from_user(cls, user) -> "RequestContext":
        return cls(
            user_id=str(user.id),
            role=user.user_type or USER_TYPE_USER,
            name=user.name,
        )

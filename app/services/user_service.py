"""User lookups and the identity-provider upsert."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import ValidationError
from app.models.user import USER_TYPES, User


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_user(self, user_id: UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.google_id == google_id).first()

    def get_or_create_from_profile(
        self,
        google_id: str,
        email: str,
        name: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> User:
        """Return the user for a provider profile, creating it on first sign-in."""
        user = self.get_user_by_google_id(google_id)
        if user is not None:
            return user
        user = User(
            google_id=google_id,
            email=email,
            name=name,
            profile_picture=profile_picture,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def set_user_type(self, user: User, user_type: str) -> User:
        if user_type not in USER_TYPES:
            raise ValidationError(f"Unknown user type {user_type!r}")
        if user.user_type != user_type:
            user.user_type = user_type
            self.db.commit()
            self.db.refresh(user)
        return user

"""Base service for models carrying SoftDeleteMixin."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.orm import Query, Session

ModelType = TypeVar("ModelType")


class SoftDeleteService(Generic[ModelType]):
    def __init__(self, db: Session, model: Type[ModelType]) -> None:
        self.db = db
        self.model = model

    def active(self) -> Query:
        """Query over rows that have not been soft deleted."""
        return self.db.query(self.model).filter(self.model.deleted_at.is_(None))

    def delete_record(self, record_id: UUID) -> bool:
        record: Optional[ModelType] = (
            self.active().filter(self.model.id == record_id).first()
        )
        if record is None:
            return False
        record.deleted_at = datetime.now(timezone.utc)
        self.db.commit()
        return True

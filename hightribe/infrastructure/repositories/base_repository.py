"""
SQLAlchemy implementation of the Base Repository.
"""

from datetime import datetime, tzinfo
from typing import Any, Generic, Optional, Type, TypeVar

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hightribe.core.exceptions import EntityNotFoundException, UniqueConstraintViolation
from hightribe.domain.repositories.base import BaseRepository
from hightribe.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models.

    Models are expected to carry ``created_at`` / ``updated_at`` columns;
    both are stamped here with the same instant on insert.
    """

    # Unique column -> message, checked in order when mapping an IntegrityError
    unique_fields: dict = {}

    def __init__(self, db: Session, model: Type[ModelType], tz: Optional[tzinfo] = None):
        self.db = db
        self.model = model
        self.tz = tz or pytz.utc

    def get_current_time(self) -> datetime:
        """Get current time in the configured timezone."""
        return datetime.now(self.tz)

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.query(self.model).filter(self.model.id == id).first()

    def create(self, obj_in: Any) -> ModelType:
        # Assuming obj_in is a dict or pydantic model
        if hasattr(obj_in, "model_dump"):
            obj_data = obj_in.model_dump(exclude_unset=True)
        else:
            obj_data = dict(obj_in)

        now = self.get_current_time()
        obj_data["created_at"] = now
        obj_data["updated_at"] = now

        db_obj = self.model(**obj_data)
        self.db.add(db_obj)
        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, id: int, obj_in: Any) -> ModelType:
        db_obj = self.get_by_id(id)
        if db_obj is None:
            raise EntityNotFoundException(f"{self.model.__name__} not found")

        if hasattr(obj_in, "model_dump"):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            update_data = dict(obj_in)

        for field in update_data:
            if hasattr(db_obj, field):
                setattr(db_obj, field, update_data[field])
        db_obj.updated_at = self.get_current_time()

        self.db.add(db_obj)
        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, id: int) -> ModelType:
        obj = self.db.get(self.model, id)
        if obj is None:
            raise EntityNotFoundException(f"{self.model.__name__} not found")
        self.db.delete(obj)
        self.db.commit()
        return obj

    def _commit(self) -> None:
        """Commit, turning unique-constraint rejections into UniqueConstraintViolation."""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise self._unique_violation(exc) from exc

    def _unique_violation(self, exc: IntegrityError) -> UniqueConstraintViolation:
        reason = str(exc.orig).lower()
        for field, message in self.unique_fields.items():
            if field in reason:
                return UniqueConstraintViolation(message, field=field)
        return UniqueConstraintViolation()

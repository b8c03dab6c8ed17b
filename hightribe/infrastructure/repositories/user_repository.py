"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func, or_

from hightribe.domain.models.user import User
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    unique_fields = {
        "email": "Email already exists",
        "phone": "Phone number already exists",
    }

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_email_or_phone(self, email: str, phone: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(or_(User.email == email, User.phone == phone))
            .order_by(User.id.asc())
            .first()
        )

    def search(self, search: Optional[str] = None, limit: Optional[int] = None) -> List[User]:
        query = self.db.query(User)

        if search:
            term = search.lower()
            query = query.filter(
                or_(
                    func.lower(User.full_name).contains(term, autoescape=True),
                    func.lower(User.email).contains(term, autoescape=True),
                )
            )

        query = query.order_by(User.id.asc())
        if limit is not None and limit > 0:
            query = query.limit(limit)
        return query.all()

"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import List, Optional

from hightribe.domain.repositories.base import BaseRepository
from hightribe.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get the user registered with this email."""
        ...

    def get_by_email_or_phone(self, email: str, phone: str) -> Optional[User]:
        """Get the first user (lowest id) whose email OR phone matches.

        Only one row is returned, so when the email and the phone belong to
        two different users the caller sees just one of them.
        """
        ...

    def search(self, search: Optional[str] = None, limit: Optional[int] = None) -> List[User]:
        """Users whose full name or email contains ``search`` (case-insensitive), in id order."""
        ...

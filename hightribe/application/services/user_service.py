"""User service — lookup, listing and creation of user records."""

import math
import re
from typing import Any, List, Optional, Tuple

import structlog
from fastapi import status

from hightribe.core.exceptions import (
    BadRequestException,
    EntityNotFoundException,
    UniqueConstraintViolation,
    ValidationFailure,
)
from hightribe.core.security import hash_password
from hightribe.domain.models.user import User
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.domain.schemas.user import UserCreate
from hightribe.domain.validation import SchemaValidator

logger = structlog.get_logger(__name__)

user_create_validator = SchemaValidator(UserCreate)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Ids are 64-bit signed integers in the store; anything wider names no row
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def _storable_id(user_id: int) -> int:
    if not _ID_MIN <= user_id <= _ID_MAX:
        raise EntityNotFoundException("User not found")
    return user_id


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a query-string value, e.g. ``"10abc"`` -> 10."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def require_id(body: Any) -> int:
    """Extract the numeric ``id`` of a JSON body for update/delete requests."""
    value = body.get("id") if isinstance(body, dict) else None
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not value
        or not math.isfinite(value)
    ):
        raise BadRequestException("Valid ID is required")
    if isinstance(value, float) and not value.is_integer():
        raise EntityNotFoundException("User not found")
    return _storable_id(int(value))


def list_users(
    repo: UserRepository,
    search: Optional[str] = None,
    limit: Optional[str] = None,
) -> Tuple[List[User], int]:
    """Filter by ``search`` then truncate by ``limit``.

    The returned total counts the filtered users before truncation.
    """
    users = repo.search(search=search or None)
    total = len(users)

    limit_num = parse_int(limit)
    if limit_num is not None and limit_num > 0:
        users = users[:limit_num]
    return users, total


def get_user(repo: UserRepository, raw_id: str) -> User:
    user_id = parse_int(raw_id)
    if user_id is None:
        raise BadRequestException("Invalid user ID")

    user = repo.get_by_id(_storable_id(user_id))
    if user is None:
        raise EntityNotFoundException("User not found")
    return user


def create_user(repo: UserRepository, payload: Any) -> User:
    """Create a user from an admin-style payload (no confirmation field)."""
    result = user_create_validator.validate(payload)
    if not result.ok:
        raise ValidationFailure(result.errors)
    data = result.value

    if repo.get_by_email(data.email):
        raise UniqueConstraintViolation(
            "User with this email already exists",
            field="email",
            status_code=status.HTTP_409_CONFLICT,
        )

    try:
        user = repo.create(
            {
                "full_name": data.full_name,
                "email": data.email,
                "password": hash_password(data.password),
                "phone": data.phone,
            }
        )
    except UniqueConstraintViolation as exc:
        raise UniqueConstraintViolation(
            exc.message, field=exc.field, status_code=status.HTTP_409_CONFLICT
        ) from exc

    logger.info("User created", user_id=user.id, email=user.email)
    return user

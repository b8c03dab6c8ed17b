"""Auth service — login, registration, profile update and account deletion."""

from typing import Any, Dict, Tuple

import structlog

from hightribe.application.services.user_service import require_id
from hightribe.core.exceptions import (
    EntityNotFoundException,
    UnauthorizedException,
    UniqueConstraintViolation,
    ValidationFailure,
)
from hightribe.core.security import TokenIssuer, hash_password, verify_password
from hightribe.domain.models.user import User
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.domain.schemas.auth import LoginRequest, LoginUser, RegisterRequest, UpdateUserRequest
from hightribe.domain.validation import SchemaValidator

logger = structlog.get_logger(__name__)

login_validator = SchemaValidator(LoginRequest)
register_validator = SchemaValidator(RegisterRequest)
update_validator = SchemaValidator(UpdateUserRequest)


def _raise_if_taken(existing: User, email: str, phone: str, user_id: int = None) -> None:
    """Raise a field-specific violation; the email is checked before the phone."""
    if existing is None or existing.id == user_id:
        return
    if existing.email == email:
        raise UniqueConstraintViolation("Email already exists", field="email")
    if existing.phone == phone:
        raise UniqueConstraintViolation("Phone number already exists", field="phone")


def login(repo: UserRepository, issuer: TokenIssuer, payload: Any) -> Dict[str, Any]:
    result = login_validator.validate(payload)
    if not result.ok:
        raise ValidationFailure(result.errors, message="Invalid input")
    credentials = result.value

    user = repo.get_by_email(credentials.email)
    if not user or not verify_password(credentials.password, user.password):
        logger.info("Login failed", email=credentials.email)
        raise UnauthorizedException("Invalid credentials")

    token = issuer.issue(user.id, user.email, issuer.login_ttl)
    logger.info("Login succeeded", user_id=user.id)

    return {
        "token": token,
        "user": LoginUser.model_validate(user).model_dump(by_alias=True),
    }


def register(repo: UserRepository, issuer: TokenIssuer, payload: Any) -> Tuple[User, str]:
    result = register_validator.validate(payload)
    if not result.ok:
        raise ValidationFailure(result.errors)
    data = result.value

    _raise_if_taken(repo.get_by_email_or_phone(data.email, data.phone), data.email, data.phone)

    # The store's unique constraints still apply if a concurrent request won the race
    user = repo.create(
        {
            "full_name": data.full_name,
            "email": data.email,
            "password": hash_password(data.password),
            "phone": data.phone,
        }
    )
    token = issuer.issue(user.id, user.email, issuer.account_ttl)
    logger.info("User registered", user_id=user.id, email=user.email)
    return user, token


def update(repo: UserRepository, issuer: TokenIssuer, payload: Any) -> Tuple[User, str]:
    user_id = require_id(payload)

    if repo.get_by_id(user_id) is None:
        raise EntityNotFoundException("User not found")

    fields = {key: value for key, value in payload.items() if key != "id"}
    result = update_validator.validate(fields)
    if not result.ok:
        raise ValidationFailure(result.errors)
    data = result.value

    _raise_if_taken(repo.get_by_email_or_phone(data.email, data.phone), data.email, data.phone, user_id)

    changes = data.model_dump(exclude={"password"})
    if data.password:
        changes["password"] = hash_password(data.password)

    user = repo.update(user_id, changes)
    token = issuer.issue(user.id, user.email, issuer.account_ttl)
    logger.info("User updated", user_id=user.id, password_changed="password" in changes)
    return user, token


def delete(repo: UserRepository, payload: Any) -> User:
    user_id = require_id(payload)
    user = repo.delete(user_id)
    logger.info("User deleted", user_id=user_id)
    return user

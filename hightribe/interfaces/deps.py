"""
API Dependencies.
"""

from typing import Callable, Generator

import pytz
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from hightribe.core.exceptions import MalformedRequest
from hightribe.core.security import TokenIssuer
from hightribe.domain.models.user import User
from hightribe.domain.repositories.user_repository import UserRepository
from hightribe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session from the application's Database."""
    yield from request.app.state.database.session()


def get_user_repository(request: Request, db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance stamping times in the configured timezone."""
    tz = pytz.timezone(request.app.state.settings.TIMEZONE)
    return SQLAlchemyUserRepository(db, User, tz=tz)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


async def get_json_body(request: Request):
    """Parse the raw JSON body; any decoding failure is a MalformedRequest."""
    try:
        return await request.json()
    except ValueError:
        raise MalformedRequest()


def failure_message(message: str) -> Callable[[Request], None]:
    """Name the error a route reports when it fails unexpectedly."""

    def _set_failure_message(request: Request) -> None:
        request.state.failure_message = message

    return _set_failure_message

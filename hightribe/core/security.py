"""Security helpers — password hashing and JWT issuance."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash. Malformed hashes never match."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


class TokenIssuer:
    """Signs bearer tokens carrying the user's id and email.

    The signing secret and the two token lifetimes are fixed for the
    lifetime of the issuer; the application builds one at startup from
    settings. ``login_ttl`` applies to tokens handed out on login,
    ``account_ttl`` to those returned on registration and update.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        login_ttl: timedelta = timedelta(days=7),
        account_ttl: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.login_ttl = login_ttl
        self.account_ttl = account_ttl

    def issue(self, user_id: int, email: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

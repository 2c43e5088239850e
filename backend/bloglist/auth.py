"""Token helpers and FastAPI security dependency.

This module issues and verifies the signed JWT bearer tokens handed out
at login, and provides the FastAPI dependency `get_current_identity`
that turns the `Authorization` header into a `TokenIdentity`.

Tokens are stateless: verification is a signature and expiry check
only and never touches the database. There is no revocation list.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt

from .config import Settings
from .errors import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenIdentity:
    """Identity embedded in a verified token."""
    user_id: int
    username: str


def issue_token(user_id: int, username: str, settings: Settings, now: Optional[datetime] = None) -> str:
    """Sign a token for `user_id` that expires after the configured TTL."""
    now = now or datetime.now(timezone.utc)
    expire = now + timedelta(seconds=settings.JWT_EXPIRE_SECONDS)
    payload = {"user_id": user_id, "username": username, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Settings) -> TokenIdentity:
    """Decode and verify a JWT token.

    Returns the embedded identity on success or raises
    `AuthenticationError` when the token is malformed, signed with a
    different key, missing required claims or expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("token invalid")
    user_id = payload.get("user_id")
    username = payload.get("username")
    if not isinstance(user_id, int) or not isinstance(username, str):
        raise AuthenticationError("token invalid")
    return TokenIdentity(user_id=user_id, username=username)


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> TokenIdentity:
    """FastAPI dependency that returns the caller's verified identity.

    A missing header or a non-Bearer scheme is reported as 401 rather
    than FastAPI's default 403.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("token missing")
    return verify_token(credentials.credentials, request.app.state.settings)

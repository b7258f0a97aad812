"""Identity tokens issued by the auth provider (JWT, verified with a shared key)."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from codehelper.core.config import Settings


@dataclass(frozen=True)
class Identity:
    """Caller identity as claimed by the auth provider."""

    user_id: str
    email: str | None = None


def create_access_token(
    settings: Settings,
    subject: str,
    extra: dict[str, Any] | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Issue a signed token for subject (development and tests)."""
    minutes = expires_minutes if expires_minutes is not None else settings.auth_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"sub": str(subject), "exp": expire, "type": "access"}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.auth_secret_key, algorithm=settings.auth_algorithm)


def decode_access_token(settings: Settings, token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.auth_secret_key, algorithms=[settings.auth_algorithm])
    except JWTError:
        return None


def identity_from_token(settings: Settings, token: str | None) -> Identity | None:
    """Return the identity carried by a valid token; None otherwise."""
    if not token:
        return None
    payload = decode_access_token(settings, token)
    if payload is None:
        return None
    subject = payload.get("sub")
    if not subject:
        return None
    email = payload.get("email")
    return Identity(user_id=str(subject), email=email.lower() if email else None)


def extract_token(authorization: str | None, cookie: str | None) -> str | None:
    """Bearer header wins over the session cookie."""
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return cookie or None

"""Password hashing, JWT issuing, and the acting-user dependency."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from assetto.config import settings
from assetto.errors import ValidationError

logger = logging.getLogger(__name__)

# auto_error=False: CRUD routes stay open, the token only names the actor
security = HTTPBearer(auto_error=False)

BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """bcrypt hash, stored as text in users.password_hash."""
    pwd_bytes = password.encode("utf-8")
    # bcrypt only reads the first 72 bytes; newer releases refuse longer input
    if len(pwd_bytes) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
    try:
        return bcrypt.hashpw(pwd_bytes, bcrypt.gensalt()).decode("utf-8")
    except ValueError as e:
        # e.g. NUL bytes
        raise ValidationError(f"password is not valid: {e}") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(claims: dict) -> str:
    expires = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode({**claims, "exp": expires}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def get_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Name recorded in the activity log for this request."""
    if credentials is None:
        return settings.DEFAULT_ACTOR
    payload = decode_token(credentials.credentials)
    if not payload or not payload.get("username"):
        logger.debug("Ignoring invalid bearer token; acting as %s", settings.DEFAULT_ACTOR)
        return settings.DEFAULT_ACTOR
    return payload["username"]

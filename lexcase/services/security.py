"""Password hashing and access-token helpers."""

from datetime import datetime, timedelta, timezone
from typing import Optional
import base64
import hashlib
import logging

import bcrypt
import jwt

from lexcase.config import settings
from lexcase.utils.errors import Unauthenticated

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]

logger = logging.getLogger(__name__)


def _prehash(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes, so feed it a fixed-size digest
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Return a salted bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("[security] Stored password hash is malformed")
        return False


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Mint a signed token whose subject is ``user_id``."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Verify signature and expiry, returning the subject user id."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token expired")
    except jwt.PyJWTError:
        raise Unauthenticated("Not authorized, token failed")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated("Not authorized, token failed")
    return user_id

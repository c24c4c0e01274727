"""Password hashing, session tokens and access-code generation."""

import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now

ACCESS_CODE_LENGTH = 45
SESSION_ALGORITHM = "HS256"

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password with argon2."""
    return _password_hasher.hash(password)


def verify_password(password_hash: Optional[str], password: str) -> bool:
    """Check ``password`` against a stored hash. Users without a hash never match."""
    if not password_hash:
        return False
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_access_code() -> str:
    """Return a fresh URL-safe guest access code of exactly 45 characters."""
    # 34 random bytes encode to 46 URL-safe characters.
    return secrets.token_urlsafe(34)[:ACCESS_CODE_LENGTH]


def create_session_token(
    subject: str,
    claims: Dict[str, Any],
    *,
    expires_at: Optional[datetime] = None,
    secret: Optional[str] = None,
) -> str:
    """Sign a session token.

    Args:
        subject: Identity string placed in ``sub``.
        claims: Extra claims, e.g. the role and guest scope ids.
        expires_at: Absolute expiry. Defaults to ``SESSION_TTL_HOURS`` from now.
        secret: Signing secret override, used by tests.

    Returns:
        The encoded JWT.
    """
    now = utc_now()
    exp = expires_at or now + timedelta(hours=settings.SESSION_TTL_HOURS)
    payload = {
        **claims,
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret or settings.SESSION_SECRET, algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str, *, secret: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Decode a session token, returning None if it is expired or invalid."""
    try:
        return jwt.decode(
            token,
            secret or settings.SESSION_SECRET,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError:
        return None

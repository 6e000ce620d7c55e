"""
Admin credential checks and JWT session tokens.

There is a single administrator.  Its password is stored only as a bcrypt
hash in settings; a successful login yields an HS256 token signed with
the configured secret.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from attrmatrix.core.errors import AuthenticationError, ConfigError
from attrmatrix.core.logging import get_logger
from attrmatrix.core.settings import AttrMatrixSettings

logger = get_logger(__name__)

ADMIN_USERNAME = "admin"


def hash_password(password: str) -> str:
    """bcrypt hash suitable for ``ATTRMATRIX_ADMIN_PASSWORD_HASH``."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare *password* against a bcrypt hash.  A malformed hash never matches."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("admin_password_hash_invalid")
        return False


def create_access_token(
    secret: str,
    *,
    username: str = ADMIN_USERNAME,
    algorithm: str = "HS256",
    expire_minutes: int = 24 * 60,
    now: datetime | None = None,
) -> str:
    """Create a signed token for *username*."""
    issued = now or datetime.now(UTC)
    payload = {
        "sub": username,
        "username": username,
        "iat": issued,
        "exp": issued + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, *, algorithm: str = "HS256") -> dict[str, Any]:
    """Decode and validate a token.

    Raises:
        jose.JWTError: The token is malformed, tampered with, or expired.
    """
    return jwt.decode(token, secret, algorithms=[algorithm])


def issue_admin_token(password: str, settings: AttrMatrixSettings) -> str:
    """Check the admin password and return a fresh token.

    Raises:
        ConfigError: No password hash or no signing secret is configured.
        AuthenticationError: The password does not match.
    """
    if not settings.admin_password_hash or not settings.jwt_secret:
        raise ConfigError("Admin password not configured")
    if not password or not verify_password(password, settings.admin_password_hash):
        raise AuthenticationError("Invalid username or password")
    return create_access_token(
        settings.jwt_secret,
        username=ADMIN_USERNAME,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )

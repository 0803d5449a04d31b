"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt) and JWT token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from jobportal.core.config import settings
from jobportal.core.logging import get_logger

logger = get_logger("security")

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

AUTHORITY_PREFIX = "ROLE_"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def to_authorities(roles: Iterable[str]) -> list[str]:
    """Role names as authorization authorities (``CANDIDATE`` -> ``ROLE_CANDIDATE``)."""
    return [f"{AUTHORITY_PREFIX}{role}" for role in sorted(roles)]


def create_access_token(
    subject: str,
    roles: Iterable[str] = (),
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        subject: The username the token is issued to
        roles: Role names embedded as the ``roles`` claim
        expires_delta: Optional custom lifetime; defaults to
            ``ACCESS_TOKEN_EXPIRE_MINUTES`` (24 hours)

    Returns:
        The encoded JWT token string
    """
    issued_at = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": subject,
        "roles": sorted(roles),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT access token.

    Signature and expiration are both checked.

    Returns:
        The decoded token payload, or None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except InvalidTokenError as e:
        logger.debug(f"Rejected access token: {e}")
        return None


def get_token_subject(token: str) -> Optional[str]:
    """Extract the username (``sub`` claim) from a token, or None if invalid."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    return payload.get("sub")

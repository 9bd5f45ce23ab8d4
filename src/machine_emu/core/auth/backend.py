"""Authentication backend for JWT and password handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- JWT access token creation with embedded permission claims
- JWT verification (signature, expiry, issuer, audience)
"""

import secrets
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from machine_emu.config import settings
from machine_emu.core.auth.schemas import TokenData
from machine_emu.core.constants import (
    ACCESS_TOKEN_JTI_LENGTH,
    NAME_CLAIM,
    PERMISSION_CLAIM,
)


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

# Verified against when the user does not exist, so an unknown user name
# costs the same bcrypt round as a wrong password.
_DUMMY_HASH = pwd_context.hash(secrets.token_urlsafe(16))


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against, or None for an
            unknown user

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognizable hash
        return False


# ============================================================
# JWT Token Utilities
# ============================================================


def create_access_token(
    user_id: int,
    user_name: str,
    permissions: Iterable[str],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token.

    Each permission becomes one entry of the repeated ``permission`` claim.

    Args:
        user_id: The subject's ID
        user_name: The subject's user name
        permissions: Resolved permission names to embed
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT access token
    """
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        NAME_CLAIM: user_name,
        PERMISSION_CLAIM: sorted(set(permissions)),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "type": "access",
        "jti": secrets.token_urlsafe(ACCESS_TOKEN_JTI_LENGTH),
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> TokenData | None:
    """Decode and validate a JWT access token.

    Signature, expiry, issuer and audience are all checked.

    Args:
        token: The JWT token to decode

    Returns:
        TokenData if valid, None if invalid, tampered with, or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )

        user_id = payload.get("sub")
        user_name = payload.get(NAME_CLAIM)
        exp = payload.get("exp")
        iat = payload.get("iat")

        if not user_id or user_name is None or exp is None:
            return None

        claims = payload.get(PERMISSION_CLAIM, [])
        if isinstance(claims, str):
            claims = [claims]

        return TokenData(
            user_id=int(user_id),
            user_name=user_name,
            permissions=frozenset(claims),
            issued_at=datetime.fromtimestamp(iat, tz=UTC) if iat else None,
            exp=datetime.fromtimestamp(exp, tz=UTC),
            type=payload.get("type", "access"),
            jti=payload.get("jti"),
        )

    except (JWTError, ValueError, TypeError):
        return None

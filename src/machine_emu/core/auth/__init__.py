"""Authentication module for token issuing and password handling."""

from machine_emu.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from machine_emu.core.auth.schemas import AccessToken, TokenData


def get_middleware():
    """Import middleware lazily to avoid circular imports."""
    from machine_emu.core.auth.middleware import RequestIdMiddleware

    return RequestIdMiddleware


def get_routers():
    """Import routers lazily to avoid circular imports."""
    from machine_emu.core.auth.routes import router as auth_router

    return auth_router


__all__ = [
    # Schemas
    "AccessToken",
    "TokenData",
    # Token utilities
    "create_access_token",
    "decode_token",
    # Lazy loaders
    "get_middleware",
    "get_routers",
    # Password utilities
    "hash_password",
    "verify_password",
]

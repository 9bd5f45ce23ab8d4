"""Database layer - session management, base models, and mixins."""

from machine_emu.core.database.base import Base, IdMixin, TimestampMixin
from machine_emu.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "async_engine",
    "async_session_factory",
    "get_db",
]

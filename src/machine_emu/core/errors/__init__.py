"""Application exceptions and their RFC 7807 rendering."""

from machine_emu.core.errors.exceptions import (
    AppException,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from machine_emu.core.errors.handlers import problem_response, register_exception_handlers


__all__ = [
    "AppException",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "problem_response",
    "register_exception_handlers",
]

"""Structured logging setup and request logging."""

from machine_emu.core.logging.middleware import RequestLoggingMiddleware
from machine_emu.core.logging.setup import configure_logging


__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
]

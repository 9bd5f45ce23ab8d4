"""Request logging middleware.

Request bodies are never logged since login and registration carry plain
text passwords.
"""

import logging
import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

# Probes and docs are polled too often to be worth a log line
QUIET_PATHS: tuple[str, ...] = ("/health/", "/docs", "/redoc", "/openapi.json")


def completion_level(status_code: int) -> int:
    """Pick the log level for a finished request from its status code."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request as a ``request_started``/``request_completed`` pair.

    Runs inside ``RequestIdMiddleware``, so ``request_id`` is already bound
    in the structlog context. ``user_id`` is attached when the bearer token
    dependency accepted a token for the request.
    """

    def __init__(self, app: Any, quiet_paths: tuple[str, ...] = QUIET_PATHS) -> None:
        super().__init__(app)
        self.quiet_paths = quiet_paths

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.startswith(self.quiet_paths):
            return await call_next(request)

        context: dict[str, Any] = {"method": request.method, "path": request.url.path}
        logger.info(
            "request_started",
            client_ip=request.client.host if request.client else None,
            **context,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed", duration_ms=_elapsed_ms(started), **context)
            raise

        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            context["user_id"] = user_id

        logger.log(
            completion_level(response.status_code),
            "request_completed",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            **context,
        )
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)

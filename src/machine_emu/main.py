"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from machine_emu import __version__
from machine_emu.api import get_api_router
from machine_emu.config import settings
from machine_emu.core.auth import get_middleware
from machine_emu.core.errors import register_exception_handlers
from machine_emu.core.logging import RequestLoggingMiddleware, configure_logging
from machine_emu.seeding import run_seed


configure_logging(settings)
logger = structlog.get_logger()

DEV_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Seed the store before the first request is served.

    A seeding failure aborts startup.
    """
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        seed_on_startup=settings.seed_on_startup,
    )
    if settings.seed_on_startup:
        await run_seed()

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Build the application: middleware, error handlers and routers."""
    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.app_name,
        description="Role-based access control for simulated vehicles",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or (DEV_CORS_ORIGINS if settings.is_development else []),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    # Middleware added last runs first: the request id must be bound before logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(get_middleware())

    register_exception_handlers(app)
    app.include_router(get_api_router())
    return app


app = create_app()

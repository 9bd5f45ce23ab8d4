"""Root API router: health probes plus the versioned API."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from machine_emu.api.dependencies import DBSession
from machine_emu.core.auth import get_routers
from machine_emu.modules import discover_modules


API_PREFIX = "/api/v1"


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(HealthResponse):
    checks: dict[str, str]


# Probes sit outside the versioned prefix and need no token
health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("/live", response_model=HealthResponse, summary="Liveness probe")
async def liveness() -> HealthResponse:
    """Returns 200 while the process is serving requests."""
    return HealthResponse(status="alive")


@health_router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(db: DBSession, response: Response) -> ReadinessResponse:
    """Returns 200 when the database answers, 503 otherwise."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        database = str(e)

    if database != "ok":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="degraded", checks={"database": database})
    return ReadinessResponse(status="ready", checks={"database": database})


def build_v1_router() -> APIRouter:
    """Auth routes plus every discovered module router under ``/api/v1``."""
    router = APIRouter(prefix=API_PREFIX)
    router.include_router(get_routers())
    for module_router in discover_modules():
        router.include_router(module_router)
    return router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(build_v1_router())

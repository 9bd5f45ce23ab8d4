"""Motorcycle API routes."""

from fastapi import status

from machine_emu.core.auth.dependencies import CurrentPrincipal
from machine_emu.core.permissions.guard import require_authentication, require_permission
from machine_emu.core.permissions.policies import PermissionName
from machine_emu.modules.motorcycles import router
from machine_emu.modules.motorcycles.schemas import (
    MotorcycleCreate,
    MotorcycleResponse,
    MotorcycleStatusResponse,
    MotorcycleUpdate,
)
from machine_emu.modules.motorcycles.services import MotorcycleSvc


@router.get("", response_model=list[MotorcycleResponse], summary="List motorcycles")
@require_authentication()
async def list_motorcycles(
    service: MotorcycleSvc, principal: CurrentPrincipal
) -> list[MotorcycleResponse]:
    motorcycles = await service.list_motorcycles()
    return [MotorcycleResponse.model_validate(m) for m in motorcycles]


# Declared before /{motorcycle_id} so "statuses" is not parsed as an ID.
@router.get(
    "/statuses",
    response_model=list[MotorcycleStatusResponse],
    summary="List motorcycle states",
)
@require_authentication()
async def list_motorcycle_statuses(
    service: MotorcycleSvc, principal: CurrentPrincipal
) -> list[MotorcycleStatusResponse]:
    statuses = await service.list_statuses()
    return [MotorcycleStatusResponse.model_validate(s) for s in statuses]


@router.get(
    "/{motorcycle_id}",
    response_model=MotorcycleResponse,
    summary="Get motorcycle by ID",
)
@require_authentication()
async def get_motorcycle(
    motorcycle_id: int, service: MotorcycleSvc, principal: CurrentPrincipal
) -> MotorcycleResponse:
    motorcycle = await service.get_motorcycle(motorcycle_id)
    return MotorcycleResponse.model_validate(motorcycle)


@router.post(
    "",
    response_model=MotorcycleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create motorcycle",
    description="Create a motorcycle. An unknown or missing status_id falls back to Stopped.",
)
@require_permission(PermissionName.MANAGE_MOTORCYCLES)
async def create_motorcycle(
    data: MotorcycleCreate, service: MotorcycleSvc, principal: CurrentPrincipal
) -> MotorcycleResponse:
    motorcycle = await service.create_motorcycle(data)
    return MotorcycleResponse.model_validate(motorcycle)


@router.put(
    "/{motorcycle_id}",
    response_model=MotorcycleResponse,
    summary="Update motorcycle",
)
@require_permission(PermissionName.MANAGE_MOTORCYCLES)
async def update_motorcycle(
    motorcycle_id: int,
    data: MotorcycleUpdate,
    service: MotorcycleSvc,
    principal: CurrentPrincipal,
) -> MotorcycleResponse:
    motorcycle = await service.update_motorcycle(motorcycle_id, data)
    return MotorcycleResponse.model_validate(motorcycle)


@router.delete(
    "/{motorcycle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete motorcycle",
)
@require_permission(PermissionName.MANAGE_MOTORCYCLES)
async def delete_motorcycle(
    motorcycle_id: int, service: MotorcycleSvc, principal: CurrentPrincipal
) -> None:
    await service.delete_motorcycle(motorcycle_id)


@router.post(
    "/{motorcycle_id}/start",
    response_model=MotorcycleResponse,
    summary="Start motorcycle",
)
@require_permission(PermissionName.START_MOTORCYCLE)
async def start_motorcycle(
    motorcycle_id: int, service: MotorcycleSvc, principal: CurrentPrincipal
) -> MotorcycleResponse:
    motorcycle = await service.start(motorcycle_id)
    return MotorcycleResponse.model_validate(motorcycle)


@router.post(
    "/{motorcycle_id}/stop",
    response_model=MotorcycleResponse,
    summary="Stop motorcycle",
)
@require_permission(PermissionName.STOP_MOTORCYCLE)
async def stop_motorcycle(
    motorcycle_id: int, service: MotorcycleSvc, principal: CurrentPrincipal
) -> MotorcycleResponse:
    motorcycle = await service.stop(motorcycle_id)
    return MotorcycleResponse.model_validate(motorcycle)


@router.post(
    "/{motorcycle_id}/drive",
    response_model=MotorcycleResponse,
    summary="Drive motorcycle",
    description="Move a running motorcycle to Driving. Fails with 422 unless it is Running.",
)
@require_permission(PermissionName.DRIVE_MOTORCYCLE)
async def drive_motorcycle(
    motorcycle_id: int, service: MotorcycleSvc, principal: CurrentPrincipal
) -> MotorcycleResponse:
    motorcycle = await service.drive(motorcycle_id)
    return MotorcycleResponse.model_validate(motorcycle)

"""Car API routes.

Each route declares its own requirement: reads only need a valid token,
mutations need ManageCars, state changes need the matching action permission.
"""

from fastapi import status

from machine_emu.core.auth.dependencies import CurrentPrincipal
from machine_emu.core.permissions.guard import require_authentication, require_permission
from machine_emu.core.permissions.policies import PermissionName
from machine_emu.modules.cars import router
from machine_emu.modules.cars.schemas import (
    CarCreate,
    CarResponse,
    CarStatusResponse,
    CarUpdate,
)
from machine_emu.modules.cars.services import CarSvc


@router.get("", response_model=list[CarResponse], summary="List cars")
@require_authentication()
async def list_cars(service: CarSvc, principal: CurrentPrincipal) -> list[CarResponse]:
    """List all cars with their current state."""
    cars = await service.list_cars()
    return [CarResponse.model_validate(c) for c in cars]


# Declared before /{car_id} so "statuses" is not parsed as an ID.
@router.get("/statuses", response_model=list[CarStatusResponse], summary="List car states")
@require_authentication()
async def list_car_statuses(
    service: CarSvc, principal: CurrentPrincipal
) -> list[CarStatusResponse]:
    """List the states a car can be in."""
    statuses = await service.list_statuses()
    return [CarStatusResponse.model_validate(s) for s in statuses]


@router.get("/{car_id}", response_model=CarResponse, summary="Get car by ID")
@require_authentication()
async def get_car(car_id: int, service: CarSvc, principal: CurrentPrincipal) -> CarResponse:
    car = await service.get_car(car_id)
    return CarResponse.model_validate(car)


@router.get(
    "/{car_id}/status",
    response_model=CarResponse,
    summary="Get car status",
    description="Read the current state of a car. Requires GetCarStatus.",
)
@require_permission(PermissionName.GET_CAR_STATUS)
async def get_car_status(
    car_id: int, service: CarSvc, principal: CurrentPrincipal
) -> CarResponse:
    car = await service.get_car(car_id)
    return CarResponse.model_validate(car)


@router.post(
    "",
    response_model=CarResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create car",
    description="Create a car. An unknown or missing status_id falls back to Stopped.",
)
@require_permission(PermissionName.MANAGE_CARS)
async def create_car(
    data: CarCreate, service: CarSvc, principal: CurrentPrincipal
) -> CarResponse:
    car = await service.create_car(data)
    return CarResponse.model_validate(car)


@router.put("/{car_id}", response_model=CarResponse, summary="Update car")
@require_permission(PermissionName.MANAGE_CARS)
async def update_car(
    car_id: int, data: CarUpdate, service: CarSvc, principal: CurrentPrincipal
) -> CarResponse:
    car = await service.update_car(car_id, data)
    return CarResponse.model_validate(car)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete car")
@require_permission(PermissionName.MANAGE_CARS)
async def delete_car(car_id: int, service: CarSvc, principal: CurrentPrincipal) -> None:
    await service.delete_car(car_id)


@router.post("/{car_id}/start", response_model=CarResponse, summary="Start car")
@require_permission(PermissionName.START_CAR)
async def start_car(car_id: int, service: CarSvc, principal: CurrentPrincipal) -> CarResponse:
    """Move a car to Running."""
    car = await service.start(car_id)
    return CarResponse.model_validate(car)


@router.post("/{car_id}/stop", response_model=CarResponse, summary="Stop car")
@require_permission(PermissionName.STOP_CAR)
async def stop_car(car_id: int, service: CarSvc, principal: CurrentPrincipal) -> CarResponse:
    """Move a car to Stopped."""
    car = await service.stop(car_id)
    return CarResponse.model_validate(car)

"""Car service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.core.errors import NotFoundError, ValidationError
from machine_emu.modules.cars.models import Car, CarState, CarStatus
from machine_emu.modules.cars.repos import CarRepo
from machine_emu.modules.cars.schemas import CarCreate, CarUpdate


logger = structlog.get_logger()


class CarService:
    """Service for car management and state transitions."""

    def __init__(self, repo: CarRepo) -> None:
        self.repo = repo

    async def list_cars(self) -> list[Car]:
        """List all cars."""
        return await self.repo.list_all()

    async def list_statuses(self) -> list[CarStatus]:
        """List all car states."""
        return await self.repo.list_statuses()

    async def get_car(self, car_id: int) -> Car:
        """Get a car by ID.

        Raises:
            NotFoundError: If car not found
        """
        car = await self.repo.get_by_id(car_id)
        if not car:
            raise NotFoundError("Car not found", resource="car", resource_id=str(car_id))
        return car

    async def create_car(self, data: CarCreate) -> Car:
        """Create a car. An unknown or missing status falls back to Stopped."""
        status = None
        if data.status_id is not None:
            status = await self.repo.get_status(data.status_id)
        if status is None:
            status = await self._state(CarState.STOPPED)

        car = await self.repo.create(Car(name=data.name, status_id=status.id))
        logger.info("car_created", car_id=car.id, status=status.status)
        return car

    async def update_car(self, car_id: int, data: CarUpdate) -> Car:
        """Partially update a car.

        Raises:
            NotFoundError: If car not found
            ValidationError: If ``status_id`` names no known state
        """
        car = await self.get_car(car_id)

        if data.name is not None:
            car.name = data.name

        if data.status_id is not None:
            status = await self.repo.get_status(data.status_id)
            if status is None:
                raise ValidationError(
                    "Unknown car status",
                    errors=[{"field": "status_id", "message": "No such status"}],
                )
            car.status_id = status.id

        return await self.repo.update(car)

    async def delete_car(self, car_id: int) -> None:
        """Delete a car.

        Raises:
            NotFoundError: If car not found
        """
        car = await self.get_car(car_id)
        await self.repo.delete(car)
        logger.info("car_deleted", car_id=car_id)

    async def start(self, car_id: int) -> Car:
        """Move a car to Running."""
        return await self._transition(car_id, CarState.RUNNING)

    async def stop(self, car_id: int) -> Car:
        """Move a car to Stopped."""
        return await self._transition(car_id, CarState.STOPPED)

    async def _transition(self, car_id: int, target: CarState) -> Car:
        car = await self.get_car(car_id)
        status = await self._state(target)
        car.status_id = status.id
        car = await self.repo.update(car)
        logger.info("car_state_changed", car_id=car_id, status=target.value)
        return car

    async def _state(self, state: CarState) -> CarStatus:
        status = await self.repo.get_status_by_name(state.value)
        if status is None:
            raise NotFoundError(
                f"{state.value} status not found",
                resource="car_status",
                resource_id=state.value,
            )
        return status


# Type alias for dependency injection
CarSvc = Annotated[CarService, Depends(CarService)]

"""Car repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from machine_emu.api.dependencies import DBSession
from machine_emu.modules.cars.models import Car, CarStatus


class CarRepository:
    """Repository for Car and CarStatus database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, car: Car) -> Car:
        """Create a new car."""
        self.session.add(car)
        await self.session.flush()
        return await self.reload(car.id)

    async def get_by_id(self, car_id: int) -> Car | None:
        """Get a car by ID with its status."""
        stmt = (
            select(Car)
            .where(Car.id == car_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Car]:
        """List all cars ordered by ID."""
        result = await self.session.execute(select(Car).order_by(Car.id))
        return list(result.scalars().all())

    async def list_statuses(self) -> list[CarStatus]:
        """List all car states."""
        result = await self.session.execute(select(CarStatus).order_by(CarStatus.id))
        return list(result.scalars().all())

    async def get_status(self, status_id: int) -> CarStatus | None:
        """Get a car state by ID."""
        return await self.session.get(CarStatus, status_id)

    async def get_status_by_name(self, status: str) -> CarStatus | None:
        """Get a car state by name."""
        result = await self.session.execute(
            select(CarStatus).where(CarStatus.status == status)
        )
        return result.scalar_one_or_none()

    async def update(self, car: Car) -> Car:
        """Flush pending changes to a car and reload it."""
        await self.session.flush()
        return await self.reload(car.id)

    async def delete(self, car: Car) -> None:
        """Delete a car."""
        await self.session.delete(car)
        await self.session.flush()

    async def reload(self, car_id: int) -> Car:
        """Re-read a car so its status relationship is current."""
        car = await self.get_by_id(car_id)
        if car is None:
            raise LookupError(f"car {car_id} vanished during reload")
        return car


# Type alias for dependency injection
CarRepo = Annotated[CarRepository, Depends(CarRepository)]

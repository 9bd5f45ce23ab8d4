"""Motorcycle service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.core.errors import NotFoundError, ValidationError
from machine_emu.modules.motorcycles.models import (
    Motorcycle,
    MotorcycleState,
    MotorcycleStatus,
)
from machine_emu.modules.motorcycles.repos import MotorcycleRepo
from machine_emu.modules.motorcycles.schemas import MotorcycleCreate, MotorcycleUpdate


logger = structlog.get_logger()


class MotorcycleService:
    """Service for motorcycle management and state transitions.

    States move Stopped -> Running -> Driving; ``stop`` is accepted from any
    state, ``drive`` only from Running.
    """

    def __init__(self, repo: MotorcycleRepo) -> None:
        self.repo = repo

    async def list_motorcycles(self) -> list[Motorcycle]:
        return await self.repo.list_all()

    async def list_statuses(self) -> list[MotorcycleStatus]:
        return await self.repo.list_statuses()

    async def get_motorcycle(self, motorcycle_id: int) -> Motorcycle:
        """Get a motorcycle by ID.

        Raises:
            NotFoundError: If motorcycle not found
        """
        motorcycle = await self.repo.get_by_id(motorcycle_id)
        if not motorcycle:
            raise NotFoundError(
                "Motorcycle not found",
                resource="motorcycle",
                resource_id=str(motorcycle_id),
            )
        return motorcycle

    async def create_motorcycle(self, data: MotorcycleCreate) -> Motorcycle:
        """Create a motorcycle. An unknown or missing status falls back to Stopped."""
        status = None
        if data.status_id is not None:
            status = await self.repo.get_status(data.status_id)
        if status is None:
            status = await self._state(MotorcycleState.STOPPED)

        motorcycle = await self.repo.create(
            Motorcycle(name=data.name, status_id=status.id)
        )
        logger.info("motorcycle_created", motorcycle_id=motorcycle.id, status=status.status)
        return motorcycle

    async def update_motorcycle(
        self, motorcycle_id: int, data: MotorcycleUpdate
    ) -> Motorcycle:
        """Partially update a motorcycle.

        Raises:
            NotFoundError: If motorcycle not found
            ValidationError: If ``status_id`` names no known state
        """
        motorcycle = await self.get_motorcycle(motorcycle_id)

        if data.name is not None:
            motorcycle.name = data.name

        if data.status_id is not None:
            status = await self.repo.get_status(data.status_id)
            if status is None:
                raise ValidationError(
                    "Unknown motorcycle status",
                    errors=[{"field": "status_id", "message": "No such status"}],
                )
            motorcycle.status_id = status.id

        return await self.repo.update(motorcycle)

    async def delete_motorcycle(self, motorcycle_id: int) -> None:
        motorcycle = await self.get_motorcycle(motorcycle_id)
        await self.repo.delete(motorcycle)
        logger.info("motorcycle_deleted", motorcycle_id=motorcycle_id)

    async def start(self, motorcycle_id: int) -> Motorcycle:
        """Move a motorcycle to Running."""
        motorcycle = await self.get_motorcycle(motorcycle_id)
        return await self._transition(motorcycle, MotorcycleState.RUNNING)

    async def stop(self, motorcycle_id: int) -> Motorcycle:
        """Move a motorcycle to Stopped."""
        motorcycle = await self.get_motorcycle(motorcycle_id)
        return await self._transition(motorcycle, MotorcycleState.STOPPED)

    async def drive(self, motorcycle_id: int) -> Motorcycle:
        """Move a running motorcycle to Driving.

        Raises:
            NotFoundError: If motorcycle not found
            ValidationError: If the motorcycle is not Running
        """
        motorcycle = await self.get_motorcycle(motorcycle_id)
        if motorcycle.status.status != MotorcycleState.RUNNING:
            raise ValidationError(
                "Motorcycle must be running before it can be driven",
                errors=[
                    {
                        "field": "status",
                        "message": f"Expected {MotorcycleState.RUNNING}, "
                        f"got {motorcycle.status.status}",
                    }
                ],
            )
        return await self._transition(motorcycle, MotorcycleState.DRIVING)

    async def _transition(
        self, motorcycle: Motorcycle, target: MotorcycleState
    ) -> Motorcycle:
        status = await self._state(target)
        motorcycle.status_id = status.id
        motorcycle = await self.repo.update(motorcycle)
        logger.info(
            "motorcycle_state_changed",
            motorcycle_id=motorcycle.id,
            status=target.value,
        )
        return motorcycle

    async def _state(self, state: MotorcycleState) -> MotorcycleStatus:
        status = await self.repo.get_status_by_name(state.value)
        if status is None:
            raise NotFoundError(
                f"{state.value} status not found",
                resource="motorcycle_status",
                resource_id=state.value,
            )
        return status


# Type alias for dependency injection
MotorcycleSvc = Annotated[MotorcycleService, Depends(MotorcycleService)]

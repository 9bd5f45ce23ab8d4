"""Motorcycle repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from machine_emu.api.dependencies import DBSession
from machine_emu.modules.motorcycles.models import Motorcycle, MotorcycleStatus


class MotorcycleRepository:
    """Repository for Motorcycle and MotorcycleStatus database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, motorcycle: Motorcycle) -> Motorcycle:
        self.session.add(motorcycle)
        await self.session.flush()
        return await self.reload(motorcycle.id)

    async def get_by_id(self, motorcycle_id: int) -> Motorcycle | None:
        stmt = (
            select(Motorcycle)
            .where(Motorcycle.id == motorcycle_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Motorcycle]:
        result = await self.session.execute(select(Motorcycle).order_by(Motorcycle.id))
        return list(result.scalars().all())

    async def list_statuses(self) -> list[MotorcycleStatus]:
        result = await self.session.execute(
            select(MotorcycleStatus).order_by(MotorcycleStatus.id)
        )
        return list(result.scalars().all())

    async def get_status(self, status_id: int) -> MotorcycleStatus | None:
        return await self.session.get(MotorcycleStatus, status_id)

    async def get_status_by_name(self, status: str) -> MotorcycleStatus | None:
        result = await self.session.execute(
            select(MotorcycleStatus).where(MotorcycleStatus.status == status)
        )
        return result.scalar_one_or_none()

    async def update(self, motorcycle: Motorcycle) -> Motorcycle:
        """Flush pending changes to a motorcycle and reload it."""
        await self.session.flush()
        return await self.reload(motorcycle.id)

    async def delete(self, motorcycle: Motorcycle) -> None:
        await self.session.delete(motorcycle)
        await self.session.flush()

    async def reload(self, motorcycle_id: int) -> Motorcycle:
        motorcycle = await self.get_by_id(motorcycle_id)
        if motorcycle is None:
            raise LookupError(f"motorcycle {motorcycle_id} vanished during reload")
        return motorcycle


# Type alias for dependency injection
MotorcycleRepo = Annotated[MotorcycleRepository, Depends(MotorcycleRepository)]

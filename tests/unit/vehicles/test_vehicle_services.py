"""Unit tests for vehicle state transitions."""

from unittest.mock import AsyncMock

import pytest

from machine_emu.core.errors import NotFoundError, ValidationError
from machine_emu.modules.cars.models import Car, CarState, CarStatus
from machine_emu.modules.cars.schemas import CarCreate, CarUpdate
from machine_emu.modules.cars.services import CarService
from machine_emu.modules.motorcycles.models import (
    Motorcycle,
    MotorcycleState,
    MotorcycleStatus,
)
from machine_emu.modules.motorcycles.services import MotorcycleService


pytestmark = pytest.mark.unit


MOTORCYCLE_STATUSES = {
    state.value: MotorcycleStatus(id=i, status=state.value)
    for i, state in enumerate(MotorcycleState, start=1)
}


def motorcycle_repo(current: MotorcycleState) -> AsyncMock:
    repo = AsyncMock()
    motorcycle = Motorcycle(id=1, name="Motorcycle A")
    motorcycle.status = MOTORCYCLE_STATUSES[current.value]
    motorcycle.status_id = motorcycle.status.id
    repo.get_by_id.return_value = motorcycle
    repo.get_status_by_name.side_effect = lambda name: MOTORCYCLE_STATUSES.get(name)
    repo.update.side_effect = lambda m: m
    return repo


class TestMotorcycleDrive:
    """drive is only allowed from Running."""

    async def test_drive_from_running(self):
        repo = motorcycle_repo(MotorcycleState.RUNNING)
        service = MotorcycleService(repo=repo)

        motorcycle = await service.drive(1)

        assert motorcycle.status_id == MOTORCYCLE_STATUSES["Driving"].id

    @pytest.mark.parametrize("state", [MotorcycleState.STOPPED, MotorcycleState.DRIVING])
    async def test_drive_from_other_states_fails(self, state):
        repo = motorcycle_repo(state)
        service = MotorcycleService(repo=repo)

        with pytest.raises(ValidationError) as exc_info:
            await service.drive(1)

        assert exc_info.value.details["errors"][0]["field"] == "status"
        repo.update.assert_not_awaited()

    async def test_stop_from_driving(self):
        repo = motorcycle_repo(MotorcycleState.DRIVING)
        service = MotorcycleService(repo=repo)

        motorcycle = await service.stop(1)

        assert motorcycle.status_id == MOTORCYCLE_STATUSES["Stopped"].id

    async def test_missing_motorcycle(self):
        repo = AsyncMock()
        repo.get_by_id.return_value = None
        service = MotorcycleService(repo=repo)

        with pytest.raises(NotFoundError):
            await service.start(7)


class TestCarStatusFallback:
    """Unknown status ids fall back on create and fail on update."""

    async def test_create_with_unknown_status_falls_back_to_stopped(self):
        stopped = CarStatus(id=1, status=CarState.STOPPED.value)
        repo = AsyncMock()
        repo.get_status.return_value = None
        repo.get_status_by_name.return_value = stopped
        repo.create.side_effect = lambda car: car
        service = CarService(repo=repo)

        car = await service.create_car(CarCreate(name="Car C", status_id=999))

        assert car.status_id == stopped.id
        repo.get_status_by_name.assert_awaited_once_with("Stopped")

    async def test_update_with_unknown_status_fails(self):
        repo = AsyncMock()
        repo.get_by_id.return_value = Car(id=1, name="Car A", status_id=1)
        repo.get_status.return_value = None
        service = CarService(repo=repo)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_car(1, CarUpdate(status_id=999))

        assert exc_info.value.details["errors"][0]["field"] == "status_id"
        repo.update.assert_not_awaited()

    async def test_missing_seed_status_is_reported(self):
        repo = AsyncMock()
        repo.get_by_id.return_value = Car(id=1, name="Car A", status_id=1)
        repo.get_status_by_name.return_value = None
        service = CarService(repo=repo)

        with pytest.raises(NotFoundError) as exc_info:
            await service.start(1)

        assert exc_info.value.details["resource"] == "car_status"

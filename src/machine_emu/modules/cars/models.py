"""Car database models."""

from enum import StrEnum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from machine_emu.core.constants import MAX_STATUS_LENGTH, MAX_VEHICLE_NAME_LENGTH
from machine_emu.core.database.base import Base, IdMixin, TimestampMixin


class CarState(StrEnum):
    """Status names seeded into ``car_statuses``."""

    STOPPED = "Stopped"
    RUNNING = "Running"


class CarStatus(Base, IdMixin):
    """Lookup table of car states."""

    __tablename__ = "car_statuses"

    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<CarStatus(id={self.id}, status={self.status})>"


class Car(Base, IdMixin, TimestampMixin):
    """A simulated car.

    Attributes:
        name: Display name
        status_id: Current state, see ``CarState``
    """

    __tablename__ = "cars"

    name: Mapped[str] = mapped_column(
        String(MAX_VEHICLE_NAME_LENGTH),
        nullable=False,
    )
    status_id: Mapped[int] = mapped_column(
        ForeignKey("car_statuses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    status: Mapped["CarStatus"] = relationship("CarStatus", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Car(id={self.id}, name={self.name}, status_id={self.status_id})>"

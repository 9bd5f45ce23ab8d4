"""Motorcycle database models."""

from enum import StrEnum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from machine_emu.core.constants import MAX_STATUS_LENGTH, MAX_VEHICLE_NAME_LENGTH
from machine_emu.core.database.base import Base, IdMixin, TimestampMixin


class MotorcycleState(StrEnum):
    """Status names seeded into ``motorcycle_statuses``."""

    STOPPED = "Stopped"
    RUNNING = "Running"
    DRIVING = "Driving"


class MotorcycleStatus(Base, IdMixin):
    """Lookup table of motorcycle states."""

    __tablename__ = "motorcycle_statuses"

    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<MotorcycleStatus(id={self.id}, status={self.status})>"


class Motorcycle(Base, IdMixin, TimestampMixin):
    """A simulated motorcycle."""

    __tablename__ = "motorcycles"

    name: Mapped[str] = mapped_column(
        String(MAX_VEHICLE_NAME_LENGTH),
        nullable=False,
    )
    status_id: Mapped[int] = mapped_column(
        ForeignKey("motorcycle_statuses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    status: Mapped["MotorcycleStatus"] = relationship("MotorcycleStatus", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Motorcycle(id={self.id}, name={self.name}, status_id={self.status_id})>"

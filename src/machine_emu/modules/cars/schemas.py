"""Pydantic schemas for cars."""

from pydantic import BaseModel, ConfigDict, Field

from machine_emu.core.constants import MAX_VEHICLE_NAME_LENGTH


class CarStatusResponse(BaseModel):
    """A car state."""

    id: int
    status: str

    model_config = ConfigDict(from_attributes=True)


class CarCreate(BaseModel):
    """Schema for creating a car. Unknown or missing status falls back to Stopped."""

    name: str = Field(..., min_length=1, max_length=MAX_VEHICLE_NAME_LENGTH)
    status_id: int | None = None


class CarUpdate(BaseModel):
    """Schema for partially updating a car."""

    name: str | None = Field(None, min_length=1, max_length=MAX_VEHICLE_NAME_LENGTH)
    status_id: int | None = None


class CarResponse(BaseModel):
    """Schema for car response data."""

    id: int
    name: str
    status: CarStatusResponse

    model_config = ConfigDict(from_attributes=True)

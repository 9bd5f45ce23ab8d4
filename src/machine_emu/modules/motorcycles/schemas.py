"""Pydantic schemas for motorcycles."""

from pydantic import BaseModel, ConfigDict, Field

from machine_emu.core.constants import MAX_VEHICLE_NAME_LENGTH


class MotorcycleStatusResponse(BaseModel):
    id: int
    status: str

    model_config = ConfigDict(from_attributes=True)


class MotorcycleCreate(BaseModel):
    """Schema for creating a motorcycle."""

    name: str = Field(..., min_length=1, max_length=MAX_VEHICLE_NAME_LENGTH)
    status_id: int | None = None


class MotorcycleUpdate(BaseModel):
    """Schema for partially updating a motorcycle."""

    name: str | None = Field(None, min_length=1, max_length=MAX_VEHICLE_NAME_LENGTH)
    status_id: int | None = None


class MotorcycleResponse(BaseModel):
    id: int
    name: str
    status: MotorcycleStatusResponse

    model_config = ConfigDict(from_attributes=True)

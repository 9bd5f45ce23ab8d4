"""Pydantic schemas for permission management."""

from pydantic import BaseModel, ConfigDict, Field

from machine_emu.core.constants import MAX_PERMISSION_NAME_LENGTH


class PermissionRef(BaseModel):
    """A permission as embedded in other resources."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PermissionCreate(BaseModel):
    """Schema for creating a permission."""

    name: str = Field(..., min_length=1, max_length=MAX_PERMISSION_NAME_LENGTH)


class PermissionUpdate(BaseModel):
    """Schema for renaming a permission."""

    name: str | None = Field(None, min_length=1, max_length=MAX_PERMISSION_NAME_LENGTH)


class PermissionResponse(PermissionRef):
    """Schema for permission response data.

    ``is_recognized`` is False for names the authorization guard never matches.
    """

    is_recognized: bool

"""Pydantic schemas for role management."""

from pydantic import BaseModel, ConfigDict, Field

from machine_emu.core.constants import MAX_ROLE_NAME_LENGTH
from machine_emu.modules.permissions.schemas import PermissionRef


class RoleRef(BaseModel):
    """A role as embedded in other resources."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class RoleCreate(BaseModel):
    """Schema for creating a role, optionally with its initial permissions."""

    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    permission_ids: list[int] | None = None


class RoleUpdate(BaseModel):
    """Schema for updating a role.

    Omitted fields are left unchanged. A supplied ``permission_ids`` list
    replaces the role's entire permission set; an empty list clears it.
    """

    name: str | None = Field(None, min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    permission_ids: list[int] | None = None


class RoleResponse(RoleRef):
    """Schema for role response data."""

    permissions: list[PermissionRef]

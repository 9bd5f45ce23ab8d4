"""Pydantic schemas for user operations."""

from pydantic import BaseModel, ConfigDict, Field

from machine_emu.core.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_USER_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from machine_emu.modules.roles.schemas import RoleRef


# ============================================================
# User Schemas
# ============================================================


class UserCreate(BaseModel):
    """Schema for creating a user, optionally with initial roles."""

    user_name: str = Field(..., min_length=1, max_length=MAX_USER_NAME_LENGTH)
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role_ids: list[int] | None = None


class UserUpdate(BaseModel):
    """Schema for updating a user.

    Omitted fields are left unchanged. A supplied ``role_ids`` list
    replaces the user's entire role set; an empty list clears it.
    """

    user_name: str | None = Field(None, min_length=1, max_length=MAX_USER_NAME_LENGTH)
    password: str | None = Field(
        None, min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role_ids: list[int] | None = None


class UserResponse(BaseModel):
    """Schema for user response data."""

    id: int
    user_name: str
    roles: list[RoleRef]

    model_config = ConfigDict(from_attributes=True)


# ============================================================
# Authentication Schemas
# ============================================================


class LoginRequest(BaseModel):
    """Schema for user name/password login."""

    user_name: str
    password: str


class LoginResponse(BaseModel):
    """Schema for a successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiration in seconds")
    permissions: list[str]


class RegisterRequest(BaseModel):
    """Schema for self-registration. New accounts hold no roles."""

    user_name: str = Field(..., min_length=1, max_length=MAX_USER_NAME_LENGTH)
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class RegisterResponse(BaseModel):
    """Schema for registration response."""

    id: int
    user_name: str

    model_config = ConfigDict(from_attributes=True)


class MeResponse(BaseModel):
    """Schema for the "who am I" response.

    ``permissions`` is the snapshot embedded in the presented token.
    ``roles`` reflects the store at request time.
    """

    id: int
    user_name: str
    roles: list[str]
    permissions: list[str]

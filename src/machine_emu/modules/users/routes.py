"""User management API routes.

Every route here requires the ManageUsers permission, declared once on
the module router. Authentication routes (login, register, me) live in
the auth module.
"""

from fastapi import status

from machine_emu.modules.users import router
from machine_emu.modules.users.schemas import UserCreate, UserResponse, UserUpdate
from machine_emu.modules.users.services import UserSvc


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="List all users with their role names.",
)
async def list_users(service: UserSvc) -> list[UserResponse]:
    """List users."""
    users = await service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by ID",
)
async def get_user(user_id: int, service: UserSvc) -> UserResponse:
    """Get user by ID."""
    user = await service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user. Optional role_ids are linked in the same request.",
)
async def create_user(data: UserCreate, service: UserSvc) -> UserResponse:
    """Create a user."""
    user = await service.create_user(data)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
    description="Partially update a user. A supplied role_ids list replaces all roles.",
)
async def update_user(user_id: int, data: UserUpdate, service: UserSvc) -> UserResponse:
    """Update user by ID."""
    user = await service.update_user(user_id, data)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user and all of its role links.",
)
async def delete_user(user_id: int, service: UserSvc) -> None:
    """Delete user by ID."""
    await service.delete_user(user_id)

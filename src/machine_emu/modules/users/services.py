"""User service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from machine_emu.core.auth.backend import hash_password
from machine_emu.core.errors import NotFoundError
from machine_emu.modules.users.models import User
from machine_emu.modules.users.repos import UserRepo
from machine_emu.modules.users.schemas import UserCreate, UserUpdate


logger = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Contains business logic for user CRUD and role membership. Role
    membership changes take effect for a user at their next login.
    """

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def list_users(self) -> list[User]:
        """List all users with their roles."""
        return await self.repo.list_all()

    async def get_user(self, user_id: int) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(user_id),
            )
        return user

    async def create_user(self, data: UserCreate) -> User:
        """Create a user, hashing the password and linking initial roles.

        Args:
            data: User creation data

        Returns:
            The created user

        Raises:
            ConflictError: If the user name is taken
            NotFoundError: If an initial role does not exist
        """
        await self.repo.ensure_name_available(data.user_name)

        user = User(
            user_name=data.user_name,
            password_hash=hash_password(data.password),
        )
        user = await self.repo.create(user)

        if data.role_ids:
            await self.repo.replace_roles(user.id, data.role_ids)
            user = await self.repo.reload(user.id)

        logger.info(
            "user_created",
            user_id=user.id,
            role_ids=[role.id for role in user.roles],
        )
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Partially update a user.

        Args:
            user_id: The user's ID
            data: Fields to change; ``role_ids`` replaces the whole role set

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user or a referenced role does not exist
            ConflictError: If the new user name is taken
        """
        user = await self.get_user(user_id)

        if data.user_name is not None and data.user_name != user.user_name:
            await self.repo.ensure_name_available(data.user_name, exclude_id=user_id)
            user.user_name = data.user_name

        if data.password is not None:
            user.password_hash = hash_password(data.password)

        if data.role_ids is not None:
            await self.repo.replace_roles(user_id, data.role_ids)

        user = await self.repo.update(user)
        logger.info("user_updated", user_id=user_id, roles_replaced=data.role_ids is not None)
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user and its role links.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_user(user_id)
        await self.repo.delete(user)
        logger.info("user_deleted", user_id=user_id)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]

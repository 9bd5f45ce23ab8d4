"""User repository for database operations."""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, select

from machine_emu.api.dependencies import DBSession
from machine_emu.core.database.helpers import ensure_ids_exist, flush_unique, unique_ids
from machine_emu.core.errors import ConflictError
from machine_emu.core.permissions.models import Role, UserRole
from machine_emu.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Owns the user's role links: callers replace them wholesale through
    ``replace_roles`` and never touch ``UserRole`` rows directly.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated

        Raises:
            ConflictError: If the user name is already taken
        """
        self.session.add(user)
        await flush_unique(
            self.session, resource="user", field="user_name", value=user.user_name
        )
        return await self.reload(user.id)

    async def get_by_id(self, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's ID

        Returns:
            User if found, None otherwise
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_name(self, user_name: str) -> User | None:
        """Get a user by exact user name.

        Args:
            user_name: The case-sensitive user name

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.user_name == user_name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure_name_available(
        self, user_name: str, exclude_id: int | None = None
    ) -> None:
        """Check that no other user holds ``user_name``.

        Raises:
            ConflictError: If the name is taken by a different user
        """
        existing = await self.get_by_user_name(user_name)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "User name already exists",
                error_code="user_exists",
                field="user_name",
                value=user_name,
            )

    async def list_all(self) -> list[User]:
        """List all users ordered by ID."""
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def replace_roles(self, user_id: int, role_ids: Iterable[int]) -> None:
        """Replace the user's whole role set.

        Unknown role IDs are rejected before any existing link is removed.

        Args:
            user_id: The user's ID
            role_ids: The complete new set of role IDs (may be empty)

        Raises:
            NotFoundError: If a role ID does not exist
        """
        ids = unique_ids(role_ids)
        await ensure_ids_exist(self.session, Role, ids, "role")

        await self.session.execute(delete(UserRole).where(UserRole.user_id == user_id))
        self.session.add_all(UserRole(user_id=user_id, role_id=role_id) for role_id in ids)
        await self.session.flush()

    async def update(self, user: User) -> User:
        """Flush pending changes to a user and reload it.

        Raises:
            ConflictError: If a renamed user collides with an existing name
        """
        await flush_unique(
            self.session, resource="user", field="user_name", value=user.user_name
        )
        return await self.reload(user.id)

    async def delete(self, user: User) -> None:
        """Delete a user together with its role links.

        Args:
            user: User instance to delete
        """
        await self.session.execute(delete(UserRole).where(UserRole.user_id == user.id))
        await self.session.delete(user)
        await self.session.flush()

    async def reload(self, user_id: int) -> User:
        """Re-read a user so its role collection reflects the latest links."""
        user = await self.get_by_id(user_id)
        if user is None:
            raise LookupError(f"user {user_id} vanished during reload")
        return user


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]

"""Permission resolution.

This module computes the effective permissions of a user from the
roles assigned to them. Permissions are never granted to a user
directly, only through role membership.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from machine_emu.core.permissions.models import Permission, Role, RolePermission, UserRole


class PermissionResolver:
    """Service for resolving a user's effective permissions.

    Reads the current store state on every call. Nothing is cached here;
    the only cached copy of a user's permissions is the one embedded in
    the access token at login.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_roles(self, user_id: int) -> list[Role]:
        """Get all roles assigned to a user.

        Args:
            user_id: The user's ID

        Returns:
            List of roles assigned to the user, ordered by ID
        """
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def resolve_roles(self, user_id: int) -> list[str]:
        """Get the names of all roles assigned to a user."""
        return [role.name for role in await self.get_user_roles(user_id)]

    async def resolve(self, user_id: int) -> set[str]:
        """Get the distinct union of permission names across the user's roles.

        Args:
            user_id: The user's ID

        Returns:
            Set of permission names. Empty if the user holds no roles.
        """
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(UserRole, UserRole.role_id == RolePermission.role_id)
            .where(UserRole.user_id == user_id)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

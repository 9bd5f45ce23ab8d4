"""Role repository for database operations."""

from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, func, select

from machine_emu.api.dependencies import DBSession
from machine_emu.core.database.helpers import ensure_ids_exist, flush_unique, unique_ids
from machine_emu.core.errors import ConflictError
from machine_emu.core.permissions.models import Permission, Role, RolePermission, UserRole


class RoleRepository:
    """Repository for Role database operations.

    Owns both join relations that reference a role: permission links are
    replaced wholesale, and deleting a role removes its permission and
    user links before the role row.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        """Create a new role.

        Raises:
            ConflictError: If the role name is already taken
        """
        self.session.add(role)
        await flush_unique(self.session, resource="role", field="name", value=role.name)
        return await self.reload(role.id)

    async def get_by_id(self, role_id: int) -> Role | None:
        """Get a role by ID with its permissions."""
        stmt = (
            select(Role)
            .where(Role.id == role_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by exact name."""
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def ensure_name_available(self, name: str, exclude_id: int | None = None) -> None:
        """Check that no other role holds ``name``.

        Raises:
            ConflictError: If the name is taken by a different role
        """
        existing = await self.get_by_name(name)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "Role name already exists",
                error_code="role_exists",
                field="name",
                value=name,
            )

    async def list_all(self) -> list[Role]:
        """List all roles ordered by ID."""
        result = await self.session.execute(select(Role).order_by(Role.id))
        return list(result.scalars().all())

    async def replace_permissions(
        self, role_id: int, permission_ids: Iterable[int]
    ) -> None:
        """Replace the role's whole permission set.

        Unknown permission IDs are rejected before any existing link is removed.

        Args:
            role_id: The role's ID
            permission_ids: The complete new set of permission IDs (may be empty)

        Raises:
            NotFoundError: If a permission ID does not exist
        """
        ids = unique_ids(permission_ids)
        await ensure_ids_exist(self.session, Permission, ids, "permission")

        await self.session.execute(
            delete(RolePermission).where(RolePermission.role_id == role_id)
        )
        self.session.add_all(
            RolePermission(role_id=role_id, permission_id=permission_id)
            for permission_id in ids
        )
        await self.session.flush()

    async def count_members(self, role_id: int) -> int:
        """Count the users holding a role."""
        stmt = select(func.count()).select_from(UserRole).where(UserRole.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def update(self, role: Role) -> Role:
        """Flush pending changes to a role and reload it.

        Raises:
            ConflictError: If a renamed role collides with an existing name
        """
        await flush_unique(self.session, resource="role", field="name", value=role.name)
        return await self.reload(role.id)

    async def delete(self, role: Role) -> None:
        """Delete a role together with its permission and user links."""
        await self.session.execute(
            delete(RolePermission).where(RolePermission.role_id == role.id)
        )
        await self.session.execute(delete(UserRole).where(UserRole.role_id == role.id))
        await self.session.delete(role)
        await self.session.flush()

    async def reload(self, role_id: int) -> Role:
        """Re-read a role so its permission collection reflects the latest links."""
        role = await self.get_by_id(role_id)
        if role is None:
            raise LookupError(f"role {role_id} vanished during reload")
        return role


# Type alias for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
